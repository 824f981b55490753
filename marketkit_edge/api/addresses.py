"""
Address endpoint: balance lookups and raw transaction broadcast.

Expected path: /api/v1/addresses/{address}/{action}?blockchain={chain}
"""

from dataclasses import dataclass
from typing import Any

import structlog

from ..core.chains import ChainConfig, resolve_chain
from ..core.exceptions import BlockchainRPCError, ValidationError
from ..services.blockchain import BlockchainRPCClient
from .envelope import InboundRequest, ResponseEnvelope, create_response

logger = structlog.get_logger()

ADDRESS_SEGMENT = 4
ACTION_SEGMENT = 5
SUPPORTED_ACTIONS = ("balance", "broadcast")


@dataclass(frozen=True)
class AddressPath:
    """Positional parameters of an address request path."""

    address: str
    action: str

    @classmethod
    def parse(cls, path: str) -> "AddressPath":
        """
        Split ``path`` on ``/`` and pick the address and action segments.

        Raises:
            ValidationError: If the path has fewer than six segments
        """
        parts = path.split("/")
        if len(parts) <= ACTION_SEGMENT:
            raise ValidationError("Invalid address request", segments=len(parts))
        return cls(address=parts[ADDRESS_SEGMENT], action=parts[ACTION_SEGMENT])


async def _forward(
    rpc_client: BlockchainRPCClient,
    chain: ChainConfig,
    action: str,
    address: str,
    raw_tx: str | None,
) -> Any:
    try:
        if action == "balance":
            return await rpc_client.get_balance(chain.rpc_url, address)
        return await rpc_client.broadcast_transaction(chain.rpc_url, raw_tx or "")
    except Exception as e:
        logger.error(
            "RPC request failed",
            chain=chain.name,
            action=action,
            error=str(e),
            error_type=type(e).__name__,
        )
        raise BlockchainRPCError(
            "Blockchain RPC request failed", chain=chain.name, action=action
        ) from e


async def handle_addresses(
    request: InboundRequest, rpc_client: BlockchainRPCClient
) -> ResponseEnvelope:
    """Validate the request and forward one JSON-RPC call to the chosen chain."""
    target = AddressPath.parse(request.path)
    chain = resolve_chain(request.query.get("blockchain"))

    raw_tx = None
    if target.action == "broadcast":
        raw_tx = request.body
        if not raw_tx or not raw_tx.strip():
            raise ValidationError(
                "Missing raw transaction in body", chain=chain.name
            )
    elif target.action not in SUPPORTED_ACTIONS:
        raise ValidationError(
            f"Invalid action: {target.action}", action=target.action
        )

    logger.info(
        "Forwarding address request",
        chain=chain.name,
        action=target.action,
        address=target.address,
    )

    result = await _forward(rpc_client, chain, target.action, target.address, raw_tx)
    return create_response(200, result)
