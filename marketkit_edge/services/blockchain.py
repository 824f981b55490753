"""
EVM JSON-RPC forwarding.

One fixed-shape request per call, no batching and no retries. The JSON-RPC
response body is returned untouched, including any ``error`` member.
"""

from collections.abc import Sequence
from typing import Any

import httpx
import structlog

logger = structlog.get_logger()

JSONRPC_VERSION = "2.0"
JSONRPC_REQUEST_ID = 1


def build_rpc_request(method: str, params: Sequence[Any]) -> dict[str, Any]:
    """Build a JSON-RPC 2.0 request envelope with the constant id ``1``."""
    return {
        "jsonrpc": JSONRPC_VERSION,
        "id": JSONRPC_REQUEST_ID,
        "method": method,
        "params": list(params),
    }


class BlockchainRPCClient:
    """Posts Ethereum JSON-RPC calls to a chain's public endpoint."""

    def __init__(self, client: httpx.AsyncClient):
        """Wrap a shared HTTP client; the caller owns its lifetime."""
        self.client = client

    async def call(self, rpc_url: str, method: str, params: Sequence[Any]) -> Any:
        """
        Send one JSON-RPC request and return the decoded response body.

        Raises:
            httpx.HTTPError: On transport failure or a non-2xx status
            ValueError: If the body is not valid JSON
        """
        payload = build_rpc_request(method, params)
        response = await self.client.post(rpc_url, json=payload)
        response.raise_for_status()

        logger.debug("RPC call completed", rpc_url=rpc_url, method=method)
        return response.json()

    async def get_balance(self, rpc_url: str, address: str) -> Any:
        """``eth_getBalance`` at the latest block."""
        return await self.call(rpc_url, "eth_getBalance", [address, "latest"])

    async def broadcast_transaction(self, rpc_url: str, raw_tx: str) -> Any:
        """``eth_sendRawTransaction`` with a signed, hex-encoded transaction."""
        return await self.call(rpc_url, "eth_sendRawTransaction", [raw_tx])
