"""
Supported EVM chains and their public JSON-RPC endpoints.

The table is built once at import time and exposed read-only.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

from .exceptions import ValidationError

DEFAULT_CHAIN = "eth"


@dataclass(frozen=True)
class ChainConfig:
    """RPC configuration for a single chain."""

    name: str
    rpc_url: str


CHAINS: Mapping[str, ChainConfig] = MappingProxyType(
    {
        config.name: config
        for config in (
            ChainConfig("eth", "https://cloudflare-eth.com"),
            ChainConfig("bsc", "https://bsc-dataseed.binance.org"),
            ChainConfig("polygon", "https://polygon-rpc.com"),
            ChainConfig("avalanche", "https://api.avax.network/ext/bc/C/rpc"),
            ChainConfig("optimism", "https://mainnet.optimism.io"),
            ChainConfig("arbitrum", "https://arb1.arbitrum.io/rpc"),
        )
    }
)


def resolve_chain(name: str | None) -> ChainConfig:
    """
    Look up a chain by name, falling back to ``eth`` when none is given.

    Raises:
        ValidationError: If the chain is not in the table
    """
    chain = name or DEFAULT_CHAIN
    config = CHAINS.get(chain)
    if config is None:
        raise ValidationError(f"Unsupported blockchain: {chain}", chain=chain)
    return config
