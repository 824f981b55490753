"""Upstream clients: MarketKit market data and EVM JSON-RPC."""

from .blockchain import BlockchainRPCClient, build_rpc_request
from .marketkit import MarketKitClient

__all__ = [
    "BlockchainRPCClient",
    "MarketKitClient",
    "build_rpc_request",
]
