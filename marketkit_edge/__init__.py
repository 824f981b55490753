"""
MarketKit Edge Gateway.

Stateless aggregation layer over the MarketKit market-data API and public
EVM JSON-RPC endpoints.
"""

__version__ = "0.1.0"
