"""
Gateway request handling.

    api/
    ├── envelope.py    # InboundRequest, ResponseEnvelope, create_response
    ├── router.py      # Route table and dispatch
    ├── market.py      # /api/v1/market/overview
    ├── coins.py       # /api/v1/coins/{coin_uid}/details
    └── addresses.py   # /api/v1/addresses/{address}/{action}
"""

from .envelope import InboundRequest, ResponseEnvelope, create_response
from .router import ROUTES, GatewayServices, dispatch

__all__ = [
    "GatewayServices",
    "InboundRequest",
    "ROUTES",
    "ResponseEnvelope",
    "create_response",
    "dispatch",
]
