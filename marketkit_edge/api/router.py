"""
Route table and request dispatch.

Routes are tried in declaration order; the first match wins. Errors are
classified here as the last boundary: AppError subclasses keep their status
and message, anything else becomes a generic 500 and is only logged.
"""

import re
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

import structlog

from ..core.exceptions import AppError, NotFoundError
from ..services.blockchain import BlockchainRPCClient
from ..services.marketkit import MarketKitClient
from .addresses import handle_addresses
from .coins import handle_coin_details
from .envelope import InboundRequest, ResponseEnvelope, error_response
from .market import handle_market_overview

logger = structlog.get_logger()


@dataclass(frozen=True)
class GatewayServices:
    """Upstream clients shared by the handlers of one process."""

    marketkit: MarketKitClient
    rpc: BlockchainRPCClient


Handler = Callable[
    [InboundRequest, GatewayServices, dict[str, str]], Awaitable[ResponseEnvelope]
]


@dataclass(frozen=True)
class Route:
    """A path pattern bound to a handler.

    ``pattern`` is matched at the start of the path; named groups become
    path parameters.
    """

    name: str
    pattern: re.Pattern[str]
    handler: Handler

    def match(self, path: str) -> dict[str, str] | None:
        found = self.pattern.match(path)
        if found is None:
            return None
        return found.groupdict()


async def _market_overview(
    request: InboundRequest, services: GatewayServices, params: dict[str, str]
) -> ResponseEnvelope:
    return await handle_market_overview(services.marketkit)


async def _coin_details(
    request: InboundRequest, services: GatewayServices, params: dict[str, str]
) -> ResponseEnvelope:
    return await handle_coin_details(services.marketkit, params["coin_uid"])


async def _addresses(
    request: InboundRequest, services: GatewayServices, params: dict[str, str]
) -> ResponseEnvelope:
    return await handle_addresses(request, services.rpc)


ROUTES: tuple[Route, ...] = (
    Route(
        "market_overview",
        re.compile(r"/api/v1/market/overview"),
        _market_overview,
    ),
    Route(
        "coin_details",
        re.compile(r"/api/v1/coins/(?P<coin_uid>.+)/details$"),
        _coin_details,
    ),
    Route(
        "addresses",
        re.compile(r"/api/v1/addresses"),
        _addresses,
    ),
)


def resolve(path: str) -> tuple[Route, dict[str, str]]:
    """
    Find the first route matching ``path``.

    Raises:
        NotFoundError: If no route matches
    """
    for route in ROUTES:
        params = route.match(path)
        if params is not None:
            return route, params
    raise NotFoundError("Not Found")


async def dispatch(
    request: InboundRequest, services: GatewayServices
) -> ResponseEnvelope:
    """Route a request and convert every failure into a JSON error envelope."""
    route_name: str | None = None
    try:
        route, params = resolve(request.path)
        route_name = route.name
        return await route.handler(request, services, params)

    except AppError as e:
        log = logger.error if e.status_code >= 500 else logger.warning
        log(
            "Request failed",
            **{
                "path": request.path,
                "method": request.method,
                "route": route_name,
                **e.to_dict(),
            },
        )
        return error_response(e.status_code, e.message)

    except Exception as e:
        logger.exception(
            "Unhandled error",
            path=request.path,
            method=request.method,
            route=route_name,
            error=str(e),
            error_type=type(e).__name__,
        )
        return error_response(500, "Internal Server Error")
