"""
FastAPI application entry point for the MarketKit Edge Gateway.

Stateless: every request is handled independently. A single catch-all route
hands the request to the gateway route table, which owns route priority,
404s and error masking.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import httpx
import structlog
from fastapi import FastAPI, Request, Response

from . import __version__
from .api.envelope import InboundRequest, error_response
from .api.router import GatewayServices, dispatch
from .core.config import get_settings
from .core.logging_config import configure_logging
from .services.blockchain import BlockchainRPCClient
from .services.marketkit import MarketKitClient

logger = structlog.get_logger()

ALL_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "HEAD"]


def get_services(app: FastAPI) -> GatewayServices:
    """Return the app's upstream clients, building them on first use.

    Hosts that skip the lifespan still get working services this way.
    """
    services: GatewayServices | None = getattr(app.state, "services", None)
    if services is None:
        http_client = httpx.AsyncClient()
        services = GatewayServices(
            marketkit=MarketKitClient(get_settings(), client=http_client),
            rpc=BlockchainRPCClient(client=http_client),
        )
        app.state.http_client = http_client
        app.state.services = services
    return services


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Share one HTTP client between the upstream clients for the app's lifetime."""
    settings = get_settings()

    logger.info("Starting MarketKit Edge Gateway", environment=settings.environment)

    get_services(app)

    try:
        yield
    finally:
        http_client: httpx.AsyncClient | None = getattr(app.state, "http_client", None)
        if http_client is not None:
            await http_client.aclose()
            logger.info("HTTP client closed")
        app.state.http_client = None
        app.state.services = None


async def to_inbound_request(request: Request) -> InboundRequest:
    """Describe a Starlette request as an InboundRequest."""
    raw_body = await request.body()
    return InboundRequest(
        path=request.url.path,
        query=dict(request.query_params),
        body=raw_body.decode("utf-8", errors="replace") if raw_body else None,
        method=request.method,
    )


def create_app() -> FastAPI:
    """Create and configure FastAPI application."""
    settings = get_settings()
    configure_logging(settings.log_level, settings.environment)

    app = FastAPI(
        title="MarketKit Edge Gateway",
        description="Market data and EVM RPC aggregation",
        version=__version__,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        lifespan=lifespan,
    )

    @app.api_route("/{full_path:path}", methods=ALL_METHODS)
    async def gateway(request: Request, full_path: str) -> Response:
        try:
            inbound = await to_inbound_request(request)
            services = get_services(request.app)
        except Exception as e:
            logger.exception(
                "Request adaptation failed",
                path=request.url.path,
                error=str(e),
                error_type=type(e).__name__,
            )
            return error_response(500, "Internal Server Error").to_response()

        envelope = await dispatch(inbound, services)
        return envelope.to_response()

    return app


# Create app instance
app = create_app()

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "marketkit_edge.main:app",
        host="0.0.0.0",  # nosec B104 - Required for Docker container
        port=8000,
        reload=get_settings().is_development,
        log_config=None,  # Use structlog configuration
    )
