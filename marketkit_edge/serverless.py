"""
Event-style entry point for function platforms.

Accepts an API-gateway style event and returns the serialized envelope
(``isBase64Encoded``, ``statusCode``, ``headers``, ``body``). Each
invocation opens and closes its own HTTP client.
"""

import asyncio
import base64
from collections.abc import Mapping
from typing import Any

import httpx
import structlog

from .api.envelope import InboundRequest, ResponseEnvelope, error_response
from .api.router import GatewayServices, dispatch
from .core.config import get_settings
from .core.logging_config import configure_logging
from .services.blockchain import BlockchainRPCClient
from .services.marketkit import MarketKitClient

logger = structlog.get_logger()

_settings = get_settings()
configure_logging(_settings.log_level, _settings.environment)


def event_to_request(event: Mapping[str, Any]) -> InboundRequest:
    """Build an InboundRequest from an event dict.

    Query parameters are read from ``queryStringParameters`` or ``query``;
    a base64-flagged body is decoded to text.
    """
    query = event.get("queryStringParameters") or event.get("query") or {}

    body = event.get("body")
    if body is not None and event.get("isBase64Encoded"):
        body = base64.b64decode(body).decode("utf-8", errors="replace")

    return InboundRequest(
        path=event.get("path") or "/",
        query={str(key): str(value) for key, value in query.items()},
        body=body,
        method=event.get("httpMethod") or event.get("method") or "GET",
    )


async def handle_event(event: Mapping[str, Any]) -> ResponseEnvelope:
    """Dispatch one event with per-invocation upstream clients.

    A malformed event (bad base64 body, non-mapping query) is answered with
    the generic 500 envelope like any other unhandled error.
    """
    try:
        request = event_to_request(event)
    except Exception as e:
        logger.exception(
            "Malformed event",
            path=event.get("path"),
            error=str(e),
            error_type=type(e).__name__,
        )
        return error_response(500, "Internal Server Error")

    async with httpx.AsyncClient() as http_client:
        services = GatewayServices(
            marketkit=MarketKitClient(get_settings(), client=http_client),
            rpc=BlockchainRPCClient(client=http_client),
        )
        return await dispatch(request, services)


def handler(event: Mapping[str, Any], context: Any = None) -> dict[str, Any]:
    """Synchronous function-platform handler."""
    envelope = asyncio.run(handle_event(event))
    logger.info(
        "Event handled",
        path=event.get("path"),
        status_code=envelope.status_code,
    )
    return envelope.to_event()
