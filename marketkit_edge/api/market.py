"""
Market overview endpoint.

Fetches top coins and top movers concurrently. Either call may fail on its
own; its field then falls back to an empty default and the response is
still 200.
"""

from typing import Any

import structlog

from ..core.concurrency import settle_all
from ..services.marketkit import MarketKitClient
from .envelope import ResponseEnvelope, create_response, degraded_headers

logger = structlog.get_logger()

TOP_COINS_LIMIT = 100
TOP_COIN_FIELDS = ("uid", "name", "code", "price", "price_change_24h")


def project_top_coin(coin: dict[str, Any]) -> dict[str, Any]:
    """Keep only the overview fields of a coin entry."""
    return {key: coin.get(key) for key in TOP_COIN_FIELDS}


def empty_top_movers() -> dict[str, list[Any]]:
    return {"gainers": [], "losers": []}


async def _fetch_top_coins(client: MarketKitClient) -> list[dict[str, Any]]:
    coins = await client.get_markets_overview()
    return [project_top_coin(coin) for coin in coins[:TOP_COINS_LIMIT]]


async def handle_market_overview(client: MarketKitClient) -> ResponseEnvelope:
    """Build ``{topCoins, topMovers}`` from two independent upstream calls."""
    top_coins, top_movers = await settle_all(
        _fetch_top_coins(client),
        client.get_top_movers(),
    )

    degraded = []
    if not top_coins.ok:
        degraded.append("topCoins")
        logger.warning(
            "Top coins fetch failed, using empty list",
            error=str(top_coins.error),
            error_type=type(top_coins.error).__name__,
        )
    if not top_movers.ok:
        degraded.append("topMovers")
        logger.warning(
            "Top movers fetch failed, using empty movers",
            error=str(top_movers.error),
            error_type=type(top_movers.error).__name__,
        )

    response_data = {
        "topCoins": top_coins.value_or([]),
        "topMovers": top_movers.value_or(empty_top_movers()),
    }

    logger.info(
        "Market overview assembled",
        top_coins_count=len(response_data["topCoins"]),
        degraded=degraded,
    )

    return create_response(200, response_data, headers=degraded_headers(degraded))
