"""
Coin details endpoint.

Three concurrent MarketKit calls (info, chart, tickers). Each output field
is populated or null independently of the others.
"""

from typing import Any

import structlog

from ..core.concurrency import Settled, settle_all
from ..services.marketkit import MarketKitClient
from .envelope import ResponseEnvelope, create_response, degraded_headers

logger = structlog.get_logger()


def project_chart_point(point: dict[str, Any]) -> list[Any]:
    """Chart point as a ``[timestamp, price]`` pair."""
    return [point.get("timestamp"), point.get("price")]


def project_ticker(ticker: dict[str, Any]) -> dict[str, Any]:
    return {
        "exchangeName": ticker.get("market_name"),
        "pair": f"{ticker.get('base')}/{ticker.get('target')}",
        "volume": ticker.get("volume"),
    }


async def _fetch_info(client: MarketKitClient, coin_uid: str) -> tuple[Any, Any]:
    payload = await client.get_coin_info(coin_uid)
    return payload.get("meta"), payload.get("market_data")


async def _fetch_chart(client: MarketKitClient, coin_uid: str) -> list[list[Any]]:
    points = await client.get_coin_chart(coin_uid)
    return [project_chart_point(point) for point in points]


async def _fetch_tickers(
    client: MarketKitClient, coin_uid: str
) -> list[dict[str, Any]]:
    payload = await client.get_coin_tickers(coin_uid)
    return [project_ticker(ticker) for ticker in payload["tickers"]]


def _log_failure(coin_uid: str, part: str, result: Settled[Any]) -> None:
    logger.warning(
        "Coin details part unavailable",
        coin_uid=coin_uid,
        part=part,
        error=str(result.error),
        error_type=type(result.error).__name__,
    )


async def handle_coin_details(
    client: MarketKitClient, coin_uid: str
) -> ResponseEnvelope:
    """Build ``{info, marketData, chartData, tickers}`` for one coin."""
    info, chart, tickers = await settle_all(
        _fetch_info(client, coin_uid),
        _fetch_chart(client, coin_uid),
        _fetch_tickers(client, coin_uid),
    )

    degraded = []
    if info.ok:
        meta, market_data = info.value
    else:
        meta, market_data = None, None
        degraded.extend(["info", "marketData"])
        _log_failure(coin_uid, "info", info)
    if not chart.ok:
        degraded.append("chartData")
        _log_failure(coin_uid, "chart", chart)
    if not tickers.ok:
        degraded.append("tickers")
        _log_failure(coin_uid, "tickers", tickers)

    response_data = {
        "info": meta,
        "marketData": market_data,
        "chartData": chart.value_or(None),
        "tickers": tickers.value_or(None),
    }

    logger.info("Coin details assembled", coin_uid=coin_uid, degraded=degraded)

    return create_response(200, response_data, headers=degraded_headers(degraded))
