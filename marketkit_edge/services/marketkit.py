"""
MarketKit (Horizontal Systems) market data client.

Thin async wrapper over the REST endpoints used by the aggregate handlers.
Each method performs one GET and returns the decoded JSON payload; any
non-200 status raises ExternalServiceError so the caller can settle it.
"""

from typing import Any

import httpx
import structlog

from ..core.config import (
    CHART_INTERVAL,
    DEFAULT_CURRENCY,
    MARKETKIT_API_KEY_HEADER,
    MARKETKIT_BASE_URL,
    Settings,
)
from ..core.exceptions import ExternalServiceError

logger = structlog.get_logger()


class MarketKitClient:
    """
    Market data client for the MarketKit v1 API.

    Provides:
    - Markets overview (top coins)
    - Top movers (gainers / losers)
    - Coin info, price chart and exchange tickers
    """

    def __init__(
        self,
        settings: Settings,
        client: httpx.AsyncClient,
        base_url: str = MARKETKIT_BASE_URL,
    ):
        """Initialize with API key and an HTTP client.

        Args:
            settings: Application settings with the MarketKit API key
            client: Shared HTTP client; the caller owns its lifetime
            base_url: MarketKit API root
        """
        self.api_key = settings.marketkit_api_key
        self.base_url = base_url.rstrip("/")
        self.client = client

        if not self.api_key:
            logger.warning("MarketKit API key not configured")

    async def _get(self, endpoint: str, params: dict[str, str]) -> Any:
        response = await self.client.get(
            f"{self.base_url}{endpoint}",
            params=params,
            headers={MARKETKIT_API_KEY_HEADER: self.api_key},
        )

        if response.status_code != 200:
            raise ExternalServiceError(
                f"MarketKit API error: {response.status_code}",
                service="marketkit",
                endpoint=endpoint,
                status=response.status_code,
            )

        return response.json()

    async def get_markets_overview(self) -> list[dict[str, Any]]:
        """Top coins by market cap, in upstream order."""
        return await self._get("/markets/overview", {"currency": DEFAULT_CURRENCY})  # type: ignore[no-any-return]

    async def get_top_movers(self) -> dict[str, Any]:
        """Top gainers and losers, passed through as returned."""
        return await self._get("/coins/top-movers", {"currency": DEFAULT_CURRENCY})  # type: ignore[no-any-return]

    async def get_coin_info(self, coin_uid: str) -> dict[str, Any]:
        """Coin metadata (``meta``) and market data (``market_data``)."""
        return await self._get(f"/coins/{coin_uid}", {"currency": DEFAULT_CURRENCY})  # type: ignore[no-any-return]

    async def get_coin_chart(self, coin_uid: str) -> list[dict[str, Any]]:
        """Daily price points with ``timestamp`` and ``price`` keys."""
        return await self._get(  # type: ignore[no-any-return]
            "/charts",
            {
                "coin_uid": coin_uid,
                "currency": DEFAULT_CURRENCY,
                "interval": CHART_INTERVAL,
            },
        )

    async def get_coin_tickers(self, coin_uid: str) -> dict[str, Any]:
        """Exchange tickers under the ``tickers`` key."""
        return await self._get(  # type: ignore[no-any-return]
            f"/coins/{coin_uid}/tickers", {"currency": DEFAULT_CURRENCY}
        )
