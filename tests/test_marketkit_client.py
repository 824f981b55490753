"""
Unit tests for MarketKitClient.

Tests URL, query and header construction with a mocked HTTP client.
"""

from unittest.mock import AsyncMock, Mock

import pytest

from marketkit_edge.core.exceptions import ExternalServiceError
from marketkit_edge.services.marketkit import MarketKitClient

BASE = "https://api.horizontalsystems.xyz/v1"


# ===== Fixtures =====


@pytest.fixture
def mock_settings():
    """Mock Settings"""
    settings = Mock()
    settings.marketkit_api_key = "test_api_key"
    return settings


@pytest.fixture
def http_client():
    """Mock httpx.AsyncClient returning a 200 JSON response"""
    client = AsyncMock()
    response = Mock()
    response.status_code = 200
    response.json.return_value = {"ok": True}
    client.get = AsyncMock(return_value=response)
    return client


@pytest.fixture
def marketkit(mock_settings, http_client):
    return MarketKitClient(mock_settings, client=http_client)


def _call_args(http_client):
    args, kwargs = http_client.get.call_args
    return args[0], kwargs["params"], kwargs["headers"]


# ===== Endpoint Tests =====


class TestEndpoints:
    """Test each endpoint builds the expected request"""

    @pytest.mark.asyncio
    async def test_markets_overview(self, marketkit, http_client):
        """Test markets overview request"""
        result = await marketkit.get_markets_overview()

        url, params, headers = _call_args(http_client)
        assert url == f"{BASE}/markets/overview"
        assert params == {"currency": "usd"}
        assert headers == {"api_key": "test_api_key"}
        assert result == {"ok": True}

    @pytest.mark.asyncio
    async def test_top_movers(self, marketkit, http_client):
        """Test top movers request"""
        await marketkit.get_top_movers()

        url, params, _ = _call_args(http_client)
        assert url == f"{BASE}/coins/top-movers"
        assert params == {"currency": "usd"}

    @pytest.mark.asyncio
    async def test_coin_info(self, marketkit, http_client):
        """Test coin info request embeds the uid in the path"""
        await marketkit.get_coin_info("bitcoin")

        url, params, _ = _call_args(http_client)
        assert url == f"{BASE}/coins/bitcoin"
        assert params == {"currency": "usd"}

    @pytest.mark.asyncio
    async def test_coin_chart(self, marketkit, http_client):
        """Test chart request uses a daily interval"""
        await marketkit.get_coin_chart("ethereum")

        url, params, _ = _call_args(http_client)
        assert url == f"{BASE}/charts"
        assert params == {
            "coin_uid": "ethereum",
            "currency": "usd",
            "interval": "1d",
        }

    @pytest.mark.asyncio
    async def test_coin_tickers(self, marketkit, http_client):
        """Test tickers request"""
        await marketkit.get_coin_tickers("solana")

        url, params, _ = _call_args(http_client)
        assert url == f"{BASE}/coins/solana/tickers"
        assert params == {"currency": "usd"}


# ===== Error Handling Tests =====


class TestErrors:
    """Test upstream error handling"""

    @pytest.mark.asyncio
    async def test_non_200_raises(self, marketkit, http_client):
        """Test non-200 status raises ExternalServiceError"""
        response = Mock()
        response.status_code = 429
        http_client.get = AsyncMock(return_value=response)

        with pytest.raises(ExternalServiceError) as exc_info:
            await marketkit.get_top_movers()

        assert "MarketKit API error: 429" in str(exc_info.value)
        assert exc_info.value.context["service"] == "marketkit"
        assert exc_info.value.context["endpoint"] == "/coins/top-movers"

    @pytest.mark.asyncio
    async def test_transport_error_propagates(self, marketkit, http_client):
        """Test network errors reach the caller unchanged"""
        http_client.get = AsyncMock(side_effect=Exception("Connection error"))

        with pytest.raises(Exception) as exc_info:
            await marketkit.get_markets_overview()

        assert "Connection error" in str(exc_info.value)


# ===== Lifecycle Tests =====


class TestLifecycle:
    """Test client wiring"""

    def test_uses_injected_client(self, marketkit, http_client):
        """Test the shared client is used as given"""
        assert marketkit.client is http_client

    def test_trailing_slash_trimmed(self, mock_settings, http_client):
        """Test base URL is normalized"""
        client = MarketKitClient(
            mock_settings, client=http_client, base_url="https://mk.test/v1/"
        )

        assert client.base_url == "https://mk.test/v1"
