"""
HTTP surface tests using FastAPI TestClient.

Upstream clients are replaced on app.state so no network is touched.
"""

from unittest.mock import AsyncMock, Mock, patch

import pytest
from fastapi.testclient import TestClient

from marketkit_edge.api.router import GatewayServices
from marketkit_edge.main import create_app
from marketkit_edge.services.blockchain import BlockchainRPCClient
from marketkit_edge.services.marketkit import MarketKitClient


@pytest.fixture
def services():
    marketkit = Mock()
    marketkit.get_markets_overview = AsyncMock(
        return_value=[{"uid": "bitcoin", "name": "Bitcoin", "code": "BTC", "price": "1", "price_change_24h": "2", "rank": 1}]
    )
    marketkit.get_top_movers = AsyncMock(side_effect=Exception("upstream down"))
    marketkit.get_coin_info = AsyncMock(return_value={"meta": {"name": "Bitcoin"}, "market_data": {}})
    marketkit.get_coin_chart = AsyncMock(return_value=[{"timestamp": 1, "price": "2"}])
    marketkit.get_coin_tickers = AsyncMock(return_value={"tickers": []})

    rpc = Mock()
    rpc.get_balance = AsyncMock(return_value={"jsonrpc": "2.0", "id": 1, "result": "0x10"})
    rpc.broadcast_transaction = AsyncMock(return_value={"jsonrpc": "2.0", "id": 1, "result": "0xhash"})

    return GatewayServices(marketkit=marketkit, rpc=rpc)


@pytest.fixture
def client(services):
    """Create test client with mocked upstream services"""
    app = create_app()
    app.state.services = services
    return TestClient(app)


class TestGatewayRoutes:
    """Test routes end to end through FastAPI"""

    def test_market_overview(self, client):
        """Test overview with a failed movers call"""
        response = client.get("/api/v1/market/overview")

        assert response.status_code == 200
        assert response.headers["content-type"] == "application/json; charset=utf-8"
        assert response.headers["x-degraded-fields"] == "topMovers"
        assert response.json() == {
            "topCoins": [
                {"uid": "bitcoin", "name": "Bitcoin", "code": "BTC", "price": "1", "price_change_24h": "2"}
            ],
            "topMovers": {"gainers": [], "losers": []},
        }

    def test_coin_details(self, client, services):
        """Test coin details route"""
        response = client.get("/api/v1/coins/bitcoin/details")

        assert response.status_code == 200
        assert response.json()["chartData"] == [[1, "2"]]
        services.marketkit.get_coin_info.assert_awaited_once_with("bitcoin")

    def test_balance(self, client, services):
        """Test balance query with chain parameter"""
        response = client.get("/api/v1/addresses/0xABC/balance?blockchain=avalanche")

        assert response.status_code == 200
        assert response.json()["result"] == "0x10"
        services.rpc.get_balance.assert_awaited_once_with(
            "https://api.avax.network/ext/bc/C/rpc", "0xABC"
        )

    def test_broadcast_body(self, client, services):
        """Test POST body is forwarded as the raw transaction"""
        response = client.post(
            "/api/v1/addresses/0xABC/broadcast", content="0xf86c"
        )

        assert response.status_code == 200
        services.rpc.broadcast_transaction.assert_awaited_once_with(
            "https://cloudflare-eth.com", "0xf86c"
        )

    def test_broadcast_without_body(self, client, services):
        """Test empty broadcast body is a 400"""
        response = client.post("/api/v1/addresses/0xABC/broadcast")

        assert response.status_code == 400
        services.rpc.broadcast_transaction.assert_not_called()

    def test_unsupported_chain(self, client):
        """Test unknown chain is a 400"""
        response = client.get("/api/v1/addresses/0xABC/balance?blockchain=xyz")

        assert response.status_code == 400
        assert response.json() == {"error": "Unsupported blockchain: xyz"}

    @pytest.mark.parametrize("path", ["/", "/docs", "/api/v1/unknown"])
    def test_not_found(self, client, path):
        """Test unknown paths, including framework defaults, are 404"""
        response = client.get(path)

        assert response.status_code == 404
        assert response.json() == {"error": "Not Found"}

    def test_any_method(self, client):
        """Test routes accept any method"""
        response = client.delete("/api/v1/market/overview")

        assert response.status_code == 200


class TestServiceWiring:
    """Test upstream clients are available however the app is hosted"""

    def test_without_lifespan(self):
        """Test requests work when the host never runs the lifespan"""
        app = create_app()
        client = TestClient(app)

        response = client.get("/api/v1/unknown")

        assert response.status_code == 404
        assert response.headers["content-type"] == "application/json; charset=utf-8"
        assert response.json() == {"error": "Not Found"}
        assert isinstance(app.state.services, GatewayServices)

    def test_lifespan_builds_and_releases_services(self):
        """Test lifespan creates real clients and clears them on shutdown"""
        app = create_app()

        with TestClient(app) as client:
            services = client.app.state.services
            response = client.get("/api/v1/unknown")

            assert response.status_code == 404
            assert response.json() == {"error": "Not Found"}
            assert isinstance(services.marketkit, MarketKitClient)
            assert isinstance(services.rpc, BlockchainRPCClient)
            assert services.marketkit.client is services.rpc.client

        assert app.state.services is None
        assert app.state.http_client is None

    def test_adaptation_failure_is_json_500(self, client):
        """Test errors before dispatch still produce the generic JSON 500"""
        with patch(
            "marketkit_edge.main.get_services", side_effect=RuntimeError("boom")
        ):
            response = client.get("/api/v1/market/overview")

        assert response.status_code == 500
        assert response.headers["content-type"] == "application/json; charset=utf-8"
        assert response.json() == {"error": "Internal Server Error"}
