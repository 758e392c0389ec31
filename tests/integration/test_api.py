"""HTTP API 통합 테스트 (업스트림은 Fake 클라이언트로 대체)"""
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from conftest import FakeClient, total_calls
from pricecompare.app import create_app
from pricecompare.services.container import ServiceContainer


def _client(test_settings, clients, cache_service, **kwargs) -> TestClient:
    container = ServiceContainer.build(test_settings, clients=clients, cache=cache_service)
    return TestClient(create_app(config=test_settings, container=container), **kwargs)


@pytest.fixture
def api(test_settings, healthy_clients, cache_service):
    with _client(test_settings, healthy_clients, cache_service) as client:
        yield client


class TestCombinedSearch:

    def test_laptop_search(self, api, healthy_clients):
        response = api.get("/api/search", params={"q": "laptop"})

        assert response.status_code == 200
        body = response.json()
        assert len(body["ebay"]) <= 10
        assert len(body["etsy"]) <= 8
        assert len(body["aliexpress"]) <= 8
        assert body["ebay"] and body["etsy"] and body["aliexpress"]
        assert body["query"] == "laptop"
        assert body["restricted"] is False
        assert body["cached"] is False
        assert "message" not in body
        assert total_calls(healthy_clients) == 3

    def test_default_query(self, api, healthy_clients):
        response = api.get("/api/search")

        assert response.status_code == 200
        assert response.json()["query"] == "laptop"
        assert healthy_clients["ebay"].calls == ["laptop"]

    def test_repeat_is_cached(self, api, healthy_clients):
        api.get("/api/search", params={"q": "laptop"})
        second = api.get("/api/search", params={"q": "laptop"})

        assert second.json()["cached"] is True
        assert total_calls(healthy_clients) == 3

    def test_restricted_query(self, api, healthy_clients):
        response = api.get("/api/search", params={"q": "red wine"})

        assert response.status_code == 200
        body = response.json()
        assert body["restricted"] is True
        assert body["message"]
        assert body["ebay"] == body["etsy"] == body["aliexpress"] == []
        assert total_calls(healthy_clients) == 0

    @pytest.mark.parametrize("query", ["a", "!!", "  x  "])
    def test_short_query_is_400(self, api, query):
        response = api.get("/api/search", params={"q": query})

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "Search query must be at least 2 characters"
        assert body["timestamp"]

    def test_all_sources_failing(self, test_settings, failing_clients, cache_service):
        with _client(test_settings, failing_clients, cache_service) as client:
            body = client.get("/api/search", params={"q": "phone"}).json()

        assert len(body["ebay"]) == 6
        assert len(body["etsy"]) == 6
        assert len(body["aliexpress"]) == 8
        assert body["ebay"][0]["itemId"].startswith("ebay-fallback-")

    def test_unexpected_error_is_500(self, test_settings, healthy_clients, cache_service):
        container = ServiceContainer.build(test_settings, clients=healthy_clients, cache=cache_service)
        container.aggregator.search = AsyncMock(side_effect=RuntimeError("boom"))
        app = create_app(config=test_settings, container=container)

        with TestClient(app, raise_server_exceptions=False) as client:
            response = client.get("/api/search", params={"q": "laptop"})

        assert response.status_code == 500
        assert response.json()["error"] == "Internal server error"


class TestSourceRoutes:

    @pytest.mark.parametrize("source, default", [
        ("ebay", "laptop"),
        ("etsy", "handmade"),
        ("aliexpress", "electronics"),
    ])
    def test_default_queries(self, api, healthy_clients, source, default):
        response = api.get(f"/api/{source}/search")

        assert response.status_code == 200
        assert isinstance(response.json(), list)
        assert healthy_clients[source].calls == [default]

    def test_enhanced_items(self, api):
        items = api.get("/api/etsy/search", params={"q": "mug"}).json()

        assert len(items) == 8
        assert all(item["productUrl"] for item in items)

    def test_failing_source_serves_fallback(self, test_settings, healthy_clients, cache_service):
        healthy_clients["aliexpress"] = FakeClient("aliexpress", [])
        with _client(test_settings, healthy_clients, cache_service) as client:
            items = client.get("/api/aliexpress/search", params={"q": "phone"}).json()

        assert len(items) == 8
        assert all(item["productId"].startswith("aliexpress-fallback-") for item in items)

    def test_short_query_is_400(self, api):
        response = api.get("/api/ebay/search", params={"q": "z"})
        assert response.status_code == 400
        assert "error" in response.json()


class TestHealthAndErrors:

    def test_health(self, api):
        api.get("/api/search", params={"q": "laptop"})
        api.get("/api/search", params={"q": "laptop"})

        response = api.get("/api/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "OK"
        assert body["environment"] == "test"
        assert set(body["cacheStats"]) == {"hits", "misses", "keys"}
        assert body["cacheStats"]["hits"] >= 1

    def test_health_degraded_without_sweeper(self, test_settings, healthy_clients, cache_service):
        """lifespan 없이 띄우면 sweeper가 없어 degraded"""
        container = ServiceContainer.build(test_settings, clients=healthy_clients, cache=cache_service)
        client = TestClient(create_app(config=test_settings, container=container))

        body = client.get("/api/health").json()

        assert body["status"] == "degraded"

    def test_root_banner(self, api):
        body = api.get("/").json()
        assert body["docs"] == "/docs"
        assert body["version"]

    def test_unknown_endpoint(self, api):
        response = api.get("/api/nope")

        assert response.status_code == 404
        assert response.json()["error"] == "Endpoint not found"
        assert response.json()["timestamp"]
