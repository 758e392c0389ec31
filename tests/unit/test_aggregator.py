"""통합 검색 Aggregator 유닛 테스트"""
import random
from unittest.mock import AsyncMock, MagicMock

import pytest

from conftest import FakeClient, FakeHttp, aliexpress_item, ebay_item, etsy_item, total_calls
from pricecompare.clients import AliExpressClient, EbayClient, EtsyClient
from pricecompare.core.exceptions import InvalidQueryException, ValidationError
from pricecompare.engine import SearchAggregator, SourceSearchService, combined_cache_key
from pricecompare.fallback import FallbackRegistry
from pricecompare.services.impl import PolicyFilter
from pricecompare.services.container import ServiceContainer


def _aggregator(clients, cache_service, test_settings, policy=None):
    fallbacks = FallbackRegistry(random.Random(0))
    sources = {
        name: SourceSearchService(client, cache_service, fallbacks, test_settings)
        for name, client in clients.items()
    }
    return SearchAggregator(sources, cache_service, policy or PolicyFilter(), test_settings)


def test_requires_all_sources(cache_service, test_settings):
    with pytest.raises(ValueError):
        SearchAggregator({}, cache_service, PolicyFilter(), test_settings)


class TestSearchAggregator:

    @pytest.mark.asyncio
    async def test_healthy_search(self, healthy_clients, cache_service, test_settings):
        """세 소스 모두 정상 → 소스별 상한 이내, restricted False"""
        aggregator = _aggregator(healthy_clients, cache_service, test_settings)

        response = await aggregator.search("laptop")

        assert len(response["ebay"]) == 10
        assert len(response["etsy"]) == 8
        assert len(response["aliexpress"]) == 8
        assert response["query"] == "laptop"
        assert response["restricted"] is False
        assert response["message"] is None
        assert response["cached"] is False
        assert response["timestamp"]
        assert cache_service.get(combined_cache_key("laptop")) is not None

    @pytest.mark.asyncio
    async def test_query_is_sanitized(self, healthy_clients, cache_service, test_settings):
        aggregator = _aggregator(healthy_clients, cache_service, test_settings)

        response = await aggregator.search("  <lap>top!  ")

        assert response["query"] == "laptop"
        assert healthy_clients["ebay"].calls == ["laptop"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("raw", ["a", "", "  ", "!!", None, 42])
    async def test_short_query_rejected(self, raw, healthy_clients, cache_service, test_settings):
        aggregator = _aggregator(healthy_clients, cache_service, test_settings)

        with pytest.raises(InvalidQueryException) as exc_info:
            await aggregator.search(raw)

        assert isinstance(exc_info.value, ValidationError)
        assert total_calls(healthy_clients) == 0

    @pytest.mark.asyncio
    async def test_restricted_query_short_circuits(self, healthy_clients, cache_service, test_settings):
        """차단 검색어는 업스트림/캐시 모두 건드리지 않음"""
        aggregator = _aggregator(healthy_clients, cache_service, test_settings)

        response = await aggregator.search("craft beer")

        assert response["restricted"] is True
        assert response["message"]
        assert response["ebay"] == response["etsy"] == response["aliexpress"] == []
        assert total_calls(healthy_clients) == 0
        assert len(cache_service) == 0

    @pytest.mark.asyncio
    async def test_repeat_served_from_combined_cache(self, healthy_clients, cache_service, test_settings):
        aggregator = _aggregator(healthy_clients, cache_service, test_settings)

        first = await aggregator.search("laptop")
        second = await aggregator.search("laptop")

        assert second["cached"] is True
        assert second["ebay"] == first["ebay"]
        assert total_calls(healthy_clients) == 3

    @pytest.mark.asyncio
    async def test_all_sources_failing(self, failing_clients, cache_service, clock, test_settings):
        """전부 실패해도 각 목록은 fallback으로 채워지고 짧은 TTL로 캐싱"""
        aggregator = _aggregator(failing_clients, cache_service, test_settings)

        response = await aggregator.search("phone")

        assert response["ebay"] and response["etsy"] and response["aliexpress"]
        assert all(item["itemId"].startswith("ebay-fallback-") for item in response["ebay"])
        assert all(item["listing_id"].startswith("etsy-fallback-") for item in response["etsy"])
        assert all(item["productId"].startswith("aliexpress-fallback-") for item in response["aliexpress"])

        clock.advance(test_settings.cache_fallback_ttl - 1)
        assert cache_service.get(combined_cache_key("phone")) is not None
        clock.advance(1)
        assert cache_service.get(combined_cache_key("phone")) is None

    @pytest.mark.asyncio
    async def test_one_failing_source_degrades_ttl(self, healthy_clients, cache_service, clock, test_settings):
        healthy_clients["etsy"] = FakeClient("etsy", error=RuntimeError("connection reset"))
        aggregator = _aggregator(healthy_clients, cache_service, test_settings)

        response = await aggregator.search("laptop")

        assert len(response["ebay"]) == 10
        assert len(response["etsy"]) == 6
        clock.advance(test_settings.cache_fallback_ttl)
        assert cache_service.get(combined_cache_key("laptop")) is None

    @pytest.mark.asyncio
    async def test_healthy_result_uses_default_ttl(self, healthy_clients, cache_service, clock, test_settings):
        aggregator = _aggregator(healthy_clients, cache_service, test_settings)

        await aggregator.search("laptop")
        clock.advance(test_settings.cache_fallback_ttl)

        assert cache_service.get(combined_cache_key("laptop")) is not None

    @pytest.mark.asyncio
    async def test_cached_fallback_slot_keeps_short_ttl(self, failing_clients, cache_service, clock, test_settings):
        """소스 캐시에 남은 fallback 결과로 만든 통합 응답도 degraded"""
        aggregator = _aggregator(failing_clients, cache_service, test_settings)
        await aggregator.search("phone")

        cache_service.delete(combined_cache_key("phone"))
        await aggregator.search("phone")
        assert total_calls(failing_clients) == 3

        clock.advance(test_settings.cache_fallback_ttl)
        assert cache_service.get(combined_cache_key("phone")) is None

    @pytest.mark.asyncio
    async def test_source_task_exception_filled_with_fallback(self, healthy_clients, cache_service, test_settings):
        """소스 검색 자체가 예외를 던져도 응답은 완성됨"""
        aggregator = _aggregator(healthy_clients, cache_service, test_settings)
        aggregator.sources["aliexpress"].search = AsyncMock(side_effect=RuntimeError("task crashed"))

        response = await aggregator.search("laptop")

        assert len(response["aliexpress"]) == 8
        assert response["aliexpress"][0]["productId"].startswith("aliexpress-fallback-")
        assert len(response["ebay"]) == 10

    @pytest.mark.asyncio
    async def test_custom_policy_terms(self, healthy_clients, cache_service, test_settings):
        policy = PolicyFilter(terms=["laptop"], message="blocked")
        aggregator = _aggregator(healthy_clients, cache_service, test_settings, policy=policy)

        response = await aggregator.search("Gaming Laptop")

        assert response["restricted"] is True
        assert response["message"] == "blocked"


@pytest.mark.asyncio
async def test_oversized_upstream_lists_bounded(cache_service, test_settings):
    """실제 클라이언트 경유 시 eBay 10 / Etsy 8 / AliExpress 8 이하"""
    http = FakeHttp(responses={
        "item_summary/search": {"itemSummaries": [ebay_item(f"v1|{i}|0") for i in range(30)]},
        "listings/active": {"results": [etsy_item(i) for i in range(30)]},
        "item_search_2": {"result": {"items": [aliexpress_item(str(i)) for i in range(20)]}},
    })
    tokens = MagicMock()
    tokens.get_token = AsyncMock(return_value="tok")
    clients = {
        "ebay": EbayClient(http, tokens, test_settings),
        "etsy": EtsyClient(http, test_settings),
        "aliexpress": AliExpressClient(http, test_settings),
    }
    container = ServiceContainer.build(test_settings, clients=clients, cache=cache_service)

    response = await container.aggregator.search("laptop")

    assert len(response["ebay"]) == 10
    assert len(response["etsy"]) == 8
    assert len(response["aliexpress"]) == 8
