"""Search Aggregator - 통합 검색 진입점

1. 검색어 정제/검증
2. 정책 필터 (차단 시 즉시 반환, 업스트림/캐시 접근 없음)
3. 통합 캐시 조회 (`combined:<query>`)
4. 세 소스 동시 검색 (실패 슬롯은 fallback)
5. 통합 결과 캐싱 (하나라도 degraded면 짧은 TTL)
"""

import asyncio
from datetime import datetime, timezone
from typing import Any, Optional

from pricecompare.core.config import Settings, settings as default_settings
from pricecompare.core.logging import logger
from pricecompare.core.security import SecurityValidator
from pricecompare.schemas.product_schema import CombinedSearchResponse
from pricecompare.services.impl.cache_service import CacheService
from pricecompare.services.impl.policy_filter import PolicyFilter

from .result import SourceOutcome
from .source_search import SourceSearchService

SOURCE_ORDER = ("ebay", "etsy", "aliexpress")


def combined_cache_key(query: str) -> str:
    return f"combined:{query}"


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


class SearchAggregator:
    """세 마켓플레이스 결과를 하나의 응답으로 합치는 오케스트레이터"""

    def __init__(
        self,
        sources: dict[str, SourceSearchService],
        cache_service: CacheService,
        policy: PolicyFilter,
        config: Optional[Settings] = None,
    ):
        missing = [name for name in SOURCE_ORDER if name not in sources]
        if missing:
            raise ValueError(f"missing source search services: {missing}")

        self.sources = sources
        self.cache = cache_service
        self.policy = policy
        self.config = config or default_settings

    async def search(self, raw_query: Any) -> dict[str, Any]:
        """통합 검색 실행

        Args:
            raw_query: 사용자가 입력한 검색어 (정제 전)

        Returns:
            dict: CombinedSearchResponse 형태
                {"ebay": [...], "etsy": [...], "aliexpress": [...], "query": str,
                 "restricted": bool, "message": Optional[str], "timestamp": str, "cached": bool}

        Raises:
            ValidationError: 정제 후 검색어가 2자 미만
        """
        query = SecurityValidator.clean_and_validate(raw_query)

        if self.policy.is_restricted(query):
            logger.info(f"[AGGREGATOR] Restricted query blocked: term='{self.policy.matched_term(query)}'")
            return self.restricted_response(query)

        key = combined_cache_key(query)
        cached = self.cache.get(key)
        if cached is not None:
            logger.info(f"[AGGREGATOR] Serving cached combined results: query='{query}'")
            return {**cached, "cached": True}

        outcomes = await self._gather(query)
        degraded = any(outcome.is_degraded for outcome in outcomes.values())

        response = CombinedSearchResponse(
            ebay=outcomes["ebay"].items,
            etsy=outcomes["etsy"].items,
            aliexpress=outcomes["aliexpress"].items,
            query=query,
            timestamp=_timestamp(),
        ).model_dump()

        ttl = self.config.cache_fallback_ttl if degraded else self.config.cache_ttl
        self.cache.set(key, response, ttl=ttl)

        logger.info(
            f"[AGGREGATOR] Search complete: '{query}' - "
            f"eBay:{len(response['ebay'])} Etsy:{len(response['etsy'])} "
            f"AliExpress:{len(response['aliexpress'])} (degraded={degraded})"
        )
        return response

    def restricted_response(self, query: str) -> dict[str, Any]:
        return CombinedSearchResponse(
            query=query,
            restricted=True,
            message=self.policy.message,
            timestamp=_timestamp(),
        ).model_dump()

    async def _gather(self, query: str) -> dict[str, SourceOutcome]:
        results = await asyncio.gather(
            *(self.sources[name].search(query) for name in SOURCE_ORDER),
            return_exceptions=True,
        )

        outcomes: dict[str, SourceOutcome] = {}
        for name, result in zip(SOURCE_ORDER, results):
            if isinstance(result, BaseException):
                if isinstance(result, asyncio.CancelledError):
                    raise result
                logger.error(f"[AGGREGATOR] {name} task failed: {type(result).__name__}: {result}")
                service = self.sources[name]
                result = SourceOutcome.fallback(
                    name, query, service.fallback_items(query), 0.0, str(result)
                )
            outcomes[name] = result
        return outcomes
