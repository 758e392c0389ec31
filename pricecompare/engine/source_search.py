"""Source Search - 소스 하나에 대한 캐시 → 업스트림 → fallback 파이프라인

per-source 라우트와 통합 검색(SearchAggregator)이 공통으로 사용합니다.
"""

import time
from typing import Any, Optional

from pricecompare.clients.base import MarketplaceClient
from pricecompare.core.config import Settings, settings as default_settings
from pricecompare.core.exceptions import PriceCompareException
from pricecompare.core.logging import logger
from pricecompare.fallback.generators import FallbackRegistry
from pricecompare.services.impl.cache_service import CacheService

from .result import SourceOutcome

# 빈 목록을 실패로 간주하는 소스
EMPTY_IS_FAILURE = frozenset({"aliexpress"})


def source_cache_key(source: str, query: str) -> str:
    return f"{source}:{query}"


class SourceSearchService:
    """소스별 검색 실행기

    - 캐시 키 `<source>:<query>` 먼저 확인
    - 성공 시 enhance된 결과를 기본 TTL로 캐싱
    - 예외(또는 AliExpress 빈 결과) 시 fallback 생성 후 짧은 TTL로 캐싱
    """

    def __init__(
        self,
        client: MarketplaceClient,
        cache_service: CacheService,
        fallbacks: FallbackRegistry,
        config: Optional[Settings] = None,
    ):
        if client is None:
            raise ValueError("client must not be None")
        if cache_service is None:
            raise ValueError("cache_service must not be None")

        self.client = client
        self.source = client.source
        self.cache = cache_service
        self.fallbacks = fallbacks
        self.config = config or default_settings

    async def search(self, query: str) -> SourceOutcome:
        """검색 실행 (예외를 던지지 않음)

        Args:
            query: 정제/검증된 검색어

        Returns:
            SourceOutcome: LIVE / CACHE_HIT / FALLBACK 중 하나
        """
        key = source_cache_key(self.source, query)
        cached = self.cache.get(key)
        if cached is not None:
            logger.info(f"[{self.source.upper()}] Serving cached results: query='{query}'")
            return SourceOutcome.from_cache(
                self.source, query, cached["items"], from_fallback=cached.get("fallback", False)
            )

        started = time.perf_counter()
        try:
            raw_items = await self.client.search(query)
        except PriceCompareException as e:
            return self._fallback(query, started, e.message)
        except Exception as e:
            logger.error(
                f"[{self.source.upper()}] Unexpected error: {type(e).__name__}: {e}",
                exc_info=True,
            )
            return self._fallback(query, started, str(e))

        if not raw_items and self.source in EMPTY_IS_FAILURE:
            return self._fallback(query, started, "no products returned")

        items = [self.client.enhance(item) for item in raw_items]
        self.cache.set(key, {"items": items, "fallback": False}, ttl=self.config.cache_ttl)
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(f"[{self.source.upper()}] API success: {len(items)} products for '{query}' ({elapsed_ms:.0f}ms)")
        return SourceOutcome.live(self.source, query, items, elapsed_ms)

    def fallback_items(self, query: str) -> list[dict[str, Any]]:
        return self.fallbacks.generate(self.source, query)

    def _fallback(self, query: str, started: float, reason: str) -> SourceOutcome:
        logger.warning(f"[{self.source.upper()}] Using fallback data: {reason}")
        items = self.fallback_items(query)
        self.cache.set(
            source_cache_key(self.source, query),
            {"items": items, "fallback": True},
            ttl=self.config.cache_fallback_ttl,
        )
        elapsed_ms = (time.perf_counter() - started) * 1000
        return SourceOutcome.fallback(self.source, query, items, elapsed_ms, reason)
