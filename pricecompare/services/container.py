"""서비스 컨테이너 - 프로세스 단위 의존성 묶음

lifespan에서 한 번 생성하여 `app.state.container`에 저장하고,
라우트는 `Depends`로 꺼내 씁니다. 테스트는 클라이언트만 바꿔 끼워 생성합니다.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Optional

from pricecompare.clients import (
    AliExpressClient,
    EbayClient,
    EtsyClient,
    MarketplaceClient,
    SharedHttpClient,
)
from pricecompare.core.config import Settings, settings as default_settings
from pricecompare.core.logging import logger
from pricecompare.engine import SearchAggregator, SourceSearchService
from pricecompare.fallback import FallbackRegistry
from pricecompare.services.impl import CacheService, PolicyFilter, TokenService


@dataclass
class ServiceContainer:
    config: Settings
    cache: CacheService
    http: Optional[SharedHttpClient]
    tokens: Optional[TokenService]
    policy: PolicyFilter
    fallbacks: FallbackRegistry
    sources: dict[str, SourceSearchService]
    aggregator: SearchAggregator

    @classmethod
    def build(
        cls,
        config: Optional[Settings] = None,
        *,
        clients: Optional[dict[str, MarketplaceClient]] = None,
        cache: Optional[CacheService] = None,
        policy: Optional[PolicyFilter] = None,
        rng: Optional[random.Random] = None,
    ) -> "ServiceContainer":
        """컨테이너 생성

        Args:
            config: 설정 (기본: 모듈 settings)
            clients: 소스 이름 → 클라이언트 (생략 시 실제 업스트림 클라이언트 생성)
            cache: 캐시 서비스 (생략 시 설정값으로 생성)
            policy: 정책 필터 (생략 시 resources에서 로드)
            rng: fallback 생성기용 난수 소스
        """
        config = config or default_settings
        cache = cache or CacheService(
            default_ttl=config.cache_ttl,
            check_period=config.cache_check_period,
        )

        http: Optional[SharedHttpClient] = None
        tokens: Optional[TokenService] = None
        if clients is None:
            http = SharedHttpClient(
                timeout_s=config.upstream_timeout_s,
                max_retries=config.upstream_max_retries,
                backoff_s=config.upstream_backoff_s,
            )
            tokens = TokenService(cache, http, config)
            clients = {
                "ebay": EbayClient(http, tokens, config),
                "etsy": EtsyClient(http, config),
                "aliexpress": AliExpressClient(http, config),
            }

        fallbacks = FallbackRegistry(rng)
        sources = {
            name: SourceSearchService(client, cache, fallbacks, config)
            for name, client in clients.items()
        }
        policy = policy or PolicyFilter()
        aggregator = SearchAggregator(sources, cache, policy, config)

        logger.info(f"[CONTAINER] Services ready: sources={list(sources)}")
        return cls(
            config=config,
            cache=cache,
            http=http,
            tokens=tokens,
            policy=policy,
            fallbacks=fallbacks,
            sources=sources,
            aggregator=aggregator,
        )

    def start(self) -> None:
        """백그라운드 작업 시작 (이벤트 루프 안에서 호출)"""
        self.cache.start_sweeper()

    async def aclose(self) -> None:
        await self.cache.stop_sweeper()
        if self.http is not None:
            await self.http.close()
