"""헬스 체크 엔드포인트"""
from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from pricecompare import __version__
from pricecompare.api.dependencies import get_container
from pricecompare.schemas.product_schema import CacheStats, HealthResponse
from pricecompare.services.container import ServiceContainer

router = APIRouter(tags=["health"])


@router.get("/api/health", response_model=HealthResponse)
async def health_check(container: ServiceContainer = Depends(get_container)):
    """
    헬스 체크 엔드포인트

    - 서버 상태
    - 실행 환경
    - 캐시 통계 (hits / misses / keys)
    """
    cache_service = container.cache
    status = "OK" if cache_service.health_check() else "degraded"
    return HealthResponse(
        status=status,
        timestamp=datetime.now(timezone.utc),
        environment=container.config.environment,
        cache_stats=CacheStats(**cache_service.stats()),
    )


@router.get("/")
async def root():
    """루트 엔드포인트"""
    return {
        "service": "PriceCompare - eBay · Etsy · AliExpress",
        "version": __version__,
        "docs": "/docs",
    }
