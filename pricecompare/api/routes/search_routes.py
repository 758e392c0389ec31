"""Search Routes - 통합 검색 및 소스별 검색

HTTP Layer는 검색어 기본값을 채우고 Engine Layer로 위임만 합니다.
검증 실패(ValidationError)는 앱 예외 핸들러에서 400으로 변환됩니다.
"""

from typing import Any, Optional

from fastapi import APIRouter, Depends, Query

from pricecompare.core.security import SecurityValidator
from pricecompare.engine import SearchAggregator, SourceSearchService
from pricecompare.api.dependencies import (
    get_aggregator,
    get_aliexpress_search,
    get_ebay_search,
    get_etsy_search,
)
from pricecompare.schemas.product_schema import CombinedSearchResponse

router = APIRouter(prefix="/api", tags=["search"])

# q가 비어 있을 때 라우트별 기본 검색어
DEFAULT_QUERIES = {
    "combined": "laptop",
    "ebay": "laptop",
    "etsy": "handmade",
    "aliexpress": "electronics",
}


async def _search_source(service: SourceSearchService, raw_query: str) -> list[dict[str, Any]]:
    query = SecurityValidator.clean_and_validate(raw_query)
    outcome = await service.search(query)
    return outcome.items


@router.get("/search", response_model=CombinedSearchResponse, response_model_exclude_none=True)
async def search_all(
    q: Optional[str] = Query(None, description="검색어"),
    aggregator: SearchAggregator = Depends(get_aggregator),
):
    """eBay · Etsy · AliExpress 통합 검색"""
    return await aggregator.search(q or DEFAULT_QUERIES["combined"])


@router.get("/ebay/search")
async def search_ebay(
    q: Optional[str] = Query(None, description="검색어"),
    service: SourceSearchService = Depends(get_ebay_search),
) -> list[dict[str, Any]]:
    return await _search_source(service, q or DEFAULT_QUERIES["ebay"])


@router.get("/etsy/search")
async def search_etsy(
    q: Optional[str] = Query(None, description="검색어"),
    service: SourceSearchService = Depends(get_etsy_search),
) -> list[dict[str, Any]]:
    return await _search_source(service, q or DEFAULT_QUERIES["etsy"])


@router.get("/aliexpress/search")
async def search_aliexpress(
    q: Optional[str] = Query(None, description="검색어"),
    service: SourceSearchService = Depends(get_aliexpress_search),
) -> list[dict[str, Any]]:
    return await _search_source(service, q or DEFAULT_QUERIES["aliexpress"])
