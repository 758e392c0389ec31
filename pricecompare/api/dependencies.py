"""FastAPI 의존성 - app.state.container에서 서비스 꺼내기"""
from fastapi import Depends, Request

from pricecompare.engine import SearchAggregator, SourceSearchService
from pricecompare.services.container import ServiceContainer


def get_container(request: Request) -> ServiceContainer:
    return request.app.state.container


def get_aggregator(container: ServiceContainer = Depends(get_container)) -> SearchAggregator:
    return container.aggregator


def get_ebay_search(container: ServiceContainer = Depends(get_container)) -> SourceSearchService:
    return container.sources["ebay"]


def get_etsy_search(container: ServiceContainer = Depends(get_container)) -> SourceSearchService:
    return container.sources["etsy"]


def get_aliexpress_search(container: ServiceContainer = Depends(get_container)) -> SourceSearchService:
    return container.sources["aliexpress"]
