"""비교 화면 상태 (검색 → 필터/정렬 → 페이지)"""

from .client_cache import ClientSearchCache, search_cache_key
from .sample_catalog import generate_sample_products
from .state_machine import (
    PAGE_SIZE,
    SORT_OPTIONS,
    FilterCriteria,
    ResultStateMachine,
    ViewState,
    mark_best_deals,
    purchase_url,
    sort_products,
)
from .transport import HttpSearchTransport, SearchTransport

__all__ = [
    "PAGE_SIZE",
    "SORT_OPTIONS",
    "ClientSearchCache",
    "FilterCriteria",
    "HttpSearchTransport",
    "ResultStateMachine",
    "SearchTransport",
    "ViewState",
    "generate_sample_products",
    "mark_best_deals",
    "purchase_url",
    "search_cache_key",
    "sort_products",
]
