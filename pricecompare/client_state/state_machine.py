"""Result State Machine - 비교 화면의 검색/필터/정렬/페이지 상태

상태: idle → loading → ready (실패 시 error를 거쳐 샘플 데이터로 ready 복귀)

보이는 목록(ResultView)은 전체 상품 → 필터 → 정렬 → 공개된 prefix 순서로
매번 새로 계산하며 기존 목록을 제자리에서 수정하지 않습니다.
"""

from __future__ import annotations

import random
import time
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Callable, Optional
from urllib.parse import quote

from pricecompare.core.logging import logger
from pricecompare.core.security import SecurityValidator
from pricecompare.normalizers import build_normalizers, normalize_combined
from pricecompare.schemas.product_schema import CanonicalProduct

from .client_cache import ClientSearchCache, search_cache_key
from .sample_catalog import generate_sample_products
from .transport import SearchTransport

PAGE_SIZE = 18  # 6행 × 3열

SORT_OPTIONS = ("relevance", "price-low", "price-high", "rating")

# 화면 컬럼 순서
STORE_COLUMNS = ("eBay", "AliExpress", "Etsy")

PURCHASE_SEARCH_URLS = {
    "eBay": "https://www.ebay.com/sch/i.html?_nkw=",
    "Etsy": "https://www.etsy.com/search?q=",
    "AliExpress": "https://www.aliexpress.com/wholesale?SearchText=",
}

SHORT_QUERY_MESSAGE = "Please enter at least 2 characters"
SEARCH_FAILED_MESSAGE = "Search failed. Using demo data..."


class ViewState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


@dataclass(frozen=True)
class FilterCriteria:
    """사이드바 필터

    Attributes:
        stores: 선택된 storeClass (비어 있으면 전체)
        min_rating: 최소 평점
        free_shipping: 배송 라벨에 "Free" 포함
        prime_shipping: 빠른 배송만
    """

    stores: frozenset[str] = field(default_factory=frozenset)
    min_rating: float = 0.0
    free_shipping: bool = False
    prime_shipping: bool = False

    def matches(self, product: CanonicalProduct) -> bool:
        if self.stores and product.store_class not in self.stores:
            return False
        if product.rating < self.min_rating:
            return False
        if self.free_shipping and "Free" not in product.shipping:
            return False
        if self.prime_shipping and not product.prime_shipping:
            return False
        return True


def best_deal_key(product: CanonicalProduct) -> str:
    """브랜드 + 상품명에서 첫 단어를 뺀 나머지"""
    return f"{product.brand} {' '.join(product.name.split(' ')[1:])}"


def mark_best_deals(products: list[CanonicalProduct]) -> list[CanonicalProduct]:
    """그룹(2개 이상) 안에서 최저가 상품만 isBestDeal로 표시한 새 목록"""
    groups: dict[str, list[CanonicalProduct]] = {}
    for product in products:
        groups.setdefault(best_deal_key(product), []).append(product)

    best_ids: set[str] = set()
    for group in groups.values():
        if len(group) > 1:
            lowest = min(p.price for p in group)
            best_ids.update(p.id for p in group if p.price == lowest)

    return [p.model_copy(update={"is_best_deal": p.id in best_ids}) for p in products]


def sort_products(products: list[CanonicalProduct], sort: str) -> list[CanonicalProduct]:
    if sort == "price-low":
        return sorted(products, key=lambda p: p.price)
    if sort == "price-high":
        return sorted(products, key=lambda p: p.price, reverse=True)
    if sort == "rating":
        return sorted(products, key=lambda p: p.rating, reverse=True)
    return list(products)


def purchase_url(product: CanonicalProduct) -> str:
    """스토어 검색 페이지 딥링크 (상품명으로 검색)"""
    base = PURCHASE_SEARCH_URLS.get(product.store, PURCHASE_SEARCH_URLS["AliExpress"])
    return base + quote(product.name, safe="!*'()")


class ResultStateMachine:
    """검색 결과 화면 상태

    - search 중 다시 search가 들어오면 무시 (큐잉/취소 없음)
    - 필터/정렬/카테고리 변경은 전체 상품에서 다시 계산하고 1페이지로 돌아감
    - load_more는 다음 PAGE_SIZE만큼 공개
    """

    def __init__(
        self,
        transport: SearchTransport,
        *,
        cache: Optional[ClientSearchCache] = None,
        rng: Optional[random.Random] = None,
        clock: Callable[[], float] = time.time,
        page_size: int = PAGE_SIZE,
    ):
        self.transport = transport
        self.cache = cache or ClientSearchCache()
        self.rng = rng or random.Random()
        self.clock = clock
        self.page_size = page_size
        self.normalizers = build_normalizers(self.rng)

        self.state = ViewState.IDLE
        self.history: list[ViewState] = [ViewState.IDLE]
        self.is_loading = False
        self.query = ""
        self.category = ""
        self.sort = "relevance"
        self.filters = FilterCriteria()
        self.restricted = False
        self.messages: list[str] = []

        self.all_products: list[CanonicalProduct] = []
        self.filtered_products: list[CanonicalProduct] = []
        self.page = 1

    # 상태 전이 ------------------------------------------------------------

    async def search(self, raw_query: Any) -> bool:
        """검색 실행

        Returns:
            새 결과를 반영했으면 True, 검증 실패/중복 요청으로 무시했으면 False
        """
        query = SecurityValidator.sanitize_query(raw_query)

        if len(query) < SecurityValidator.MIN_QUERY_LENGTH:
            self._notify(SHORT_QUERY_MESSAGE)
            return False

        # 진행 중이면 캐시 히트도 무시
        if self.is_loading:
            logger.debug(f"[CLIENT] Search dropped while loading: query='{query}'")
            return False

        self.category = ""
        key = search_cache_key(query, self.category)
        cached = self.cache.get(key)
        if cached is not None:
            logger.debug(f"[CLIENT] Using cached results: query='{query}'")
            self.query = query
            self._load(cached)
            return True

        self.is_loading = True
        self.query = query
        self._set_state(ViewState.LOADING)
        try:
            data = await self.transport.fetch(query)
            if not data:
                raise ValueError("No data received from API")
            self.cache.set(key, data)
            self._load(data)
        except Exception as e:
            logger.warning(f"[CLIENT] Search failed: {type(e).__name__}: {e}")
            self._set_state(ViewState.ERROR)
            self._notify(SEARCH_FAILED_MESSAGE)
            self._load_products(generate_sample_products(self.rng, self.clock))
        finally:
            self.is_loading = False
        return True

    def apply_filters(self, criteria: Optional[FilterCriteria] = None, **changes: Any) -> None:
        """필터 교체 또는 일부 변경 후 다시 계산

        예: `apply_filters(free_shipping=True)`, `apply_filters(stores={"ebay"})`
        """
        base = criteria or self.filters
        if "stores" in changes:
            changes["stores"] = frozenset(changes["stores"] or ())
        self.filters = replace(base, **changes)
        self._rebuild()

    def apply_sort(self, sort: str) -> None:
        if sort not in SORT_OPTIONS:
            raise ValueError(f"Unknown sort option: {sort}")
        self.sort = sort
        self._rebuild()

    def apply_category(self, category: Optional[str]) -> None:
        self.category = category or ""
        self._rebuild()

    def clear_filters(self) -> None:
        """배송 필터 해제, 최소 평점 1로 초기화 (스토어 선택은 유지)"""
        self.apply_filters(min_rating=1.0, free_shipping=False, prime_shipping=False)

    def load_more(self) -> list[CanonicalProduct]:
        """다음 페이지 공개

        Returns:
            새로 공개된 상품 (더 없으면 빈 목록)
        """
        start = self.page * self.page_size
        next_products = self.filtered_products[start:start + self.page_size]
        if not next_products:
            return []
        self.page += 1
        return next_products

    # 뷰 ------------------------------------------------------------------

    @property
    def displayed_products(self) -> list[CanonicalProduct]:
        return self.filtered_products[:self.page * self.page_size]

    @property
    def remaining_count(self) -> int:
        return len(self.filtered_products) - len(self.displayed_products)

    @property
    def view_more_visible(self) -> bool:
        return self.remaining_count > 0

    @property
    def view_more_label(self) -> str:
        return f"View More ({self.remaining_count} remaining)"

    @property
    def results_count_text(self) -> str:
        return f"Showing {len(self.displayed_products)} of {len(self.filtered_products)} products"

    @property
    def results_title(self) -> str:
        title = f'Results for "{self.query or "products"}"'
        if self.category:
            title += f" in {self.category}"
        return title

    @property
    def is_empty(self) -> bool:
        return not self.displayed_products

    @property
    def last_message(self) -> Optional[str]:
        return self.messages[-1] if self.messages else None

    def products_by_store(self) -> dict[str, list[CanonicalProduct]]:
        """공개된 상품을 스토어 컬럼별로 묶음 (eBay / AliExpress / Etsy)"""
        columns: dict[str, list[CanonicalProduct]] = {store: [] for store in STORE_COLUMNS}
        for product in self.displayed_products:
            columns.setdefault(product.store, []).append(product)
        return columns

    def purchase_url(self, product: CanonicalProduct) -> str:
        return purchase_url(product)

    # 내부 ----------------------------------------------------------------

    def _load(self, data: dict[str, Any]) -> None:
        if data.get("restricted"):
            self.restricted = True
            self._notify(data.get("message") or "This search is restricted")
            self._load_products([], use_samples=False)
            return

        self.restricted = False
        products = normalize_combined(data, normalizers=self.normalizers)
        logger.debug(f"[CLIENT] Converted {len(products)} products for '{self.query}'")
        self._load_products(products)

    def _load_products(self, products: list[CanonicalProduct], use_samples: bool = True) -> None:
        if not products and use_samples:
            logger.info("[CLIENT] No API products, using sample data")
            products = generate_sample_products(self.rng, self.clock)
        self.all_products = mark_best_deals(products)
        self._rebuild()
        self._set_state(ViewState.READY)

    def _rebuild(self) -> None:
        filtered = [
            p for p in self.all_products
            if self.filters.matches(p) and (not self.category or p.category == self.category)
        ]
        self.filtered_products = sort_products(filtered, self.sort)
        self.page = 1

    def _set_state(self, state: ViewState) -> None:
        self.state = state
        self.history.append(state)

    def _notify(self, message: str) -> None:
        self.messages.append(message)
