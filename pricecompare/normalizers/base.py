"""Normalizer 공통 로직

- 가격 문자열 파싱 (선행 숫자 토큰 추출)
- 키워드 기반 카테고리 추론 (순서대로, 첫 일치 우선)
- 정가 추정 및 할인율 계산
"""

from __future__ import annotations

import random
import re
from typing import Any, Optional

from pricecompare.core.logging import logger
from pricecompare.schemas.product_schema import STORES, CanonicalProduct
from pricecompare.utils.resource_loader import load_category_rules

_NUMERIC_TOKEN = re.compile(r"[\d.]+")
_INTEGER_TOKEN = re.compile(r"\d+")

# 할인율이 이 값 이하이면 0으로 표시 (노이즈 제거)
DISCOUNT_NOISE_THRESHOLD = 5


def parse_price(value: Any) -> Optional[float]:
    """가격 값 파싱

    숫자면 그대로, 문자열이면 첫 번째 숫자 토큰을 사용합니다.
    ("US $12.34" → 12.34). 파싱 불가하면 None.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value) if value >= 0 else None
    if isinstance(value, str):
        match = _NUMERIC_TOKEN.search(value)
        if not match:
            return None
        try:
            return float(match.group(0))
        except ValueError:
            return None
    return None


def parse_int(value: Any) -> Optional[int]:
    """정수 파싱 ("25%" → 25)"""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    if isinstance(value, str):
        match = _INTEGER_TOKEN.search(value)
        return int(match.group(0)) if match else None
    return None


def round2(value: float) -> float:
    return round(float(value), 2)


def compute_discount(price: float, original_price: float) -> int:
    """(1 - price/original) × 100 반올림, 노이즈 임계값 이하면 0"""
    if original_price <= 0:
        return 0
    discount = round((1 - price / original_price) * 100)
    return discount if discount > DISCOUNT_NOISE_THRESHOLD else 0


def canonical_id(source: str, native_id: Any) -> str:
    """<source>-<native-id> (fallback id처럼 이미 접두사가 있으면 그대로)"""
    native = str(native_id)
    prefix = f"{source}-"
    return native if native.startswith(prefix) else f"{prefix}{native}"


class CategoryClassifier:
    """제목 키워드 → 카테고리 (규칙 순서대로 검사, 첫 일치 우선)"""

    def __init__(self, rules: list[tuple[str, tuple[str, ...]]], default: str):
        self.rules = rules
        self.default = default

    @classmethod
    def for_source(cls, source: str) -> "CategoryClassifier":
        config = load_category_rules(source)
        return cls(config["rules"], config["default"])

    def classify(self, title: Optional[str]) -> str:
        lowered = (title or "").lower()
        for category, keywords in self.rules:
            if any(keyword in lowered for keyword in keywords):
                return category
        return self.default


class BaseNormalizer:
    """소스별 Normalizer 베이스

    서브클래스는 `source`, `MARKUP_RANGE`, `_convert()`를 정의합니다.
    """

    source: str = ""
    MARKUP_RANGE: tuple[float, float] = (1.1, 1.4)

    def __init__(self, rng: Optional[random.Random] = None,
                 classifier: Optional[CategoryClassifier] = None):
        self.rng = rng or random.Random()
        self.classifier = classifier or CategoryClassifier.for_source(self.source)

    @property
    def store(self) -> str:
        return STORES[self.source]

    def normalize(self, raw_item: Any) -> Optional[CanonicalProduct]:
        """raw 아이템 → CanonicalProduct, 필수 id가 없거나 변환 실패 시 None"""
        if not isinstance(raw_item, dict):
            return None
        native_id = self.native_id(raw_item)
        if native_id in (None, ""):
            logger.debug(f"[NORMALIZER] Dropping {self.source} item without native id")
            return None
        try:
            return self._convert(raw_item, canonical_id(self.source, native_id))
        except (TypeError, ValueError) as e:
            logger.warning(f"[NORMALIZER] Failed to convert {self.source} item {native_id}: {e}")
            return None

    def normalize_many(self, raw_items: Any) -> list[CanonicalProduct]:
        if not isinstance(raw_items, list):
            return []
        products = []
        for item in raw_items:
            product = self.normalize(item)
            if product is not None:
                products.append(product)
        return products

    def native_id(self, raw_item: dict[str, Any]) -> Any:
        raise NotImplementedError

    def _convert(self, raw_item: dict[str, Any], product_id: str) -> CanonicalProduct:
        raise NotImplementedError

    # 난수 헬퍼 -----------------------------------------------------------

    def estimate_original_price(self, price: float) -> float:
        """현재가만 있을 때 정가 추정 (소스별 markup 범위)"""
        low, high = self.MARKUP_RANGE
        return price * self.rng.uniform(low, high)

    def random_rating(self, low: float, high: float) -> float:
        return round(self.rng.uniform(low, high), 1)

    def fallback_image(self) -> str:
        return f"https://picsum.photos/150/150?random={self.rng.randrange(1000)}"
