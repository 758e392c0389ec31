"""소스별 raw 응답 → CanonicalProduct 변환"""

import random
from typing import Any, Optional

from pricecompare.normalizers.aliexpress import AliExpressNormalizer
from pricecompare.normalizers.base import BaseNormalizer, CategoryClassifier, canonical_id
from pricecompare.normalizers.ebay import EbayNormalizer
from pricecompare.normalizers.etsy import EtsyNormalizer
from pricecompare.schemas.product_schema import CanonicalProduct

NORMALIZER_ORDER = ("ebay", "etsy", "aliexpress")


def build_normalizers(rng: Optional[random.Random] = None) -> dict[str, BaseNormalizer]:
    shared_rng = rng or random.Random()
    return {
        "ebay": EbayNormalizer(shared_rng),
        "etsy": EtsyNormalizer(shared_rng),
        "aliexpress": AliExpressNormalizer(shared_rng),
    }


def normalize_combined(
    payload: dict[str, Any],
    rng: Optional[random.Random] = None,
    normalizers: Optional[dict[str, BaseNormalizer]] = None,
) -> list[CanonicalProduct]:
    """통합 응답의 세 목록을 eBay, Etsy, AliExpress 순서로 평탄화"""
    normalizers = normalizers or build_normalizers(rng)
    products: list[CanonicalProduct] = []
    for source in NORMALIZER_ORDER:
        products.extend(normalizers[source].normalize_many(payload.get(source) or []))
    return products


__all__ = [
    "AliExpressNormalizer",
    "BaseNormalizer",
    "CategoryClassifier",
    "EbayNormalizer",
    "EtsyNormalizer",
    "build_normalizers",
    "canonical_id",
    "normalize_combined",
]
