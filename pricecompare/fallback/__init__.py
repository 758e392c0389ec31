"""업스트림 실패 시 사용하는 fallback 상품 생성기"""

from pricecompare.fallback.generators import (
    AliExpressFallbackGenerator,
    EbayFallbackGenerator,
    EtsyFallbackGenerator,
    FallbackGenerator,
    FallbackRegistry,
)

__all__ = [
    "AliExpressFallbackGenerator",
    "EbayFallbackGenerator",
    "EtsyFallbackGenerator",
    "FallbackGenerator",
    "FallbackRegistry",
]
