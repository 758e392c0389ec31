"""Pydantic 스키마 - export only."""

from .product_schema import (
    STORES,
    CacheStats,
    CanonicalProduct,
    CombinedSearchResponse,
    ErrorResponse,
    HealthResponse,
)

__all__ = [
    "STORES",
    "CacheStats",
    "CanonicalProduct",
    "CombinedSearchResponse",
    "ErrorResponse",
    "HealthResponse",
]
