"""스키마 검증 테스트"""
from datetime import datetime, timezone

import pytest
from pydantic import ValidationError as PydanticValidationError

from pricecompare.schemas import CacheStats, CanonicalProduct, CombinedSearchResponse, HealthResponse


def _product(**overrides):
    values = {
        "id": "ebay-1",
        "name": "Dell Laptop",
        "category": "Electronics",
        "store": "eBay",
        "store_class": "ebay",
        "image": "https://img.test/1.jpg",
        "price": 10.126,
        "original_price": 12.5,
    }
    values.update(overrides)
    return CanonicalProduct(**values)


class TestCanonicalProduct:

    def test_prices_rounded(self):
        assert _product().price == 10.13

    def test_camel_case_aliases(self):
        data = _product(review_count=3).model_dump(by_alias=True)

        assert data["storeClass"] == "ebay"
        assert data["originalPrice"] == 12.5
        assert data["reviewCount"] == 3
        assert data["isBestDeal"] is False
        assert "store_class" not in data

    def test_accepts_alias_input(self):
        product = CanonicalProduct.model_validate({
            "id": "etsy-1", "name": "Mug", "category": "Handmade", "store": "Etsy",
            "storeClass": "etsy", "image": "x", "price": 1, "originalPrice": 2,
        })
        assert product.store_class == "etsy"

    @pytest.mark.parametrize("overrides", [
        {"id": ""},
        {"store_class": "amazon"},
        {"price": -1},
        {"rating": 5.5},
        {"discount": 101},
        {"review_count": -3},
    ])
    def test_invalid_values_rejected(self, overrides):
        with pytest.raises(PydanticValidationError):
            _product(**overrides)


class TestResponses:

    def test_combined_defaults(self):
        response = CombinedSearchResponse(query="laptop", timestamp="t").model_dump()

        assert response["ebay"] == response["etsy"] == response["aliexpress"] == []
        assert response["restricted"] is False
        assert response["cached"] is False
        assert response["message"] is None

    def test_health_camel_case(self):
        health = HealthResponse(
            status="OK",
            timestamp=datetime.now(timezone.utc),
            environment="test",
            cache_stats=CacheStats(hits=1, misses=2, keys=3),
        )
        data = health.model_dump(by_alias=True)

        assert data["cacheStats"] == {"hits": 1, "misses": 2, "keys": 3}
