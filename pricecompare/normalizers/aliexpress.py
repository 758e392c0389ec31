"""AliExpress item → CanonicalProduct

응답 형태가 엔드포인트마다 달라 필드 이름 후보를 여러 개 확인합니다.
"""

from typing import Any

from pricecompare.normalizers.base import (
    BaseNormalizer,
    compute_discount,
    parse_int,
    parse_price,
    round2,
)
from pricecompare.schemas.product_schema import CanonicalProduct


def _first(raw_item: dict[str, Any], *keys: str) -> Any:
    for key in keys:
        value = raw_item.get(key)
        if value not in (None, ""):
            return value
    return None


class AliExpressNormalizer(BaseNormalizer):
    source = "aliexpress"
    MARKUP_RANGE = (1.2, 1.5)

    def native_id(self, raw_item: dict[str, Any]) -> Any:
        return _first(raw_item, "productId", "product_id", "itemId", "id")

    def _convert(self, raw_item: dict[str, Any], product_id: str) -> CanonicalProduct:
        price_estimated = False
        price = parse_price(_first(raw_item, "product_price", "price", "sale_price"))
        if price is None:
            price = self.rng.uniform(20, 320)
            price_estimated = True

        original_price = parse_price(raw_item.get("original_price"))
        if original_price is None:
            original_price = self.estimate_original_price(price)
            price_estimated = True

        discount = compute_discount(price, original_price)
        provided_discount = parse_int(raw_item.get("discount"))
        if provided_discount is not None:
            discount = provided_discount if provided_discount > 5 else 0

        rating = parse_price(raw_item.get("product_rating"))
        if rating is None:
            rating = self.random_rating(4.0, 5.0)

        review_count = parse_int(raw_item.get("product_review_count"))
        if review_count is None:
            review_count = self.rng.randrange(5000)

        orders = parse_int(raw_item.get("product_orders"))
        if orders is None:
            orders = self.rng.randrange(10000)

        title = _first(raw_item, "product_title", "title") or "AliExpress Product"
        image = _first(raw_item, "product_main_image_url", "image", "product_image")

        return CanonicalProduct(
            id=product_id,
            name=title,
            brand=raw_item.get("brand") or "Unknown",
            category=self.classifier.classify(title),
            store=self.store,
            store_class=self.source,
            image=image if isinstance(image, str) else self.fallback_image(),
            price=round2(price),
            original_price=round2(original_price),
            discount=min(discount, 100),
            rating=min(max(rating, 0.0), 5.0),
            review_count=max(review_count, 0),
            shipping="Free Shipping",
            prime_shipping=False,
            condition="New",
            shop_name=raw_item.get("store_name") or "AliExpress Store",
            delivery_time="15-25 days",
            product_url=_first(raw_item, "productUrl", "product_detail_url"),
            price_change=(self.rng.random() - 0.2) * 15,
            orders=max(orders, 0),
            price_estimated=price_estimated,
        )
