"""Etsy listing → CanonicalProduct"""

from typing import Any, Optional

from pricecompare.normalizers.base import BaseNormalizer, compute_discount, parse_price, round2
from pricecompare.schemas.product_schema import CanonicalProduct


def _listing_price(value: Any) -> Optional[float]:
    # v3 API: {"amount": 1250, "divisor": 100, "currency_code": "USD"}
    if isinstance(value, dict):
        amount = parse_price(value.get("amount"))
        divisor = parse_price(value.get("divisor")) or 1.0
        return amount / divisor if amount is not None else None
    return parse_price(value)


class EtsyNormalizer(BaseNormalizer):
    source = "etsy"
    MARKUP_RANGE = (1.1, 1.5)

    def native_id(self, raw_item: dict[str, Any]) -> Any:
        return raw_item.get("listing_id")

    def _convert(self, raw_item: dict[str, Any], product_id: str) -> CanonicalProduct:
        price = _listing_price(raw_item.get("price")) or 0.0
        original_price = self.estimate_original_price(price)

        images = raw_item.get("Images") or raw_item.get("images") or []
        first_image = images[0] if isinstance(images, list) and images and isinstance(images[0], dict) else {}
        shop = raw_item.get("Shop") or raw_item.get("shop") or {}
        shop_name = shop.get("shop_name") if isinstance(shop, dict) else None

        return CanonicalProduct(
            id=product_id,
            name=raw_item.get("title") or "Handmade Item",
            brand="Handmade",
            category=self.classifier.classify(raw_item.get("title")),
            store=self.store,
            store_class=self.source,
            image=first_image.get("url_200x200") or self.fallback_image(),
            price=round2(price),
            original_price=round2(original_price),
            discount=compute_discount(price, original_price),
            rating=self.random_rating(3.0, 5.0),
            review_count=self.rng.randrange(500),
            shipping="Free Shipping" if self.rng.random() > 0.4 else "$3.99 Shipping",
            prime_shipping=self.rng.random() > 0.7,
            condition="Handmade",
            shop_name=shop_name or "Etsy Shop",
            delivery_time="7-14 days",
            product_url=raw_item.get("productUrl") or raw_item.get("url"),
            price_change=(self.rng.random() - 0.3) * 15,
            price_estimated=True,
        )
