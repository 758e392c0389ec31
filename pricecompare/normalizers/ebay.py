"""eBay itemSummary → CanonicalProduct"""

from typing import Any

from pricecompare.normalizers.base import BaseNormalizer, compute_discount, parse_price, round2
from pricecompare.schemas.product_schema import CanonicalProduct


class EbayNormalizer(BaseNormalizer):
    source = "ebay"
    MARKUP_RANGE = (1.1, 1.4)

    def native_id(self, raw_item: dict[str, Any]) -> Any:
        return raw_item.get("itemId")

    def _convert(self, raw_item: dict[str, Any], product_id: str) -> CanonicalProduct:
        price_info = raw_item.get("price") if isinstance(raw_item.get("price"), dict) else {}
        price = parse_price(price_info.get("value")) or 0.0
        # Browse API는 정가를 주지 않으므로 항상 추정
        original_price = self.estimate_original_price(price)
        image = (raw_item.get("image") or {}).get("imageUrl") if isinstance(raw_item.get("image"), dict) else None
        seller = raw_item.get("seller") if isinstance(raw_item.get("seller"), dict) else {}
        title = raw_item.get("title") or "Unknown Product"

        return CanonicalProduct(
            id=product_id,
            name=title,
            brand=raw_item.get("brand") or "Unknown",
            category=self.classifier.classify(raw_item.get("title")),
            store=self.store,
            store_class=self.source,
            image=image or self.fallback_image(),
            price=round2(price),
            original_price=round2(original_price),
            discount=compute_discount(price, original_price),
            rating=self.random_rating(1.0, 5.0),
            review_count=self.rng.randrange(1000),
            shipping="Free Shipping" if self.rng.random() > 0.3 else "$5.99 Shipping",
            prime_shipping=False,
            condition=raw_item.get("condition") or "New",
            shop_name=seller.get("username") or "eBay Seller",
            delivery_time="3-7 days",
            product_url=raw_item.get("productUrl") or raw_item.get("itemWebUrl"),
            price_change=(self.rng.random() - 0.5) * 20,
            price_estimated=True,
        )
