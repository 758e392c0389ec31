"""Fallback 데이터 생성기

업스트림이 실패했을 때 소스별 raw 형태 그대로 그럴듯한 데모 상품을 만듭니다.
- 형태(브랜드/카테고리 풀, 개수)는 고정, 값(가격/평점/이미지)은 난수
- id는 "<source>-fallback-<index>-<timestamp>" 형태로 출처를 표시
- 난수는 주입된 random.Random을 사용하므로 테스트에서 시드 고정 가능
"""

import random
import time
from typing import Any, Callable, Optional
from urllib.parse import quote, quote_plus

from pricecompare.core.logging import logger


def _now_ms() -> int:
    return int(time.time() * 1000)


class FallbackGenerator:
    """소스별 fallback 생성기 공통 베이스"""

    source: str = ""
    count: int = 6

    def __init__(self, rng: Optional[random.Random] = None, clock: Callable[[], int] = _now_ms):
        self.rng = rng or random.Random()
        self.clock = clock

    def generate(self, query: str) -> list[dict[str, Any]]:
        timestamp = self.clock()
        products = [self._build(query, i, timestamp) for i in range(self.count)]
        logger.info(f"[FALLBACK] Generated {self.source} fallback: {len(products)} products for '{query}'")
        return products

    def fallback_id(self, index: int, timestamp: int) -> str:
        return f"{self.source}-fallback-{index}-{timestamp}"

    def placeholder_image(self, index: int, timestamp: int) -> str:
        return f"https://picsum.photos/200/200?random={self.source}{index}&{timestamp}"

    def _build(self, query: str, index: int, timestamp: int) -> dict[str, Any]:
        raise NotImplementedError


class EbayFallbackGenerator(FallbackGenerator):
    source = "ebay"
    count = 6

    BRANDS = ("Dell", "HP", "Lenovo", "Apple", "Asus", "Acer", "Samsung", "MSI")
    LAPTOP_TYPES = ("Laptop", "Notebook", "Ultrabook", "Gaming Laptop", "Workstation")
    CONDITIONS = ("New", "Refurbished", "Used - Like New")
    PRICE_BAND = (300.0, 1800.0)

    def _build(self, query: str, index: int, timestamp: int) -> dict[str, Any]:
        brand = self.rng.choice(self.BRANDS)
        laptop_type = self.rng.choice(self.LAPTOP_TYPES)
        condition = self.rng.choice(self.CONDITIONS)
        low, high = self.PRICE_BAND
        price = round(self.rng.uniform(low, high), 2)
        search_url = f"https://www.ebay.com/sch/i.html?_nkw={quote(f'{query} {brand}')}"

        return {
            "itemId": self.fallback_id(index, timestamp),
            "title": f"{brand} {laptop_type} - {query} Model {index + 1}",
            "price": {"value": price, "currency": "USD"},
            "image": {"imageUrl": self.placeholder_image(index, timestamp)},
            "condition": condition,
            "brand": brand,
            "itemWebUrl": search_url,
            "productUrl": search_url,
        }


class EtsyFallbackGenerator(FallbackGenerator):
    source = "etsy"
    count = 6

    SHOPS = ("CreativeHandmade", "ArtisanCrafts", "VintageTreasures", "HandmadeWithLove", "CraftyCorner")
    PRODUCT_TYPES = ("Vintage", "Handmade", "Custom", "Artisanal", "Personalized")
    PRICE_BAND = (15.0, 100.0)

    def _build(self, query: str, index: int, timestamp: int) -> dict[str, Any]:
        shop = self.rng.choice(self.SHOPS)
        product_type = self.rng.choice(self.PRODUCT_TYPES)
        low, high = self.PRICE_BAND
        price = self.rng.uniform(low, high)

        return {
            "listing_id": self.fallback_id(index, timestamp),
            "title": f"{product_type} {query} Item {index + 1}",
            # Etsy는 가격을 문자열로 내려줌
            "price": f"{price:.2f}",
            "currency_code": "USD",
            "Images": [{"url_200x200": self.placeholder_image(index, timestamp)}],
            "Shop": {"shop_name": shop},
            "productUrl": f"https://www.etsy.com/search?q={quote(query)}",
        }


class AliExpressFallbackGenerator(FallbackGenerator):
    source = "aliexpress"
    count = 8

    PRODUCT_NAMES = {
        "laptop": ("Laptop Computer", "Gaming Laptop", "Ultrabook", "Notebook", "Portable Laptop"),
        "phone": ("Smartphone Android", "Mobile Phone 5G", "Unlocked Phone", "iPhone Case"),
        "electronics": ("Wireless Earbuds", "Smart Watch", "Power Bank", "Phone Case"),
        "default": ("Electronic Gadget", "Smart Device", "Tech Accessory", "Digital Product"),
    }
    ORIGINAL_PRICE_BAND = (80.0, 480.0)

    def _build(self, query: str, index: int, timestamp: int) -> dict[str, Any]:
        names = self.PRODUCT_NAMES.get(query.lower(), self.PRODUCT_NAMES["default"])
        low, high = self.ORIGINAL_PRICE_BAND
        original_price = self.rng.uniform(low, high)
        discount = self.rng.randint(10, 59)
        current_price = round(original_price * (1 - discount / 100), 2)

        return {
            "productId": self.fallback_id(index, timestamp),
            "product_title": f"{names[index % len(names)]} - {query} (2024 Model)",
            "product_price": f"US ${current_price}",
            "original_price": f"US ${round(original_price, 2)}",
            "discount": f"{discount}%",
            "product_main_image_url": self.placeholder_image(300 + index, timestamp),
            "product_rating": f"{self.rng.uniform(4.0, 5.0):.1f}",
            "product_review_count": self.rng.randint(100, 5099),
            "store_name": f"Global_Tech_Store_{index + 1}",
            "product_orders": self.rng.randint(500, 10499),
            "productUrl": f"https://www.aliexpress.com/wholesale?SearchText={quote_plus(query)}",
        }


class FallbackRegistry:
    """소스 이름 → 생성기 매핑"""

    def __init__(self, rng: Optional[random.Random] = None, clock: Callable[[], int] = _now_ms):
        shared_rng = rng or random.Random()
        self._generators: dict[str, FallbackGenerator] = {
            "ebay": EbayFallbackGenerator(shared_rng, clock),
            "etsy": EtsyFallbackGenerator(shared_rng, clock),
            "aliexpress": AliExpressFallbackGenerator(shared_rng, clock),
        }

    def generate(self, source: str, query: str) -> list[dict[str, Any]]:
        generator = self._generators.get(source)
        if generator is None:
            raise KeyError(f"Unknown source: {source}")
        return generator.generate(query)

    def __contains__(self, source: str) -> bool:
        return source in self._generators
