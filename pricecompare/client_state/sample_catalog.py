"""로컬 샘플 상품 카탈로그

서버 호출이 실패하거나 결과가 비었을 때 화면을 채우는 데모 데이터입니다.
8개 카테고리 × 3개 스토어 × 8개 = 192개 상품.
"""

import random
import time
from typing import Callable, Optional

from pricecompare.normalizers.base import compute_discount, round2
from pricecompare.schemas.product_schema import STORES, CanonicalProduct

ITEMS_PER_STORE = 8

SAMPLE_CATEGORIES = (
    "Electronics",
    "Home & Kitchen",
    "Sports & Outdoors",
    "Beauty",
    "Toys & Games",
    "Clothing",
    "Books",
    "Automotive",
)

BRAND_POOLS = {
    "electronics": ("Apple", "Samsung", "Sony", "LG", "Bose", "Microsoft", "Google", "OnePlus"),
    "computers": ("Apple", "Dell", "HP", "Lenovo", "ASUS", "Acer", "MSI", "Razer"),
    "phones": ("Apple", "Samsung", "Google", "OnePlus", "Xiaomi", "Oppo", "Vivo", "Realme"),
    "home": ("KitchenAid", "Instant Pot", "Dyson", "iRobot", "Philips", "Black+Decker", "Ninja", "Cuisinart"),
    "fashion": ("Nike", "Adidas", "Levi's", "Under Armour", "Puma", "Reebok", "New Balance", "Skechers"),
}

# 카테고리 → 브랜드 풀
CATEGORY_BRANDS = {
    "Electronics": "electronics",
    "Home & Kitchen": "home",
    "Sports & Outdoors": "fashion",
    "Clothing": "fashion",
}

BASE_PRICES = {
    "Electronics": {"default": 300, "Apple": 500, "Samsung": 400, "Sony": 450, "LG": 350},
    "Home & Kitchen": {"default": 150, "KitchenAid": 300, "Dyson": 400, "Instant Pot": 120},
    "Sports & Outdoors": {"default": 80, "Nike": 120, "Adidas": 100, "Under Armour": 90},
    "Beauty": {"default": 25},
    "Toys & Games": {"default": 40},
}

PRODUCT_NAMES = {
    "Electronics": ("Wireless Earbuds", "Smart Watch", "Bluetooth Speaker", "Headphones", "Tablet"),
    "Home & Kitchen": ("Air Purifier", "Stand Mixer", "Vacuum Cleaner", "Coffee Maker", "Blender"),
    "Sports & Outdoors": ("Running Shoes", "Yoga Mat", "Dumbbells", "Basketball", "Tennis Racket"),
    "Beauty": ("Moisturizer", "Foundation", "Lipstick", "Shampoo", "Perfume"),
    "Toys & Games": ("Action Figure", "Board Game", "Puzzle", "Building Blocks", "Remote Car"),
}

SHOP_PREFIX = {"ebay": "eBay_Seller", "etsy": "Etsy_Shop", "aliexpress": "Global_Store"}
DELIVERY_TIME = {"ebay": "3-7 days", "etsy": "7-14 days", "aliexpress": "15-25 days"}


def base_price(category: str, brand: str) -> float:
    prices = BASE_PRICES.get(category, {})
    return prices.get(brand) or prices.get("default") or 200


def product_name(category: str, index: int) -> str:
    names = PRODUCT_NAMES.get(category, PRODUCT_NAMES["Electronics"])
    return names[index % len(names)]


def brands_for(category: str) -> tuple[str, ...]:
    return BRAND_POOLS[CATEGORY_BRANDS.get(category, "electronics")]


def generate_sample_products(
    rng: Optional[random.Random] = None,
    clock: Callable[[], float] = time.time,
) -> list[CanonicalProduct]:
    """샘플 상품 생성 (best deal 표시는 호출자가 수행)"""
    rng = rng or random.Random()
    timestamp = int(clock() * 1000)
    products: list[CanonicalProduct] = []

    for category in SAMPLE_CATEGORIES:
        brands = brands_for(category)
        for store_class, store in STORES.items():
            for i in range(ITEMS_PER_STORE):
                brand = rng.choice(brands)
                current_price = base_price(category, brand) * rng.uniform(0.7, 1.3)
                original_price = current_price * rng.uniform(1.0, 1.3)
                last_price = original_price * rng.uniform(0.9, 1.1)

                products.append(CanonicalProduct(
                    id=f"{store_class}-sample-{len(products)}-{timestamp}",
                    name=f"{brand} {product_name(category, i)}",
                    brand=brand,
                    category=category,
                    store=store,
                    store_class=store_class,
                    image=f"https://picsum.photos/150/150?random={rng.randrange(1000)}",
                    price=round2(current_price),
                    original_price=round2(original_price),
                    discount=compute_discount(current_price, original_price),
                    rating=round(rng.uniform(3.0, 5.0), 1),
                    review_count=rng.randrange(10000),
                    shipping="Free Shipping" if rng.random() > 0.3 else "$5.99 Shipping",
                    prime_shipping=store_class == "etsy" and rng.random() > 0.5,
                    condition="New",
                    shop_name=f"{SHOP_PREFIX[store_class]}_{i + 1}",
                    delivery_time=DELIVERY_TIME[store_class],
                    price_change=(current_price - last_price) / last_price * 100,
                    price_estimated=True,
                ))
    return products
