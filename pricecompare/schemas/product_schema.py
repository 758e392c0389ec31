"""Pydantic 스키마 정의"""
from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


STORES: dict[str, str] = {
    "ebay": "eBay",
    "etsy": "Etsy",
    "aliexpress": "AliExpress",
}


class CanonicalProduct(BaseModel):
    """모든 마켓플레이스 상품을 통일한 표준 레코드

    JSON 직렬화 시 camelCase 별칭 사용 (`model_dump(by_alias=True)`).
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str = Field(..., min_length=1, description="<source>-<native-id>")
    name: str = Field(..., description="상품명")
    brand: str = Field("Unknown", description="브랜드")
    category: str = Field(..., description="제목 키워드로 추론한 카테고리")
    store: str = Field(..., min_length=1, description="eBay | Etsy | AliExpress")
    store_class: str = Field(..., description="ebay | etsy | aliexpress")
    image: str = Field(..., description="이미지 URL (없으면 placeholder)")
    price: float = Field(..., ge=0, description="현재 가격")
    original_price: float = Field(..., ge=0, description="정가 (추정일 수 있음)")
    discount: int = Field(0, ge=0, le=100, description="할인율 %, 5 이하면 0")
    rating: float = Field(0.0, ge=0, le=5, description="평점 0~5")
    review_count: int = Field(0, ge=0, description="리뷰 수")
    shipping: str = Field("", description="배송 라벨")
    prime_shipping: bool = Field(False, description="빠른 배송 여부")
    in_stock: bool = Field(True, description="재고 여부 (업스트림 신호 없음)")
    is_best_deal: bool = Field(False, description="같은 그룹 내 최저가 여부")

    # 원본 클라이언트가 들고 있던 부가 정보
    condition: str = Field("New", description="상품 상태")
    shop_name: str = Field("", description="판매자/상점명")
    delivery_time: str = Field("", description="예상 배송 기간")
    product_url: Optional[str] = Field(None, description="마켓플레이스 딥링크")
    price_change: float = Field(0.0, description="가격 변동 % (참고용)")
    orders: Optional[int] = Field(None, ge=0, description="주문 수 (AliExpress)")
    price_estimated: bool = Field(False, description="정가/할인율이 추정치인지 여부")

    @field_validator("price", "original_price")
    @classmethod
    def round_price(cls, v: float) -> float:
        return round(float(v), 2)

    @field_validator("store_class")
    @classmethod
    def validate_store_class(cls, v: str) -> str:
        if v not in STORES:
            raise ValueError(f"unknown store class: {v}")
        return v


class CombinedSearchResponse(BaseModel):
    """통합 검색 응답"""
    ebay: list[dict[str, Any]] = Field(default_factory=list)
    etsy: list[dict[str, Any]] = Field(default_factory=list)
    aliexpress: list[dict[str, Any]] = Field(default_factory=list)
    query: str
    restricted: bool = False
    message: Optional[str] = None
    timestamp: str
    cached: bool = False


class CacheStats(BaseModel):
    hits: int
    misses: int
    keys: int


class HealthResponse(BaseModel):
    """헬스 체크 응답"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    status: str
    timestamp: datetime
    environment: str
    cache_stats: CacheStats


class ErrorResponse(BaseModel):
    """오류 응답 envelope"""
    error: str
    timestamp: str
