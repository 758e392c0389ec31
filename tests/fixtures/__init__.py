"""테스트 자산(데이터) 레이어

규칙:
- 로직 없음 (단순 dict/list/primitive)
- 엔진/네트워크 의존 없음
"""

from .marketplace_payloads import (
    ALIEXPRESS_SEARCH_RESPONSE,
    EBAY_SEARCH_RESPONSE,
    EBAY_TOKEN_RESPONSE,
    ETSY_SEARCH_RESPONSE,
)

__all__ = [
    "ALIEXPRESS_SEARCH_RESPONSE",
    "EBAY_SEARCH_RESPONSE",
    "EBAY_TOKEN_RESPONSE",
    "ETSY_SEARCH_RESPONSE",
]
