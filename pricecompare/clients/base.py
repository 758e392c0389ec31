"""Marketplace Client Protocol - 소스별 업스트림 클라이언트 인터페이스"""

from typing import Any, Protocol


class MarketplaceClient(Protocol):
    """마켓플레이스 검색 클라이언트 프로토콜

    eBay/Etsy/AliExpress 클라이언트가 구현해야 할 인터페이스입니다.
    캐시와 fallback은 호출자(SourceSearchService)가 담당합니다.

    구현 예시:
        class EbayClient(MarketplaceClient):
            source = "ebay"

            async def search(self, query: str) -> list[dict]:
                ...

            def enhance(self, item: dict) -> dict:
                ...
    """

    source: str

    async def search(self, query: str) -> list[dict[str, Any]]:
        """업스트림 검색

        Args:
            query: 정제된 검색어

        Returns:
            소스 고유 형태의 raw 아이템 목록

        Raises:
            UpstreamError: 재시도 후에도 호출 실패
            AuthError: 자격증명 교환 실패
            ConfigError: 필수 API 키 누락
        """
        ...

    def enhance(self, item: dict[str, Any]) -> dict[str, Any]:
        """raw 아이템에 productUrl(정식 딥링크)을 덧붙인 사본 반환"""
        ...
