"""통합 검색 API 호출 (클라이언트 측)"""
from typing import Any, Optional, Protocol

from pricecompare.clients.http_client import SharedHttpClient
from pricecompare.core.exceptions import UpstreamError


class SearchTransport(Protocol):
    """`/api/search` 응답(dict)을 가져오는 전송 계층"""

    async def fetch(self, query: str) -> dict[str, Any]:
        ...


class HttpSearchTransport:
    """서버의 `/api/search`를 curl_cffi 세션으로 호출

    재시도 없이 한 번만 시도합니다. 실패는 상태 머신이 샘플 데이터로 흡수합니다.
    """

    def __init__(self, base_url: str, http_client: Optional[SharedHttpClient] = None):
        self.base_url = base_url.rstrip("/")
        self.http = http_client or SharedHttpClient(max_retries=1)

    async def fetch(self, query: str) -> dict[str, Any]:
        data = await self.http.request_json(
            "GET",
            f"{self.base_url}/api/search",
            source="api",
            headers={"Content-Type": "application/json"},
            params={"q": query},
            max_retries=1,
        )
        if not isinstance(data, dict):
            raise UpstreamError("api", "No data received from API")
        return data

    async def close(self) -> None:
        await self.http.close()
