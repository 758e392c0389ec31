"""AliExpress (RapidAPI DataHub) 클라이언트

게이트웨이 배포마다 엔드포인트/파라미터 이름이 달라 후보를 순서대로 시도하고
처음으로 상품 목록을 돌려준 엔드포인트에서 멈춥니다.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from pricecompare.clients.aliexpress_extractors import extract_products
from pricecompare.core.config import Settings, settings as default_settings
from pricecompare.core.exceptions import ConfigError, UpstreamError
from pricecompare.core.logging import logger


@dataclass(frozen=True)
class EndpointCandidate:
    """시도할 엔드포인트 (경로 + 검색어 파라미터 이름)"""

    path: str
    query_param: str

    def params(self, query: str) -> dict[str, str]:
        return {self.query_param: query, "page": "1"}


ENDPOINT_CANDIDATES: tuple[EndpointCandidate, ...] = (
    EndpointCandidate("item_search_2", "q"),
    EndpointCandidate("search_product", "keyword"),
    EndpointCandidate("item_search", "query"),
)


class AliExpressClient:
    source = "aliexpress"

    def __init__(
        self,
        http_client,
        config: Optional[Settings] = None,
        candidates: tuple[EndpointCandidate, ...] = ENDPOINT_CANDIDATES,
    ):
        self.http = http_client
        self.config = config or default_settings
        self.candidates = candidates

    def _url(self, candidate: EndpointCandidate) -> str:
        return f"https://{self.config.rapidapi_aliexpress_host}/{candidate.path}"

    async def search(self, query: str) -> list[dict[str, Any]]:
        """후보 엔드포인트를 순회하며 첫 번째 비어 있지 않은 목록 반환

        모든 후보가 실패하거나 비어 있으면 예외 없이 빈 목록을 반환합니다.
        """
        if not self.config.rapidapi_key:
            raise ConfigError("RAPIDAPI_KEY")

        headers = {
            "X-RapidAPI-Key": self.config.rapidapi_key,
            "X-RapidAPI-Host": self.config.rapidapi_aliexpress_host,
        }

        for candidate in self.candidates:
            url = self._url(candidate)
            try:
                data = await self.http.request_json(
                    "GET",
                    url,
                    source=self.source,
                    headers=headers,
                    params=candidate.params(query),
                )
            except UpstreamError as e:
                logger.info(f"[ALIEXPRESS] Endpoint failed ({candidate.path}): {e.message}")
                continue

            products = extract_products(data)
            if products:
                logger.info(f"[ALIEXPRESS] Success ({candidate.path}): {len(products)} products")
                return products[:self.config.aliexpress_result_limit]

        return []

    def enhance(self, item: dict[str, Any]) -> dict[str, Any]:
        enhanced = dict(item)
        enhanced["productUrl"] = (
            item.get("product_detail_url")
            or f"https://www.aliexpress.com/item/{item.get('productId') or item.get('product_id')}.html"
        )
        return enhanced
