"""eBay Browse API 클라이언트"""

from __future__ import annotations

from typing import Any, Optional

from pricecompare.core.config import Settings, settings as default_settings
from pricecompare.core.exceptions import UpstreamError
from pricecompare.core.logging import logger
from pricecompare.services.impl.token_service import TokenService


class EbayClient:
    source = "ebay"

    def __init__(self, http_client, token_service: TokenService, config: Optional[Settings] = None):
        self.http = http_client
        self.tokens = token_service
        self.config = config or default_settings

    @property
    def search_url(self) -> str:
        return f"{self.config.ebay_api_base}/buy/browse/v1/item_summary/search"

    async def search(self, query: str) -> list[dict[str, Any]]:
        token = await self.tokens.get_token()
        logger.info(f"[EBAY] Searching: query='{query}'")
        try:
            data = await self.http.request_json(
                "GET",
                self.search_url,
                source=self.source,
                headers={
                    "Authorization": f"Bearer {token}",
                    "Content-Type": "application/json",
                },
                params={"q": query, "limit": self.config.ebay_result_limit},
            )
        except UpstreamError as e:
            if e.status_code == 401:
                self.tokens.invalidate()
            raise

        items = data.get("itemSummaries") if isinstance(data, dict) else None
        if not isinstance(items, list):
            return []
        return [item for item in items if isinstance(item, dict)][:self.config.ebay_result_limit]

    def enhance(self, item: dict[str, Any]) -> dict[str, Any]:
        enhanced = dict(item)
        enhanced["productUrl"] = item.get("itemWebUrl") or f"https://www.ebay.com/itm/{item.get('itemId')}"
        return enhanced
