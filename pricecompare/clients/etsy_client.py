"""Etsy Open API v3 클라이언트"""

from __future__ import annotations

from typing import Any, Optional

from pricecompare.core.config import Settings, settings as default_settings
from pricecompare.core.exceptions import ConfigError
from pricecompare.core.logging import logger

ETSY_SEARCH_URL = "https://openapi.etsy.com/v3/application/listings/active"


class EtsyClient:
    source = "etsy"

    def __init__(self, http_client, config: Optional[Settings] = None):
        self.http = http_client
        self.config = config or default_settings

    async def search(self, query: str) -> list[dict[str, Any]]:
        # API 키가 없으면 호출 자체를 하지 않음
        if not self.config.etsy_api_key:
            raise ConfigError("ETSY_API_KEY")

        logger.info(f"[ETSY] Searching: query='{query}'")
        data = await self.http.request_json(
            "GET",
            ETSY_SEARCH_URL,
            source=self.source,
            headers={"x-api-key": self.config.etsy_api_key},
            params={
                "keywords": query,
                "limit": self.config.etsy_result_limit,
                "includes": "Images,Shop",
            },
        )

        items = data.get("results") if isinstance(data, dict) else None
        if not isinstance(items, list):
            return []
        return [item for item in items if isinstance(item, dict)][:self.config.etsy_result_limit]

    def enhance(self, item: dict[str, Any]) -> dict[str, Any]:
        enhanced = dict(item)
        enhanced["productUrl"] = f"https://www.etsy.com/listing/{item.get('listing_id')}"
        return enhanced
