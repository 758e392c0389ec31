"""eBay OAuth 토큰 캐시 (client-credentials grant)"""
import base64
from typing import Optional
from urllib.parse import urlencode

from pricecompare.core.config import Settings, settings as default_settings
from pricecompare.core.exceptions import AuthError, UpstreamError
from pricecompare.core.logging import logger
from pricecompare.services.impl.cache_service import CacheService

EBAY_OAUTH_SCOPES = (
    "https://api.ebay.com/oauth/api_scope",
    "https://api.ebay.com/oauth/api_scope/buy.item.feed",
)


class TokenService:
    """eBay 베어러 토큰 캐시

    - 캐시에 있으면 재사용, 없거나 만료되면 토큰 교환 후 3600초 캐싱
    - 교환 실패 시 1회 재시도 후 AuthError
    - 빈 토큰은 캐싱하지 않음
    - 동시 요청 간 락 없음 (두 번 발급되어도 마지막 값이 남음)
    """

    CACHE_KEY = "ebay-token"

    def __init__(self, cache_service: CacheService, http_client, config: Optional[Settings] = None):
        self.cache = cache_service
        self.http = http_client
        self.config = config or default_settings

    async def get_token(self) -> str:
        """유효한 토큰 반환

        Raises:
            AuthError: 토큰 교환 실패
        """
        cached = self.cache.get(self.CACHE_KEY)
        if cached:
            logger.debug("[EBAY_AUTH] Using cached eBay token")
            return cached

        token = await self._exchange_with_retry()
        self.cache.set(self.CACHE_KEY, token, ttl=self.config.cache_token_ttl)
        logger.info("[EBAY_AUTH] New eBay token generated and cached")
        return token

    def invalidate(self) -> None:
        """인증 실패 시 캐시된 토큰 폐기"""
        if self.cache.delete(self.CACHE_KEY):
            logger.info("[EBAY_AUTH] Cached eBay token discarded")

    async def _exchange_with_retry(self, attempts: int = 2) -> str:
        for attempt in range(1, attempts + 1):
            try:
                return await self._exchange()
            except AuthError as e:
                logger.warning(f"[EBAY_AUTH] Token exchange attempt {attempt} failed: {e.message}")
                if attempt == attempts:
                    raise
        raise AuthError("ebay", "token exchange was not attempted")

    async def _exchange(self) -> str:
        client_id = self.config.ebay_client_id
        client_secret = self.config.ebay_client_secret
        if not client_id or not client_secret:
            raise AuthError("ebay", "client id/secret not configured")

        basic = base64.b64encode(f"{client_id}:{client_secret}".encode()).decode()
        body = urlencode({
            "grant_type": "client_credentials",
            "scope": " ".join(EBAY_OAUTH_SCOPES),
        })

        try:
            data = await self.http.request_json(
                "POST",
                self.config.ebay_oauth_url,
                source="ebay-oauth",
                headers={
                    "Content-Type": "application/x-www-form-urlencoded",
                    "Authorization": f"Basic {basic}",
                },
                data=body,
                max_retries=1,
            )
        except UpstreamError as e:
            raise AuthError("ebay", e.message) from e

        token = data.get("access_token") if isinstance(data, dict) else None
        if not token or not isinstance(token, str):
            raise AuthError("ebay", "token response did not include access_token")
        return token
