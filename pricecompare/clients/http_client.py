"""공유 HTTP 클라이언트 (curl_cffi)

- 마켓플레이스 호출마다 AsyncSession을 만들면 TLS/커넥션 오버헤드가 커지므로
  프로세스 단위로 세션을 재사용합니다.
- 요청 단위 타임아웃 + 선형 백오프 재시도 (attempt × backoff).
- 앱 종료 시 close()로 정리합니다.
"""

from __future__ import annotations

import asyncio
import json
from typing import Any, Dict, Optional

from curl_cffi.requests import AsyncSession

from pricecompare.core.config import settings
from pricecompare.core.exceptions import UpstreamError
from pricecompare.core.logging import logger


class SharedHttpClient:
    def __init__(
        self,
        timeout_s: Optional[float] = None,
        max_retries: Optional[int] = None,
        backoff_s: Optional[float] = None,
    ) -> None:
        self._lock = asyncio.Lock()
        self._session: Optional[AsyncSession] = None
        self.timeout_s = timeout_s if timeout_s is not None else settings.upstream_timeout_s
        self.max_retries = max_retries if max_retries is not None else settings.upstream_max_retries
        self.backoff_s = backoff_s if backoff_s is not None else settings.upstream_backoff_s

    async def _ensure_session(self) -> AsyncSession:
        async with self._lock:
            if self._session is not None:
                return self._session
            self._session = AsyncSession(
                impersonate=settings.upstream_impersonate,
                headers=self.default_headers(),
                allow_redirects=True,
                max_clients=settings.upstream_max_clients,
                trust_env=False,
            )
            return self._session

    def default_headers(self) -> Dict[str, str]:
        return {
            "User-Agent": settings.upstream_user_agent,
            "Accept": "application/json",
        }

    async def request_json(
        self,
        method: str,
        url: str,
        *,
        source: str,
        headers: Optional[Dict[str, str]] = None,
        params: Optional[Dict[str, Any]] = None,
        data: Any = None,
        timeout_s: Optional[float] = None,
        max_retries: Optional[int] = None,
    ) -> Any:
        """JSON 응답 요청 (재시도 포함)

        Args:
            method: HTTP 메서드
            url: 요청 URL
            source: 로깅/예외용 소스 이름 ("ebay" 등)
            headers: 추가 헤더
            params: 쿼리 파라미터
            data: 폼 바디 (dict 또는 인코딩된 문자열)
            timeout_s: 요청 타임아웃 (초)
            max_retries: 최대 시도 횟수

        Returns:
            파싱된 JSON

        Raises:
            UpstreamError: non-2xx/타임아웃/파싱 실패가 재시도 후에도 계속된 경우
        """
        attempts = max(1, max_retries if max_retries is not None else self.max_retries)
        timeout = timeout_s if timeout_s is not None else self.timeout_s
        sess = await self._ensure_session()

        for attempt in range(1, attempts + 1):
            try:
                resp = await sess.request(
                    method,
                    url,
                    headers=headers,
                    params=params,
                    data=data,
                    timeout=timeout,
                )
                status = getattr(resp, "status_code", 0) or 0
                if not 200 <= status < 300:
                    raise UpstreamError(source, f"HTTP {status}", status_code=status)
                return json.loads(getattr(resp, "text", "") or "null")
            except UpstreamError as e:
                error = e
            except json.JSONDecodeError as e:
                error = UpstreamError(source, f"invalid JSON: {e}")
            except Exception as e:
                error = UpstreamError(source, f"{type(e).__name__}: {e}")

            if attempt == attempts:
                logger.warning(f"[HTTP_CLIENT] {source} exhausted {attempts} attempts: {error.message}")
                raise error

            logger.info(f"[HTTP_CLIENT] {source} attempt {attempt} failed, retrying...")
            await asyncio.sleep(self.backoff_s * attempt)

    async def close(self) -> None:
        async with self._lock:
            if self._session is None:
                return
            try:
                await self._session.close()
            except Exception as e:
                logger.debug(f"[HTTP_CLIENT] session close failed: {e}")
            self._session = None
