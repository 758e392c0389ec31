"""In-memory 캐시 서비스 - 캐싱 로직만 담당

프로세스 재시작 시 비워지며, 다중 인스턴스 간 일관성은 보장하지 않습니다.
"""
import asyncio
import copy
import time
from dataclasses import dataclass
from typing import Any, Callable, Optional

from pricecompare.core.config import settings
from pricecompare.core.logging import logger


@dataclass(frozen=True)
class CacheEntry:
    """캐시 엔트리 (key, payload, 저장 시각, ttl)"""

    key: str
    payload: Any
    inserted_at: float
    ttl: float

    def is_fresh(self, now: float) -> bool:
        return now - self.inserted_at < self.ttl


class CacheService:
    """TTL 기반 in-memory 캐시

    - get/set은 동기 (락 없음, last-write-wins)
    - 만료 엔트리는 조회 시 없는 것으로 취급하고 주기적 sweep으로 제거
    - 저장/조회 시 deepcopy하여 저장된 값이 외부에서 변형되지 않도록 함
    """

    def __init__(
        self,
        default_ttl: Optional[int] = None,
        check_period: Optional[int] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.default_ttl = default_ttl or settings.cache_ttl
        self.check_period = check_period or settings.cache_check_period
        self._clock = clock
        self._store: dict[str, CacheEntry] = {}
        self._hits = 0
        self._misses = 0
        self._sweeper: Optional[asyncio.Task] = None

    def get(self, key: str) -> Optional[Any]:
        """
        캐시 조회

        Args:
            key: 캐시 키

        Returns:
            저장된 payload 사본 또는 None (미스/만료)
        """
        entry = self._store.get(key)
        if entry is None:
            self._misses += 1
            logger.debug(f"Cache miss for key: {key}")
            return None

        if not entry.is_fresh(self._clock()):
            self._store.pop(key, None)
            self._misses += 1
            logger.debug(f"Cache expired for key: {key}")
            return None

        self._hits += 1
        logger.debug(f"Cache hit for key: {key}")
        return copy.deepcopy(entry.payload)

    def set(self, key: str, payload: Any, ttl: Optional[int] = None) -> bool:
        """
        캐시 저장

        Args:
            key: 캐시 키
            payload: 저장할 값 (None은 저장하지 않음)
            ttl: TTL (초), 생략 시 기본 TTL

        Returns:
            성공 여부
        """
        if payload is None:
            logger.warning(f"Refusing to cache empty payload for key: {key}")
            return False

        effective_ttl = ttl if ttl is not None else self.default_ttl
        if effective_ttl <= 0:
            logger.warning(f"Invalid TTL {effective_ttl} for key: {key}")
            return False

        self._store[key] = CacheEntry(
            key=key,
            payload=copy.deepcopy(payload),
            inserted_at=self._clock(),
            ttl=float(effective_ttl),
        )
        logger.debug(f"Cache set for key: {key}, TTL: {effective_ttl}s")
        return True

    def delete(self, key: str) -> bool:
        """캐시 삭제"""
        removed = self._store.pop(key, None) is not None
        if removed:
            logger.debug(f"Cache deleted for key: {key}")
        return removed

    def flush(self) -> None:
        """전체 비우기 (통계 포함)"""
        self._store.clear()
        self._hits = 0
        self._misses = 0

    def sweep(self) -> int:
        """만료 엔트리 제거

        Returns:
            제거된 엔트리 수
        """
        now = self._clock()
        expired = [key for key, entry in self._store.items() if not entry.is_fresh(now)]
        for key in expired:
            self._store.pop(key, None)
        if expired:
            logger.debug(f"Cache sweep evicted {len(expired)} entries")
        return len(expired)

    def stats(self) -> dict[str, int]:
        """헬스 체크용 통계"""
        return {
            "hits": self._hits,
            "misses": self._misses,
            "keys": len(self._store),
        }

    def start_sweeper(self) -> None:
        """주기적 sweep 태스크 시작 (실행 중인 이벤트 루프 필요)"""
        if self._sweeper is not None and not self._sweeper.done():
            return
        self._sweeper = asyncio.get_running_loop().create_task(self._sweep_loop())

    async def stop_sweeper(self) -> None:
        if self._sweeper is None:
            return
        self._sweeper.cancel()
        try:
            await self._sweeper
        except asyncio.CancelledError:
            pass
        self._sweeper = None

    async def _sweep_loop(self) -> None:
        while True:
            await asyncio.sleep(self.check_period)
            self.sweep()

    def health_check(self) -> bool:
        """sweeper 태스크가 동작 중인지 (멈추면 만료 엔트리가 정리되지 않음)"""
        return self._sweeper is not None and not self._sweeper.done()

    def __len__(self) -> int:
        return len(self._store)
