"""클라이언트 검색 결과 캐시 (5분 TTL)"""
import copy
import time
from typing import Any, Callable, Optional

CLIENT_CACHE_TTL_S = 5 * 60


def search_cache_key(query: str, category: str = "") -> str:
    return f"search:{query}:{category}"


class ClientSearchCache:
    """키 → (저장 시각, 응답) 맵. 만료 엔트리는 조회 시 제거합니다."""

    def __init__(self, ttl_s: float = CLIENT_CACHE_TTL_S, clock: Callable[[], float] = time.monotonic):
        self.ttl_s = ttl_s
        self._clock = clock
        self._entries: dict[str, tuple[float, Any]] = {}

    def get(self, key: str) -> Optional[Any]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        stored_at, data = entry
        if self._clock() - stored_at >= self.ttl_s:
            del self._entries[key]
            return None
        return copy.deepcopy(data)

    def set(self, key: str, data: Any) -> None:
        self._entries[key] = (self._clock(), copy.deepcopy(data))

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
