"""Source Outcome - 소스별 검색 결과 표준 포맷

소스 검색이 어떤 경로(업스트림/캐시/fallback)로 결과를 만들었는지 기록합니다.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class SourceStatus(str, Enum):
    """소스 검색 상태"""

    LIVE = "live"  # 업스트림 호출 성공
    CACHE_HIT = "cache_hit"  # 캐시 히트 (live 또는 fallback 결과 재사용)
    FALLBACK = "fallback"  # 업스트림 실패, 합성 데이터


@dataclass
class SourceOutcome:
    """소스 하나의 검색 결과

    Attributes:
        source: "ebay" | "etsy" | "aliexpress"
        query: 정제된 검색어
        status: 결과 경로
        items: enhance된 raw 아이템 목록
        elapsed_ms: 소요 시간 (밀리초)
        error_message: fallback으로 전환된 원인
    """

    source: str
    query: str
    status: SourceStatus
    items: list[dict[str, Any]] = field(default_factory=list)
    elapsed_ms: Optional[float] = None
    error_message: Optional[str] = None
    from_fallback: bool = False  # 캐시된 payload가 fallback 데이터인지

    @property
    def is_degraded(self) -> bool:
        return self.status == SourceStatus.FALLBACK or self.from_fallback

    @classmethod
    def live(cls, source: str, query: str, items: list[dict[str, Any]], elapsed_ms: float) -> "SourceOutcome":
        return cls(source=source, query=query, status=SourceStatus.LIVE, items=items, elapsed_ms=elapsed_ms)

    @classmethod
    def from_cache(
        cls, source: str, query: str, items: list[dict[str, Any]], from_fallback: bool = False
    ) -> "SourceOutcome":
        return cls(
            source=source,
            query=query,
            status=SourceStatus.CACHE_HIT,
            items=items,
            elapsed_ms=0.0,
            from_fallback=from_fallback,
        )

    @classmethod
    def fallback(
        cls, source: str, query: str, items: list[dict[str, Any]], elapsed_ms: float, error: str
    ) -> "SourceOutcome":
        """업스트림 실패 후 fallback 결과 생성

        Args:
            source: 소스 이름
            query: 검색어
            items: fallback 생성기가 만든 아이템
            elapsed_ms: 실패까지 걸린 시간 (밀리초)
            error: 실패 원인

        Returns:
            SourceOutcome: FALLBACK 상태 결과
        """
        return cls(
            source=source,
            query=query,
            status=SourceStatus.FALLBACK,
            items=items,
            elapsed_ms=elapsed_ms,
            error_message=error,
        )
