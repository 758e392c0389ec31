"""콘텐츠 정책 필터 - 차단어 포함 검색어 판정"""
from typing import Iterable, Optional

from pricecompare.core.logging import logger
from pricecompare.utils.resource_loader import load_restricted_message, load_restricted_terms


class PolicyFilter:
    """검색어 차단 판정

    규칙은 하나뿐입니다: 소문자화·trim한 검색어가 차단어 중 하나를
    부분 문자열로 포함하면 차단. 단어 경계는 보지 않습니다.
    """

    def __init__(self, terms: Optional[Iterable[str]] = None, message: Optional[str] = None):
        source_terms = terms if terms is not None else load_restricted_terms()
        self.terms: tuple[str, ...] = tuple(
            t.strip().lower() for t in source_terms if t and t.strip()
        )
        self.message = message or load_restricted_message()
        logger.info(f"[POLICY] Loaded {len(self.terms)} restricted terms")

    def is_restricted(self, query: str) -> bool:
        normalized = (query or "").lower().strip()
        if not normalized:
            return False
        return any(term in normalized for term in self.terms)

    def matched_term(self, query: str) -> Optional[str]:
        """처음 일치한 차단어 (로깅/디버깅용)"""
        normalized = (query or "").lower().strip()
        for term in self.terms:
            if term in normalized:
                return term
        return None
