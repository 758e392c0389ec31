"""
검색어 정제 및 검증
"""

import re
from typing import Any

from fastapi import Request

from pricecompare.core.config import settings
from pricecompare.core.exceptions import InvalidQueryException
from pricecompare.core.logging import logger, sanitize_for_log


# 영숫자/밑줄/공백/하이픈 외 문자는 제거
_DISALLOWED_CHARS = re.compile(r"[^\w\s-]", re.ASCII)


class SecurityValidator:
    """입력 보안 검증"""

    MIN_QUERY_LENGTH = settings.query_min_length
    MAX_QUERY_LENGTH = settings.query_max_length

    @staticmethod
    def sanitize_query(value: Any) -> str:
        """검색어 정제

        허용되지 않는 문자 제거 → 100자 절단 → 양끝 공백 제거 순서로 처리합니다.
        문자열이 아니면 빈 문자열을 반환합니다.
        """
        if not isinstance(value, str):
            return ""
        cleaned = _DISALLOWED_CHARS.sub("", value)
        return cleaned[:SecurityValidator.MAX_QUERY_LENGTH].strip()

    @staticmethod
    def validate_query(query: str) -> bool:
        """정제된 검색어 검증

        Raises:
            InvalidQueryException: 2자 미만
        """
        if not query or len(query) < SecurityValidator.MIN_QUERY_LENGTH:
            raise InvalidQueryException(
                f"Search query must be at least {SecurityValidator.MIN_QUERY_LENGTH} characters"
            )
        return True

    @staticmethod
    def clean_and_validate(value: Any) -> str:
        """정제 + 검증을 한 번에 수행하고 정제된 검색어를 반환"""
        query = SecurityValidator.sanitize_query(value)
        SecurityValidator.validate_query(query)
        return query


async def log_request(request: Request) -> None:
    """요청 로깅 (민감 정보 제외)"""
    method = request.method
    path = request.url.path

    query_params = {}
    for key, value in request.query_params.items():
        query_params[key] = sanitize_for_log(str(value), max_length=50)

    client_host = request.client.host if request.client else "unknown"
    if query_params:
        logger.info(f"{method} {path}?{query_params} - IP: {client_host}")
    else:
        logger.info(f"{method} {path} - IP: {client_host}")
