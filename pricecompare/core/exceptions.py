"""커스텀 예외 정의 (Structured Exception Hierarchy)"""
from typing import Any, Optional


class PriceCompareException(Exception):
    """기본 예외 클래스 - 모든 커스텀 예외의 부모"""
    def __init__(self, message: str, error_code: str = "UNKNOWN_ERROR", details: Optional[dict[str, Any]] = None):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"


# 유효성 검증 (400)
class ValidationError(PriceCompareException):
    """사용자가 고칠 수 있는 입력 오류"""
    def __init__(self, field: str, reason: str, details: Optional[dict[str, Any]] = None):
        self.field = field
        self.reason = reason
        message = f"Validation failed for '{field}': {reason}"
        super().__init__(message, "VALIDATION_ERROR",
                         details or {"field": field, "reason": reason})


class InvalidQueryException(ValidationError):
    """유효하지 않은 검색어 (정제 후 2자 미만 등)"""
    def __init__(self, reason: str, details: Optional[dict[str, Any]] = None):
        super().__init__("query", reason, details)


# 업스트림 관련 예외
class UpstreamError(PriceCompareException):
    """마켓플레이스 호출 실패 (non-2xx, 타임아웃, 재시도 소진)

    소스 단위로 흡수되어 fallback 데이터로 대체됩니다.
    """
    def __init__(self, source: str, reason: str, status_code: Optional[int] = None,
                 details: Optional[dict[str, Any]] = None):
        self.source = source
        self.status_code = status_code
        message = f"{source} request failed: {reason}"
        super().__init__(message, "UPSTREAM_ERROR",
                         details or {"source": source, "reason": reason, "status_code": status_code})


class AuthError(UpstreamError):
    """자격증명 교환(OAuth client-credentials) 실패"""
    def __init__(self, source: str, reason: str, details: Optional[dict[str, Any]] = None):
        super().__init__(source, reason, details=details)
        self.error_code = "AUTH_ERROR"


class ConfigError(PriceCompareException):
    """필수 설정(API 키 등) 누락 - 호출 시도 없이 즉시 fallback"""
    def __init__(self, setting: str, details: Optional[dict[str, Any]] = None):
        self.setting = setting
        message = f"Required setting is not configured: {setting}"
        super().__init__(message, "CONFIG_ERROR", details or {"setting": setting})
