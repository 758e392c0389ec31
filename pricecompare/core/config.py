"""설정 관리 - 환경 변수 로드 및 검증"""
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator


class Settings(BaseSettings):
    """애플리케이션 설정"""

    # 실행 환경
    environment: str = "development"
    port: int = 3000

    # eBay (OAuth client-credentials)
    ebay_client_id: str = ""
    ebay_client_secret: str = ""
    ebay_env: str = "sandbox"  # sandbox | production

    # Etsy / AliExpress(RapidAPI)
    etsy_api_key: str = ""
    rapidapi_key: str = ""
    rapidapi_aliexpress_host: str = "aliexpress-datahub.p.rapidapi.com"

    # 캐시 (in-memory, 프로세스 단위)
    cache_ttl: int = 300  # 5분
    cache_fallback_ttl: int = 60  # 대체(fallback) 데이터는 짧게
    cache_token_ttl: int = 3600  # eBay 토큰 수명
    cache_check_period: int = 60  # 만료 엔트리 정리 주기

    # 업스트림 호출
    upstream_timeout_s: float = 10.0
    upstream_max_retries: int = 2
    upstream_backoff_s: float = 1.0  # attempt × backoff (선형)
    upstream_impersonate: str = "chrome110"
    upstream_max_clients: int = 20
    upstream_user_agent: str = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"

    # 소스별 결과 수 제한
    ebay_result_limit: int = 10
    etsy_result_limit: int = 8
    aliexpress_result_limit: int = 8  # RapidAPI는 limit 파라미터가 없어 응답을 잘라냄

    # 검색어
    query_min_length: int = 2
    query_max_length: int = 100

    # API
    api_title: str = "PriceCompare"
    api_version: str = "1.0.0"
    api_description: str = "eBay · Etsy · AliExpress 검색 결과를 한 번에 비교합니다."

    # 로깅
    log_level: str = "INFO"

    @field_validator("cache_ttl", "cache_fallback_ttl", "cache_token_ttl", "cache_check_period")
    @classmethod
    def validate_cache_ttls(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("cache TTLs must be positive")
        return v

    @field_validator("upstream_timeout_s")
    @classmethod
    def validate_upstream_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("upstream_timeout_s must be positive")
        return v

    @field_validator("upstream_max_retries")
    @classmethod
    def validate_upstream_retries(cls, v: int) -> int:
        if v < 1:
            raise ValueError("upstream_max_retries must be >= 1")
        return v

    @field_validator("ebay_env")
    @classmethod
    def validate_ebay_env(cls, v: str) -> str:
        v = (v or "").strip().lower()
        if v not in ("sandbox", "production"):
            raise ValueError("ebay_env must be 'sandbox' or 'production'")
        return v

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @property
    def ebay_api_base(self) -> str:
        """eBay Browse API 호스트 (sandbox/production)"""
        if self.ebay_env == "production":
            return "https://api.ebay.com"
        return "https://api.sandbox.ebay.com"

    @property
    def ebay_oauth_url(self) -> str:
        return f"{self.ebay_api_base}/identity/v1/oauth2/token"

    def missing_credentials(self) -> list[str]:
        """필수 자격증명 중 비어 있는 환경 변수 이름 목록"""
        required = {
            "EBAY_CLIENT_ID": self.ebay_client_id,
            "EBAY_CLIENT_SECRET": self.ebay_client_secret,
            "RAPIDAPI_KEY": self.rapidapi_key,
        }
        return [name for name, value in required.items() if not value]

    def credential_status(self, value: Optional[str]) -> str:
        return "Configured" if value else "Missing"

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")


settings = Settings()
