"""FastAPI 앱 팩토리"""
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from pricecompare.api import health_router, search_router
from pricecompare.core.config import Settings, settings as default_settings
from pricecompare.core.exceptions import ConfigError, ValidationError
from pricecompare.core.logging import logger
from pricecompare.core.security import log_request
from pricecompare.services.container import ServiceContainer


def error_response(message: str, status_code: int) -> JSONResponse:
    """오류 응답 envelope {error, timestamp}"""
    return JSONResponse(
        status_code=status_code,
        content={"error": message, "timestamp": datetime.now(timezone.utc).isoformat()},
    )


def validate_environment(config: Settings) -> None:
    """필수 자격증명 점검

    Raises:
        ConfigError: production에서 필수 자격증명이 비어 있는 경우
    """
    logger.info("=== ENVIRONMENT CHECK ===")
    if config.ebay_env == "production" and config.environment.lower() == "development":
        logger.warning("Using production eBay keys in development; consider sandbox keys for testing")

    logger.info(f"eBay Client ID: {config.credential_status(config.ebay_client_id)}")
    logger.info(f"Etsy API Key: {config.credential_status(config.etsy_api_key)}")
    logger.info(f"RapidAPI Key: {config.credential_status(config.rapidapi_key)}")

    missing = config.missing_credentials()
    if missing:
        if config.is_production:
            logger.error(f"Missing required environment variables: {', '.join(missing)}")
            raise ConfigError(", ".join(missing))
        logger.warning(f"Missing environment variables: {', '.join(missing)} (fallback data will be served)")


def create_app(
    config: Optional[Settings] = None,
    container: Optional[ServiceContainer] = None,
) -> FastAPI:
    """
    FastAPI 앱 생성 (Factory Pattern)

    Args:
        config: 설정 (기본: 모듈 settings)
        container: 미리 만든 서비스 컨테이너 (테스트용, 생략 시 lifespan에서 생성)

    Returns:
        FastAPI 앱 인스턴스
    """
    config = config or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """애플리케이션 생명주기"""
        logger.info("Starting application...")
        validate_environment(config)
        if getattr(app.state, "container", None) is None:
            app.state.container = ServiceContainer.build(config)
        app.state.container.start()
        logger.info(f"Application started (environment={config.environment})")
        yield
        logger.info("Shutting down application...")
        await app.state.container.aclose()

    app = FastAPI(
        title=config.api_title,
        description=config.api_description,
        version=config.api_version,
        lifespan=lifespan,
    )
    app.state.container = container

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def request_logging(request: Request, call_next):
        await log_request(request)
        return await call_next(request)

    register_exception_handlers(app)

    # 라우터 등록
    app.include_router(health_router)
    app.include_router(search_router)

    return app


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError):
        logger.warning(f"[API] Validation failed: {exc.message}")
        return error_response(exc.reason, 400)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return error_response("Invalid request parameters", 400)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404:
            return error_response("Endpoint not found", 404)
        return error_response(str(exc.detail), exc.status_code)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled error: {type(exc).__name__}: {exc}", exc_info=True)
        return error_response("Internal server error", 500)


# 앱 인스턴스 생성 (uvicorn이 로드할 수 있도록)
app = create_app()
