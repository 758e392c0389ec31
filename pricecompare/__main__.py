"""`python -m pricecompare` 로 개발 서버 실행"""
import uvicorn

from pricecompare.core.config import settings


def main() -> None:
    uvicorn.run(
        "pricecompare.app:app",
        host="0.0.0.0",
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
