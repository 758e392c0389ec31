"""전역 테스트 설정

역할:
- 테스트 환경 구성 (네트워크 접근 없음)
- 공통 Fake 주입 (HTTP, 마켓플레이스 클라이언트, 시계)
"""

from __future__ import annotations

import os
import random
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Optional

import pytest

# 프로젝트 루트를 경로에 추가
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# settings는 import 시점에 생성되므로 패키지 import 전에 설정
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("LOG_LEVEL", "INFO")

from pricecompare.core.config import Settings  # noqa: E402
from pricecompare.core.exceptions import UpstreamError  # noqa: E402
from pricecompare.services.impl.cache_service import CacheService  # noqa: E402


@pytest.fixture(scope="session", autouse=True)
def test_env() -> None:
    """테스트 환경 변수 설정 (세션 전역)"""
    os.environ["ENVIRONMENT"] = "test"
    os.environ["LOG_LEVEL"] = "INFO"


class FakeClock:
    """수동으로 진행시키는 시계 (초 단위)"""

    def __init__(self, start: float = 1_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@dataclass
class FakeHttp:
    """SharedHttpClient 대역

    responses: URL 부분 문자열 → 응답(dict) 또는 예외.
    매칭되는 항목이 없으면 404 UpstreamError.
    """

    responses: dict[str, Any] = field(default_factory=dict)
    calls: list[dict[str, Any]] = field(default_factory=list)

    async def request_json(self, method: str, url: str, *, source: str, **kwargs: Any) -> Any:
        self.calls.append({"method": method, "url": url, "source": source, **kwargs})
        for fragment, response in self.responses.items():
            if fragment in url:
                if isinstance(response, Exception):
                    raise response
                return response
        raise UpstreamError(source, "HTTP 404", status_code=404)

    async def close(self) -> None:
        return None


@dataclass
class FakeClient:
    """MarketplaceClient 대역

    items를 돌려주거나 error를 던지며 호출 횟수를 기록합니다.
    """

    source: str
    items: list[dict[str, Any]] = field(default_factory=list)
    error: Optional[Exception] = None
    calls: list[str] = field(default_factory=list)

    async def search(self, query: str) -> list[dict[str, Any]]:
        self.calls.append(query)
        if self.error is not None:
            raise self.error
        return [dict(item) for item in self.items]

    def enhance(self, item: dict[str, Any]) -> dict[str, Any]:
        return {**item, "productUrl": f"https://example.com/{self.source}/{len(self.calls)}"}


def ebay_item(item_id: str, title: str = "Dell Laptop", price: str = "499.99") -> dict[str, Any]:
    return {"itemId": item_id, "title": title, "price": {"value": price, "currency": "USD"}}


def etsy_item(listing_id: int, title: str = "Handmade Mug", price: str = "25.00") -> dict[str, Any]:
    return {"listing_id": listing_id, "title": title, "price": price}


def aliexpress_item(product_id: str, title: str = "Laptop Stand", price: str = "US $9.99") -> dict[str, Any]:
    return {"productId": product_id, "product_title": title, "product_price": price}


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def rng() -> random.Random:
    return random.Random(42)


@pytest.fixture
def test_settings() -> Settings:
    """자격증명이 채워진 테스트 설정 (.env 무시)"""
    return Settings(
        _env_file=None,
        environment="test",
        ebay_client_id="test-client-id",
        ebay_client_secret="test-client-secret",
        etsy_api_key="test-etsy-key",
        rapidapi_key="test-rapidapi-key",
        upstream_backoff_s=0.01,
    )


@pytest.fixture
def cache_service(clock: FakeClock) -> CacheService:
    return CacheService(default_ttl=300, check_period=60, clock=clock)


@pytest.fixture
def fake_http() -> FakeHttp:
    return FakeHttp()


@pytest.fixture
def healthy_clients() -> dict[str, FakeClient]:
    """정상 응답하는 세 소스 (ebay 10, etsy 8, aliexpress 8)"""
    return {
        "ebay": FakeClient("ebay", [ebay_item(f"v1|{i}|0", f"Dell Laptop Model {i}") for i in range(10)]),
        "etsy": FakeClient("etsy", [etsy_item(1000 + i, f"Handmade Laptop Sleeve {i}") for i in range(8)]),
        "aliexpress": FakeClient(
            "aliexpress", [aliexpress_item(f"100500{i}", f"Laptop Stand {i}") for i in range(8)]
        ),
    }


@pytest.fixture
def failing_clients() -> dict[str, FakeClient]:
    """모두 실패하는 세 소스"""
    return {
        name: FakeClient(name, error=UpstreamError(name, "HTTP 503", status_code=503))
        for name in ("ebay", "etsy", "aliexpress")
    }


def total_calls(clients: dict[str, FakeClient]) -> int:
    return sum(len(client.calls) for client in clients.values())


@pytest.fixture
def count_calls() -> Callable[[dict[str, FakeClient]], int]:
    return total_calls
