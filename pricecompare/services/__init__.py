"""비즈니스 로직 서비스 - export only.

ServiceContainer는 clients/engine에 의존하므로 `pricecompare.services.container`에서
직접 import 합니다.
"""

from .impl import CacheService, PolicyFilter, TokenService

__all__ = ["CacheService", "PolicyFilter", "TokenService"]
