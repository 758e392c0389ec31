"""Services implementation package."""

from .cache_service import CacheEntry, CacheService
from .policy_filter import PolicyFilter
from .token_service import TokenService

__all__ = ["CacheEntry", "CacheService", "PolicyFilter", "TokenService"]
