"""Permission cache feature."""

from .adapters import MemoryCacheAdapter, RedisCacheAdapter
from .entities import CacheBackend
from .services import PermissionCacheService

__all__ = ["CacheBackend", "MemoryCacheAdapter", "RedisCacheAdapter", "PermissionCacheService"]
