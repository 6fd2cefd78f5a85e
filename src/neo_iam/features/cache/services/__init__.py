"""Cache services."""

from .permission_cache_service import PermissionCacheService

__all__ = ["PermissionCacheService"]
