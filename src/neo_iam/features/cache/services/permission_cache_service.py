"""Permission cache service.

Stores each user's effective permission set under
``<prefix><user_id>`` (``rbac:permissions:<user_id>`` by default). Entries
are always replaced whole, never patched, so concurrent readers see either
the old set, the new set, or a miss.
"""

import logging
from typing import Any, Dict, List, Optional

from ....config.constants import CacheKeys, CacheTTL
from ....core.exceptions import CacheError, CacheInvalidationError
from ....core.value_objects import UserId
from ..entities.protocols import CacheBackend

logger = logging.getLogger(__name__)


class PermissionCacheService:
    """Read-through storage and eviction of effective permission sets."""

    def __init__(
        self,
        backend: CacheBackend,
        prefix: str = CacheKeys.PERMISSIONS_PREFIX,
        ttl: int = CacheTTL.PERMISSIONS_DEFAULT,
    ):
        self._backend = backend
        self._prefix = prefix
        self._ttl = ttl

    @property
    def prefix(self) -> str:
        return self._prefix

    def user_key(self, user_id: UserId) -> str:
        return f"{self._prefix}{user_id}"

    async def get_user_permissions(self, user_id: UserId) -> Optional[List[Dict[str, Any]]]:
        """Return the cached set, or None on a miss or a backend failure."""
        try:
            return await self._backend.get(self.user_key(user_id))
        except CacheError as e:
            logger.warning(f"Permission cache read failed for user {user_id}: {e}")
            return None

    async def set_user_permissions(self, user_id: UserId, permissions: List[Dict[str, Any]]) -> None:
        """Replace the cached set; failures are logged and ignored."""
        try:
            await self._backend.set(self.user_key(user_id), permissions, ttl=self._ttl)
        except CacheError as e:
            logger.warning(f"Permission cache write failed for user {user_id}: {e}")

    async def invalidate_user(self, user_id: UserId) -> int:
        """Evict one user's entry. Raises CacheInvalidationError on failure."""
        key = self.user_key(user_id)
        try:
            removed = await self._backend.delete(key)
        except CacheError as e:
            raise CacheInvalidationError(
                f"Failed to invalidate permission cache for user {user_id}",
                details={"key": key, "reason": str(e)},
            ) from e
        logger.debug(f"Invalidated permission cache key {key}")
        return 1 if removed else 0

    async def invalidate_all(self) -> int:
        """Evict every entry in the permission namespace.

        Used whenever a role or permission definition changes, since any
        number of users may hold it.
        """
        try:
            count = await self._backend.delete_by_prefix(self._prefix)
        except CacheError as e:
            raise CacheInvalidationError(
                "Failed to invalidate permission cache namespace",
                details={"prefix": self._prefix, "reason": str(e)},
            ) from e
        logger.info(f"Invalidated {count} permission cache entries under {self._prefix}")
        return count
