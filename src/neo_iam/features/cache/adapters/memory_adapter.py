"""In-process cache backend adapter for neo-iam."""

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


@dataclass
class MemoryCacheEntry:
    """Memory cache entry with expiry."""
    value: Any
    expires_at: Optional[float] = None

    @property
    def is_expired(self) -> bool:
        if self.expires_at is None:
            return False
        return time.monotonic() > self.expires_at


class MemoryCacheAdapter:
    """Dict-backed CacheBackend with per-entry TTL.

    Every operation holds a single asyncio.Lock, so a prefix delete never
    interleaves with a concurrent set.
    """

    def __init__(self, default_ttl: Optional[int] = None):
        self._store: Dict[str, MemoryCacheEntry] = {}
        self._lock = asyncio.Lock()
        self._default_ttl = default_ttl

    async def get(self, key: str) -> Optional[Any]:
        async with self._lock:
            entry = self._store.get(key)
            if entry is None:
                return None
            if entry.is_expired:
                del self._store[key]
                return None
            return entry.value

    async def set(self, key: str, value: Any, ttl: Optional[int] = None) -> None:
        ttl = ttl if ttl is not None else self._default_ttl
        expires_at = time.monotonic() + ttl if ttl and ttl > 0 else None
        async with self._lock:
            self._store[key] = MemoryCacheEntry(value=value, expires_at=expires_at)

    async def delete(self, key: str) -> bool:
        async with self._lock:
            return self._store.pop(key, None) is not None

    async def delete_by_prefix(self, prefix: str) -> int:
        async with self._lock:
            keys = [key for key in self._store if key.startswith(prefix)]
            for key in keys:
                del self._store[key]
        logger.debug(f"Deleted {len(keys)} memory cache keys with prefix {prefix}")
        return len(keys)

    async def clear(self) -> None:
        async with self._lock:
            self._store.clear()

    def __len__(self) -> int:
        return len(self._store)
