"""Redis cache backend adapter for neo-iam."""

import json
import logging
from typing import Any, Optional

import redis.asyncio as redis
from redis.exceptions import RedisError

from ....core.exceptions import CacheError

logger = logging.getLogger(__name__)


class RedisCacheAdapter:
    """CacheBackend on redis.asyncio with JSON-encoded values."""

    def __init__(self, client: redis.Redis, scan_batch_size: int = 500):
        self._client = client
        self._scan_batch_size = scan_batch_size

    @classmethod
    def from_url(cls, url: str, **kwargs: Any) -> "RedisCacheAdapter":
        """Build an adapter with its own connection pool."""
        return cls(redis.from_url(url, decode_responses=True), **kwargs)

    async def get(self, key: str) -> Optional[Any]:
        try:
            raw = await self._client.get(key)
        except RedisError as e:
            logger.error(f"Redis GET failed for {key}: {e}")
            raise CacheError(f"Failed to read cache key {key}: {e}")
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except (TypeError, ValueError):
            logger.warning(f"Discarding undecodable cache value at {key}")
            return None

    async def set(self, key: str, value: Any, ttl: Optional[int] = None) -> None:
        try:
            payload = json.dumps(value)
        except (TypeError, ValueError) as e:
            raise CacheError(f"Value for {key} is not JSON serialisable: {e}")
        try:
            await self._client.set(key, payload, ex=ttl if ttl and ttl > 0 else None)
        except RedisError as e:
            logger.error(f"Redis SET failed for {key}: {e}")
            raise CacheError(f"Failed to write cache key {key}: {e}")

    async def delete(self, key: str) -> bool:
        try:
            return bool(await self._client.delete(key))
        except RedisError as e:
            logger.error(f"Redis DEL failed for {key}: {e}")
            raise CacheError(f"Failed to delete cache key {key}: {e}")

    async def delete_by_prefix(self, prefix: str) -> int:
        """Delete keys matching ``prefix*`` using SCAN batches."""
        deleted = 0
        batch = []
        try:
            async for key in self._client.scan_iter(match=f"{prefix}*", count=self._scan_batch_size):
                batch.append(key)
                if len(batch) >= self._scan_batch_size:
                    deleted += await self._client.delete(*batch)
                    batch = []
            if batch:
                deleted += await self._client.delete(*batch)
        except RedisError as e:
            logger.error(f"Redis prefix delete failed for {prefix}: {e}")
            raise CacheError(f"Failed to delete cache keys with prefix {prefix}: {e}")
        logger.debug(f"Deleted {deleted} redis keys with prefix {prefix}")
        return deleted

    async def close(self) -> None:
        await self._client.aclose()
