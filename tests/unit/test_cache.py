"""Tests for cache adapters and the permission cache service."""

import time

import pytest
from unittest.mock import AsyncMock, MagicMock

from redis.exceptions import ConnectionError as RedisConnectionError

from neo_iam.core.exceptions import CacheError, CacheInvalidationError
from neo_iam.core.value_objects import UserId
from neo_iam.features.cache import MemoryCacheAdapter, PermissionCacheService, RedisCacheAdapter


class TestMemoryCacheAdapter:
    @pytest.fixture
    def adapter(self):
        return MemoryCacheAdapter(default_ttl=60)

    @pytest.mark.asyncio
    async def test_set_get_delete(self, adapter):
        await adapter.set("k", {"a": 1})
        assert await adapter.get("k") == {"a": 1}
        assert await adapter.delete("k") is True
        assert await adapter.delete("k") is False
        assert await adapter.get("k") is None

    @pytest.mark.asyncio
    async def test_expired_entries_are_misses(self, adapter):
        await adapter.set("k", "v", ttl=10)
        adapter._store["k"].expires_at = time.monotonic() - 1

        assert await adapter.get("k") is None
        assert len(adapter) == 0

    @pytest.mark.asyncio
    async def test_delete_by_prefix_only_touches_namespace(self, adapter):
        await adapter.set("rbac:permissions:u1", [])
        await adapter.set("rbac:permissions:u2", [])
        await adapter.set("other:u1", [])

        assert await adapter.delete_by_prefix("rbac:permissions:") == 2
        assert await adapter.get("other:u1") == []


async def _scan(keys):
    for key in keys:
        yield key


class TestRedisCacheAdapter:
    @pytest.fixture
    def client(self):
        client = MagicMock()
        client.get = AsyncMock()
        client.set = AsyncMock()
        client.delete = AsyncMock()
        client.aclose = AsyncMock()
        return client

    @pytest.fixture
    def adapter(self, client):
        return RedisCacheAdapter(client, scan_batch_size=2)

    @pytest.mark.asyncio
    async def test_get_decodes_json(self, adapter, client):
        client.get.return_value = '[{"name": "user:read"}]'
        assert await adapter.get("k") == [{"name": "user:read"}]

    @pytest.mark.asyncio
    async def test_get_discards_undecodable_value(self, adapter, client):
        client.get.return_value = "{not json"
        assert await adapter.get("k") is None

    @pytest.mark.asyncio
    async def test_set_encodes_with_expiry(self, adapter, client):
        await adapter.set("k", ["a"], ttl=30)
        client.set.assert_awaited_once_with("k", '["a"]', ex=30)

    @pytest.mark.asyncio
    async def test_redis_failure_becomes_cache_error(self, adapter, client):
        client.get.side_effect = RedisConnectionError("down")
        with pytest.raises(CacheError):
            await adapter.get("k")

    @pytest.mark.asyncio
    async def test_delete_by_prefix_deletes_in_batches(self, adapter, client):
        client.scan_iter = MagicMock(return_value=_scan(["p:1", "p:2", "p:3"]))
        client.delete.side_effect = [2, 1]

        assert await adapter.delete_by_prefix("p:") == 3
        client.scan_iter.assert_called_once_with(match="p:*", count=2)
        assert client.delete.await_count == 2

    @pytest.mark.asyncio
    async def test_close(self, adapter, client):
        await adapter.close()
        client.aclose.assert_awaited_once()


class TestPermissionCacheService:
    @pytest.fixture
    def backend(self):
        return MemoryCacheAdapter()

    @pytest.fixture
    def service(self, backend):
        return PermissionCacheService(backend, prefix="rbac:permissions:", ttl=60)

    @pytest.fixture
    def failing_service(self):
        backend = MagicMock()
        for name in ("get", "set", "delete", "delete_by_prefix"):
            setattr(backend, name, AsyncMock(side_effect=CacheError("down")))
        return PermissionCacheService(backend)

    def test_user_key_layout(self, service):
        assert service.user_key(UserId("u-1")) == "rbac:permissions:u-1"

    @pytest.mark.asyncio
    async def test_round_trip_and_invalidate_user(self, service):
        user_id = UserId("u-1")
        await service.set_user_permissions(user_id, [{"name": "user:read"}])
        assert await service.get_user_permissions(user_id) == [{"name": "user:read"}]

        assert await service.invalidate_user(user_id) == 1
        assert await service.get_user_permissions(user_id) is None
        assert await service.invalidate_user(user_id) == 0

    @pytest.mark.asyncio
    async def test_invalidate_all_leaves_foreign_keys(self, service, backend):
        await service.set_user_permissions(UserId("u-1"), [])
        await service.set_user_permissions(UserId("u-2"), [])
        await backend.set("sessions:u-1", "x")

        assert await service.invalidate_all() == 2
        assert await backend.get("sessions:u-1") == "x"

    @pytest.mark.asyncio
    async def test_reads_and_writes_degrade_silently(self, failing_service):
        assert await failing_service.get_user_permissions(UserId("u-1")) is None
        await failing_service.set_user_permissions(UserId("u-1"), [])

    @pytest.mark.asyncio
    async def test_invalidation_failures_raise(self, failing_service):
        with pytest.raises(CacheInvalidationError):
            await failing_service.invalidate_user(UserId("u-1"))
        with pytest.raises(CacheInvalidationError):
            await failing_service.invalidate_all()
