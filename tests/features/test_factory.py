"""Tests for IamServiceFactory wiring."""

import pytest
from unittest.mock import MagicMock

from neo_iam.config import CacheBackendType, IamSettings
from neo_iam.core.exceptions import NeoIamError
from neo_iam.factory import IamServiceFactory
from neo_iam.features.cache import MemoryCacheAdapter, RedisCacheAdapter
from neo_iam.features.events import InMemoryEventBus, RedisStreamEventBus
from neo_iam.features.permissions.repositories import AsyncPGRoleRepository


class TestIamServiceFactory:
    def test_defaults_to_in_process_collaborators(self, settings):
        factory = IamServiceFactory(settings=settings)
        assert isinstance(factory.get_cache_backend(), MemoryCacheAdapter)
        assert isinstance(factory.get_event_bus(), InMemoryEventBus)

    def test_redis_backends_when_configured(self):
        settings = IamSettings(
            _env_file=None,
            cache_backend=CacheBackendType.REDIS,
            redis_url="redis://localhost:6379/0",
            event_stream_name="events:test",
        )
        factory = IamServiceFactory(settings=settings, redis_client=MagicMock())

        assert isinstance(factory.get_cache_backend(), RedisCacheAdapter)
        bus = factory.get_event_bus()
        assert isinstance(bus, RedisStreamEventBus)
        assert bus.stream_name == "events:test"

    def test_repositories_require_pool(self, settings):
        factory = IamServiceFactory(settings=settings)
        with pytest.raises(NeoIamError) as exc_info:
            factory.get_role_repository()
        assert exc_info.value.error_code == "FACTORY_NOT_INITIALIZED"

    def test_injected_pool_builds_asyncpg_repositories(self, settings, mock_pool):
        factory = IamServiceFactory(settings=settings, pool=mock_pool)
        assert isinstance(factory.get_role_repository(), AsyncPGRoleRepository)

    def test_handlers_are_cached(self, factory):
        assert factory.get_assign_role_to_user() is factory.get_assign_role_to_user()
        assert factory.get_update_permission() is factory.get_update_permission()
        assert factory.get_post_commit_steps() is factory.get_post_commit_steps()

    @pytest.mark.asyncio
    async def test_initialize_without_database_is_noop(self, factory):
        await factory.initialize()
        await factory.close()


class TestIamSettings:
    def test_prefix_gets_trailing_colon(self):
        assert IamSettings(_env_file=None, permission_cache_prefix="perm").permission_cache_prefix == "perm:"

    def test_rejects_unknown_schema(self):
        with pytest.raises(ValueError):
            IamSettings(_env_file=None, db_schema="public")
