"""Pytest configuration and fixtures for neo-iam tests."""

import pytest
from unittest.mock import AsyncMock, MagicMock

from neo_iam.config import IamSettings
from neo_iam.core.value_objects import Email, OrganizationId, PermissionId, RoleId, UserId
from neo_iam.factory import IamServiceFactory
from neo_iam.features.cache import MemoryCacheAdapter, PermissionCacheService
from neo_iam.features.events import EventPublisherService, InMemoryEventBus
from neo_iam.features.permissions.application import PostCommitSteps
from neo_iam.features.permissions.entities import Permission, Role
from neo_iam.features.users.entities import User

from fakes import (
    InMemoryGroupRepository,
    InMemoryPermissionRepository,
    InMemoryRoleRepository,
    InMemoryUserPermissionRepository,
    InMemoryUserRepository,
    InMemoryUserRoleRepository,
)


@pytest.fixture
def mock_connection():
    """Mock asyncpg connection for repository tests."""
    conn = AsyncMock()
    conn.fetchrow = AsyncMock()
    conn.fetch = AsyncMock()
    conn.fetchval = AsyncMock()
    conn.execute = AsyncMock()
    conn.transaction = MagicMock()
    conn.transaction.return_value.__aenter__ = AsyncMock(return_value=None)
    conn.transaction.return_value.__aexit__ = AsyncMock(return_value=False)
    return conn


@pytest.fixture
def mock_pool(mock_connection):
    """Mock asyncpg pool whose ``acquire()`` yields ``mock_connection``."""
    pool = MagicMock()
    pool.acquire.return_value.__aenter__ = AsyncMock(return_value=mock_connection)
    pool.acquire.return_value.__aexit__ = AsyncMock(return_value=False)
    return pool


@pytest.fixture
def sample_user_id():
    """Sample user ID for testing."""
    return UserId.generate()


@pytest.fixture
def sample_role_id():
    """Sample role ID for testing."""
    return RoleId.generate()


@pytest.fixture
def sample_permission_id():
    """Sample permission ID for testing."""
    return PermissionId.generate()


@pytest.fixture
def sample_organization_id():
    """Sample organization ID for testing."""
    return OrganizationId.generate()


@pytest.fixture
def settings():
    return IamSettings(_env_file=None)


@pytest.fixture
def role_repository():
    return InMemoryRoleRepository()


@pytest.fixture
def permission_repository():
    return InMemoryPermissionRepository()


@pytest.fixture
def user_repository():
    return InMemoryUserRepository()


@pytest.fixture
def user_role_repository():
    return InMemoryUserRoleRepository()


@pytest.fixture
def user_permission_repository():
    return InMemoryUserPermissionRepository()


@pytest.fixture
def group_repository():
    return InMemoryGroupRepository()


@pytest.fixture
def cache_backend():
    return MemoryCacheAdapter(default_ttl=600)


@pytest.fixture
def event_bus():
    return InMemoryEventBus()


@pytest.fixture
def permission_cache(cache_backend):
    return PermissionCacheService(cache_backend)


@pytest.fixture
def post_commit(permission_cache, event_bus):
    return PostCommitSteps(permission_cache, EventPublisherService(event_bus))


@pytest.fixture
def factory(
    settings,
    cache_backend,
    event_bus,
    role_repository,
    permission_repository,
    user_repository,
    user_role_repository,
    user_permission_repository,
    group_repository,
):
    """Service factory wired entirely to in-memory collaborators."""
    return IamServiceFactory(
        settings=settings,
        cache_backend=cache_backend,
        event_bus=event_bus,
        role_repository=role_repository,
        permission_repository=permission_repository,
        user_repository=user_repository,
        user_role_repository=user_role_repository,
        user_permission_repository=user_permission_repository,
        group_repository=group_repository,
    )


@pytest.fixture
def make_user(user_repository):
    """Create and store an active user."""

    async def _make(email="jane@example.com", organization_id=None):
        user = User.create(
            email=Email(email),
            password_hash="$argon2id$hash",
            first_name="Jane",
            last_name="Doe",
            organization_id=organization_id,
        )
        await user_repository.save(user)
        return user

    return _make


@pytest.fixture
def make_permission(permission_repository):
    """Create and store a permission named ``resource:action``."""

    async def _make(resource="user", action="read"):
        permission = Permission.create(
            name=f"{resource}:{action}",
            description=f"{action} {resource}",
            resource=resource,
            action=action,
        )
        await permission_repository.save(permission)
        return permission

    return _make


@pytest.fixture
def make_role(role_repository):
    """Create and store a role holding ``permissions``."""

    async def _make(name="editor", permissions=(), is_system=False):
        role = Role.create(
            name=name,
            permission_ids=[p.id for p in permissions],
            is_system=is_system,
        )
        await role_repository.save(role)
        return role

    return _make
