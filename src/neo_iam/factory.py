"""Process-start wiring for neo-iam.

``IamServiceFactory`` lazily builds repositories, the permission cache,
the event bus and every handler. Collaborators passed to the constructor
take precedence over the ones built from settings, which is how tests and
embedding applications substitute their own implementations.

Usage:
    factory = IamServiceFactory(settings=get_settings())
    await factory.initialize()
    assign = factory.get_assign_role_to_user()
    result = await assign.execute(AssignRoleToUserCommand(user_id=..., role_id=...))
    await factory.close()
"""

import logging
from typing import Any, Callable, Dict, Optional

import asyncpg
import redis.asyncio as redis

from .config import IamSettings, get_settings
from .core.exceptions import NeoIamError
from .features.cache import CacheBackend, MemoryCacheAdapter, PermissionCacheService, RedisCacheAdapter
from .features.database import create_pool
from .features.events import EventBus, EventPublisherService, InMemoryEventBus, RedisStreamEventBus
from .features.groups.application.commands import AddUserToGroup, RemoveUserFromGroup
from .features.groups.entities import GroupRepository
from .features.groups.repositories import AsyncPGGroupRepository
from .features.permissions.application import PostCommitSteps
from .features.permissions.application.commands import (
    AddPermissionToRole,
    AssignPermissionToUser,
    AssignRoleToUser,
    CreatePermission,
    CreateRole,
    DeletePermission,
    DeleteRole,
    RemovePermissionFromRole,
    RevokePermissionFromUser,
    RevokeRoleFromUser,
    UpdatePermission,
    UpdateRole,
)
from .features.permissions.application.queries import (
    AuthorizeAction,
    GetRoleUsers,
    GetUserPermissions,
    GetUserRoles,
)
from .features.permissions.entities import (
    PermissionRepository,
    RoleRepository,
    UserPermissionRepository,
    UserRoleRepository,
)
from .features.permissions.repositories import (
    AsyncPGPermissionRepository,
    AsyncPGRoleRepository,
    AsyncPGUserPermissionRepository,
    AsyncPGUserRoleRepository,
)
from .features.users.application.commands import CreateUser, DeleteUser
from .features.users.entities import UserRepository
from .features.users.repositories import AsyncPGUserRepository

logger = logging.getLogger(__name__)


class IamServiceFactory:
    """Factory for creating and configuring neo-iam services."""

    def __init__(
        self,
        settings: Optional[IamSettings] = None,
        pool: Optional[asyncpg.Pool] = None,
        redis_client: Optional[redis.Redis] = None,
        cache_backend: Optional[CacheBackend] = None,
        event_bus: Optional[EventBus] = None,
        role_repository: Optional[RoleRepository] = None,
        permission_repository: Optional[PermissionRepository] = None,
        user_repository: Optional[UserRepository] = None,
        user_role_repository: Optional[UserRoleRepository] = None,
        user_permission_repository: Optional[UserPermissionRepository] = None,
        group_repository: Optional[GroupRepository] = None,
    ):
        self.settings = settings or get_settings()
        self._pool = pool
        self._owns_pool = False
        self._redis_client = redis_client
        self._owns_redis = False

        # Lazy-initialized services
        self._cache_backend = cache_backend
        self._event_bus = event_bus
        self._role_repository = role_repository
        self._permission_repository = permission_repository
        self._user_repository = user_repository
        self._user_role_repository = user_role_repository
        self._user_permission_repository = user_permission_repository
        self._group_repository = group_repository
        self._permission_cache = None
        self._event_publisher = None
        self._post_commit = None
        self._handlers: Dict[str, Any] = {}

    # Infrastructure

    async def initialize(self) -> None:
        """Open the database pool when one was neither injected nor needed."""
        if self._pool is None and self._needs_pool() and self.settings.database_url:
            self._pool = await create_pool(
                str(self.settings.database_url),
                min_size=self.settings.db_pool_min_size,
                max_size=self.settings.db_pool_max_size,
            )
            self._owns_pool = True

    async def close(self) -> None:
        if self._owns_pool and self._pool is not None:
            await self._pool.close()
            self._pool = None
        if self._owns_redis and self._redis_client is not None:
            await self._redis_client.aclose()
            self._redis_client = None

    def _needs_pool(self) -> bool:
        return any(
            repository is None
            for repository in (
                self._role_repository,
                self._permission_repository,
                self._user_repository,
                self._user_role_repository,
                self._user_permission_repository,
                self._group_repository,
            )
        )

    def _require_pool(self) -> asyncpg.Pool:
        if self._pool is None:
            raise NeoIamError(
                "Database pool not initialized; call initialize() or inject repositories",
                error_code="FACTORY_NOT_INITIALIZED",
            )
        return self._pool

    def get_redis_client(self) -> redis.Redis:
        if self._redis_client is None:
            if not self.settings.redis_url:
                raise NeoIamError("IAM_REDIS_URL is not configured", error_code="REDIS_NOT_CONFIGURED")
            self._redis_client = redis.from_url(str(self.settings.redis_url), decode_responses=True)
            self._owns_redis = True
        return self._redis_client

    def get_cache_backend(self) -> CacheBackend:
        if self._cache_backend is None:
            if self.settings.is_redis_cache():
                self._cache_backend = RedisCacheAdapter(self.get_redis_client())
            else:
                self._cache_backend = MemoryCacheAdapter(default_ttl=self.settings.permission_cache_ttl)
            logger.info(f"Permission cache backend: {self.settings.cache_backend.value}")
        return self._cache_backend

    def get_event_bus(self) -> EventBus:
        if self._event_bus is None:
            if self.settings.redis_url:
                self._event_bus = RedisStreamEventBus(
                    self.get_redis_client(),
                    stream_name=self.settings.event_stream_name,
                    max_len=self.settings.event_stream_max_len,
                )
            else:
                self._event_bus = InMemoryEventBus()
        return self._event_bus

    def get_permission_cache_service(self) -> PermissionCacheService:
        if self._permission_cache is None:
            self._permission_cache = PermissionCacheService(
                self.get_cache_backend(),
                prefix=self.settings.permission_cache_prefix,
                ttl=self.settings.permission_cache_ttl,
            )
        return self._permission_cache

    def get_event_publisher(self) -> EventPublisherService:
        if self._event_publisher is None:
            self._event_publisher = EventPublisherService(self.get_event_bus())
        return self._event_publisher

    def get_post_commit_steps(self) -> PostCommitSteps:
        if self._post_commit is None:
            self._post_commit = PostCommitSteps(
                self.get_permission_cache_service(), self.get_event_publisher()
            )
        return self._post_commit

    # Repositories

    def get_role_repository(self) -> RoleRepository:
        if self._role_repository is None:
            self._role_repository = AsyncPGRoleRepository(self._require_pool(), self.settings.db_schema)
        return self._role_repository

    def get_permission_repository(self) -> PermissionRepository:
        if self._permission_repository is None:
            self._permission_repository = AsyncPGPermissionRepository(
                self._require_pool(), self.settings.db_schema
            )
        return self._permission_repository

    def get_user_repository(self) -> UserRepository:
        if self._user_repository is None:
            self._user_repository = AsyncPGUserRepository(self._require_pool(), self.settings.db_schema)
        return self._user_repository

    def get_user_role_repository(self) -> UserRoleRepository:
        if self._user_role_repository is None:
            self._user_role_repository = AsyncPGUserRoleRepository(
                self._require_pool(), self.settings.db_schema
            )
        return self._user_role_repository

    def get_user_permission_repository(self) -> UserPermissionRepository:
        if self._user_permission_repository is None:
            self._user_permission_repository = AsyncPGUserPermissionRepository(
                self._require_pool(), self.settings.db_schema
            )
        return self._user_permission_repository

    def get_group_repository(self) -> GroupRepository:
        if self._group_repository is None:
            self._group_repository = AsyncPGGroupRepository(self._require_pool(), self.settings.db_schema)
        return self._group_repository

    # Handlers

    def _handler(self, name: str, build: Callable[[], Any]) -> Any:
        if name not in self._handlers:
            self._handlers[name] = build()
        return self._handlers[name]

    def get_assign_role_to_user(self) -> AssignRoleToUser:
        return self._handler("assign_role_to_user", lambda: AssignRoleToUser(
            self.get_user_repository(),
            self.get_role_repository(),
            self.get_user_role_repository(),
            self.get_post_commit_steps(),
        ))

    def get_revoke_role_from_user(self) -> RevokeRoleFromUser:
        return self._handler("revoke_role_from_user", lambda: RevokeRoleFromUser(
            self.get_user_repository(),
            self.get_role_repository(),
            self.get_user_role_repository(),
            self.get_post_commit_steps(),
        ))

    def get_assign_permission_to_user(self) -> AssignPermissionToUser:
        return self._handler("assign_permission_to_user", lambda: AssignPermissionToUser(
            self.get_user_repository(),
            self.get_permission_repository(),
            self.get_user_permission_repository(),
            self.get_post_commit_steps(),
        ))

    def get_revoke_permission_from_user(self) -> RevokePermissionFromUser:
        return self._handler("revoke_permission_from_user", lambda: RevokePermissionFromUser(
            self.get_user_repository(),
            self.get_permission_repository(),
            self.get_user_permission_repository(),
            self.get_post_commit_steps(),
        ))

    def get_create_role(self) -> CreateRole:
        return self._handler("create_role", lambda: CreateRole(
            self.get_role_repository(), self.get_permission_repository(), self.get_post_commit_steps()
        ))

    def get_update_role(self) -> UpdateRole:
        return self._handler("update_role", lambda: UpdateRole(
            self.get_role_repository(), self.get_post_commit_steps()
        ))

    def get_add_permission_to_role(self) -> AddPermissionToRole:
        return self._handler("add_permission_to_role", lambda: AddPermissionToRole(
            self.get_role_repository(), self.get_permission_repository(), self.get_post_commit_steps()
        ))

    def get_remove_permission_from_role(self) -> RemovePermissionFromRole:
        return self._handler("remove_permission_from_role", lambda: RemovePermissionFromRole(
            self.get_role_repository(), self.get_post_commit_steps()
        ))

    def get_delete_role(self) -> DeleteRole:
        return self._handler("delete_role", lambda: DeleteRole(
            self.get_role_repository(), self.get_post_commit_steps()
        ))

    def get_create_permission(self) -> CreatePermission:
        return self._handler("create_permission", lambda: CreatePermission(
            self.get_permission_repository(), self.get_post_commit_steps()
        ))

    def get_update_permission(self) -> UpdatePermission:
        return self._handler("update_permission", lambda: UpdatePermission(
            self.get_permission_repository(), self.get_post_commit_steps()
        ))

    def get_delete_permission(self) -> DeletePermission:
        return self._handler("delete_permission", lambda: DeletePermission(
            self.get_permission_repository(), self.get_post_commit_steps()
        ))

    def get_create_user(self) -> CreateUser:
        return self._handler("create_user", lambda: CreateUser(
            self.get_user_repository(), self.get_post_commit_steps()
        ))

    def get_delete_user(self) -> DeleteUser:
        return self._handler("delete_user", lambda: DeleteUser(
            self.get_user_repository(), self.get_post_commit_steps()
        ))

    def get_add_user_to_group(self) -> AddUserToGroup:
        return self._handler("add_user_to_group", lambda: AddUserToGroup(
            self.get_group_repository(), self.get_user_repository(), self.get_post_commit_steps()
        ))

    def get_remove_user_from_group(self) -> RemoveUserFromGroup:
        return self._handler("remove_user_from_group", lambda: RemoveUserFromGroup(
            self.get_group_repository(), self.get_post_commit_steps()
        ))

    def get_user_permissions(self) -> GetUserPermissions:
        return self._handler("get_user_permissions", lambda: GetUserPermissions(
            self.get_user_repository(),
            self.get_role_repository(),
            self.get_permission_repository(),
            self.get_user_role_repository(),
            self.get_user_permission_repository(),
            self.get_permission_cache_service(),
        ))

    def get_user_roles(self) -> GetUserRoles:
        return self._handler("get_user_roles", lambda: GetUserRoles(
            self.get_user_repository(), self.get_role_repository(), self.get_user_role_repository()
        ))

    def get_role_users(self) -> GetRoleUsers:
        return self._handler("get_role_users", lambda: GetRoleUsers(
            self.get_role_repository(), self.get_user_role_repository()
        ))

    def get_authorize_action(self) -> AuthorizeAction:
        return self._handler("authorize_action", lambda: AuthorizeAction(
            self.get_user_repository(), self.get_user_permissions()
        ))
