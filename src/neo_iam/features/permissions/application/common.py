"""Shared pieces of the command pipeline.

Every command runs load, validate, mutate, persist, then the post-commit
steps in this module: cache invalidation followed by event publication.
Both steps complete before the handler returns.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, List, Optional

from ....core.exceptions import (
    CacheInvalidationError,
    PermissionNotFoundError,
    RoleNotFoundError,
    UserNotFoundError,
)
from ....core.shared import AggregateRoot, DomainEvent
from ....core.value_objects import PermissionId, RoleId, UserId
from ...cache.services import PermissionCacheService
from ...events.services import EventPublisherService
from ...users.entities import User, UserRepository
from ..entities import Permission, PermissionRepository, Role, RoleRepository

logger = logging.getLogger(__name__)


@dataclass
class CommandResult:
    """Outcome of a committed command.

    ``cache_invalidated`` is False when the write committed but stale
    permission entries could not be evicted; ``warnings`` says why.
    """

    cache_invalidated: bool = True
    invalidated_entries: int = 0
    events_published: int = 0
    events_failed: int = 0
    warnings: List[str] = field(default_factory=list)
    data: Optional[Any] = None

    @property
    def degraded(self) -> bool:
        return not self.cache_invalidated or self.events_failed > 0


class PostCommitSteps:
    """Cache invalidation and event publication after a successful write."""

    def __init__(self, permission_cache: PermissionCacheService, publisher: EventPublisherService):
        self._permission_cache = permission_cache
        self._publisher = publisher

    async def invalidate_user(self, result: CommandResult, user_id: UserId) -> None:
        try:
            result.invalidated_entries += await self._permission_cache.invalidate_user(user_id)
        except CacheInvalidationError as e:
            self._record_invalidation_failure(result, e)

    async def invalidate_all(self, result: CommandResult) -> None:
        try:
            result.invalidated_entries += await self._permission_cache.invalidate_all()
        except CacheInvalidationError as e:
            self._record_invalidation_failure(result, e)

    def _record_invalidation_failure(self, result: CommandResult, error: CacheInvalidationError) -> None:
        logger.error(f"Permission cache invalidation failed after commit: {error.message} {error.details}")
        result.cache_invalidated = False
        result.warnings.append(f"permission cache not invalidated: {error.message}")

    async def publish(self, result: CommandResult, events: Iterable[DomainEvent]) -> None:
        outcome = await self._publisher.publish_all(events)
        self._record_outcome(result, outcome)

    async def publish_pending(self, result: CommandResult, aggregate: AggregateRoot) -> None:
        outcome = await self._publisher.publish_pending(aggregate)
        self._record_outcome(result, outcome)

    @staticmethod
    def _record_outcome(result: CommandResult, outcome) -> None:
        result.events_published += outcome.published
        result.events_failed += outcome.failed
        if outcome.failed:
            result.warnings.append(f"{outcome.failed} domain event(s) not published")


async def load_active_user(repository: UserRepository, user_id: UserId) -> User:
    user = await repository.find_by_id(user_id)
    if user is None or user.is_deleted:
        raise UserNotFoundError(f"User {user_id} not found", details={"user_id": str(user_id)})
    return user


async def load_active_role(repository: RoleRepository, role_id: RoleId) -> Role:
    role = await repository.find_by_id(role_id)
    if role is None or role.is_deleted:
        raise RoleNotFoundError(f"Role {role_id} not found", details={"role_id": str(role_id)})
    return role


async def load_active_permission(repository: PermissionRepository, permission_id: PermissionId) -> Permission:
    permission = await repository.find_by_id(permission_id)
    if permission is None or permission.is_deleted:
        raise PermissionNotFoundError(
            f"Permission {permission_id} not found", details={"permission_id": str(permission_id)}
        )
    return permission
