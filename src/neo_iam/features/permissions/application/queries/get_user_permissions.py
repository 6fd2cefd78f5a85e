"""Effective permission set of a user.

The effective set is the union of the permissions of every active role the
user holds plus their direct grants. Results are cached per user and
read through on a miss.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Set, Union

from .....core.value_objects import PermissionId, UserId
from ....cache.services import PermissionCacheService
from ....users.entities import UserRepository
from ...entities import (
    PermissionRepository,
    RoleRepository,
    UserPermissionRepository,
    UserRoleRepository,
)
from ..common import load_active_user

logger = logging.getLogger(__name__)

DIRECT_SOURCE = "direct"


@dataclass
class EffectivePermission:
    """One permission in a user's effective set, with where it came from."""

    permission_id: str
    name: str
    resource: str
    action: str
    sources: List[str] = field(default_factory=list)

    @property
    def code(self) -> str:
        return f"{self.resource}:{self.action}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "permission_id": self.permission_id,
            "name": self.name,
            "resource": self.resource,
            "action": self.action,
            "sources": list(self.sources),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EffectivePermission":
        return cls(
            permission_id=data["permission_id"],
            name=data["name"],
            resource=data["resource"],
            action=data["action"],
            sources=list(data.get("sources", [])),
        )


@dataclass
class GetUserPermissionsQuery:
    user_id: Union[str, UserId]


@dataclass
class UserPermissionsResponse:
    user_id: UserId
    permissions: List[EffectivePermission]
    from_cache: bool = False

    def grants(self, action: str) -> bool:
        """Whether any effective permission matches ``action`` by name or code."""
        return action in self.names or action in self.codes

    @property
    def names(self) -> Set[str]:
        return {p.name for p in self.permissions}

    @property
    def codes(self) -> Set[str]:
        return {p.code for p in self.permissions}


class GetUserPermissions:
    """Query handler resolving a user's effective permissions."""

    def __init__(
        self,
        user_repository: UserRepository,
        role_repository: RoleRepository,
        permission_repository: PermissionRepository,
        user_role_repository: UserRoleRepository,
        user_permission_repository: UserPermissionRepository,
        permission_cache: PermissionCacheService,
    ):
        self._users = user_repository
        self._roles = role_repository
        self._permissions = permission_repository
        self._user_roles = user_role_repository
        self._user_permissions = user_permission_repository
        self._cache = permission_cache

    async def execute(self, query: GetUserPermissionsQuery) -> UserPermissionsResponse:
        user_id = UserId.coerce(query.user_id)

        cached = await self._cache.get_user_permissions(user_id)
        if cached is not None:
            logger.debug(f"Permission cache hit for user {user_id}")
            return UserPermissionsResponse(
                user_id=user_id,
                permissions=[EffectivePermission.from_dict(item) for item in cached],
                from_cache=True,
            )

        await load_active_user(self._users, user_id)
        permissions = await self._compute(user_id)
        await self._cache.set_user_permissions(user_id, [p.to_dict() for p in permissions])
        return UserPermissionsResponse(user_id=user_id, permissions=permissions)

    async def _compute(self, user_id: UserId) -> List[EffectivePermission]:
        sources: Dict[PermissionId, List[str]] = {}

        roles = await self._roles.find_by_ids(await self._user_roles.list_by_user(user_id))
        for role in roles:
            for permission_id in role.permission_ids:
                sources.setdefault(permission_id, []).append(f"role:{role.id}")

        for permission_id in await self._user_permissions.list_by_user(user_id):
            sources.setdefault(permission_id, []).append(DIRECT_SOURCE)

        permissions = await self._permissions.find_by_ids(list(sources))
        effective = [
            EffectivePermission(
                permission_id=str(permission.id),
                name=permission.name,
                resource=permission.resource,
                action=permission.action,
                sources=sources[permission.id],
            )
            for permission in permissions
        ]
        effective.sort(key=lambda p: (p.resource, p.action, p.name))
        logger.debug(f"Computed {len(effective)} effective permissions for user {user_id}")
        return effective
