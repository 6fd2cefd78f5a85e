"""In-memory repository fakes honouring the repository protocols."""

import copy
from typing import Dict, List, Optional, Sequence, Set, Tuple

from neo_iam.core.exceptions import AssignmentExistsError, CacheError
from neo_iam.core.value_objects import (
    Email,
    GroupId,
    OrganizationId,
    PermissionId,
    RoleId,
    TenantId,
    UserId,
)
from neo_iam.features.groups.entities import Group
from neo_iam.features.permissions.entities import Permission, Role
from neo_iam.features.users.entities import User
from neo_iam.utils import utc_now


def _stored(aggregate):
    """Detach a stored copy, as a database round trip would."""
    clone = copy.deepcopy(aggregate)
    clone.pull_domain_events()
    return clone


class InMemoryRoleRepository:
    def __init__(self):
        self.rows: Dict[RoleId, Role] = {}
        self.save_calls = 0

    async def save(self, role: Role) -> None:
        self.save_calls += 1
        self.rows[role.id] = _stored(role)

    async def find_by_id(self, role_id: RoleId) -> Optional[Role]:
        role = self.rows.get(role_id)
        return _stored(role) if role else None

    async def find_by_ids(self, role_ids: Sequence[RoleId]) -> List[Role]:
        return [_stored(self.rows[r]) for r in role_ids if r in self.rows and not self.rows[r].is_deleted]

    async def find_by_name(self, name: str, tenant_id: Optional[TenantId] = None) -> Optional[Role]:
        for role in self.rows.values():
            if role.name == name and role.tenant_id == tenant_id and not role.is_deleted:
                return _stored(role)
        return None

    async def find_all(self, tenant_id: Optional[TenantId] = None, include_deleted: bool = False) -> List[Role]:
        return [
            _stored(role)
            for role in self.rows.values()
            if (tenant_id is None or role.tenant_id == tenant_id) and (include_deleted or not role.is_deleted)
        ]

    async def delete(self, role_id: RoleId) -> None:
        if role_id in self.rows:
            self.rows[role_id].deleted_at = utc_now()


class InMemoryPermissionRepository:
    def __init__(self):
        self.rows: Dict[PermissionId, Permission] = {}

    async def save(self, permission: Permission) -> None:
        self.rows[permission.id] = _stored(permission)

    async def find_by_id(self, permission_id: PermissionId) -> Optional[Permission]:
        permission = self.rows.get(permission_id)
        return _stored(permission) if permission else None

    async def find_by_ids(self, permission_ids: Sequence[PermissionId]) -> List[Permission]:
        return [
            _stored(self.rows[p]) for p in permission_ids
            if p in self.rows and not self.rows[p].is_deleted
        ]

    async def find_by_name(self, name: str) -> Optional[Permission]:
        for permission in self.rows.values():
            if permission.name == name and not permission.is_deleted:
                return _stored(permission)
        return None

    async def find_all(self, resource: Optional[str] = None, include_deleted: bool = False) -> List[Permission]:
        return [
            _stored(p) for p in self.rows.values()
            if (resource is None or p.resource == resource) and (include_deleted or not p.is_deleted)
        ]

    async def delete(self, permission_id: PermissionId) -> None:
        if permission_id in self.rows:
            self.rows[permission_id].deleted_at = utc_now()


class InMemoryUserRepository:
    def __init__(self):
        self.rows: Dict[UserId, User] = {}

    async def save(self, user: User) -> None:
        self.rows[user.id] = _stored(user)

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        user = self.rows.get(user_id)
        return _stored(user) if user else None

    async def find_by_email(self, email: Email) -> Optional[User]:
        for user in self.rows.values():
            if user.email == email and not user.is_deleted:
                return _stored(user)
        return None

    async def find_all(
        self,
        tenant_id: Optional[TenantId] = None,
        organization_id: Optional[OrganizationId] = None,
        include_deleted: bool = False,
    ) -> List[User]:
        return [
            _stored(u) for u in self.rows.values()
            if (tenant_id is None or u.tenant_id == tenant_id)
            and (organization_id is None or u.organization_id == organization_id)
            and (include_deleted or not u.is_deleted)
        ]

    async def delete(self, user_id: UserId) -> None:
        if user_id in self.rows:
            self.rows[user_id].deleted_at = utc_now()


class InMemoryGroupRepository:
    def __init__(self):
        self.rows: Dict[GroupId, Group] = {}

    async def save(self, group: Group) -> None:
        self.rows[group.id] = _stored(group)

    async def find_by_id(self, group_id: GroupId) -> Optional[Group]:
        group = self.rows.get(group_id)
        return _stored(group) if group else None

    async def find_by_name(self, name: str, organization_id: Optional[OrganizationId] = None) -> Optional[Group]:
        for group in self.rows.values():
            if group.name == name and group.organization_id == organization_id and not group.is_deleted:
                return _stored(group)
        return None

    async def find_all(
        self,
        organization_id: Optional[OrganizationId] = None,
        member_id: Optional[UserId] = None,
    ) -> List[Group]:
        return [
            _stored(g) for g in self.rows.values()
            if not g.is_deleted
            and (organization_id is None or g.organization_id == organization_id)
            and (member_id is None or g.has_user(member_id))
        ]

    async def delete(self, group_id: GroupId) -> None:
        if group_id in self.rows:
            self.rows[group_id].deleted_at = utc_now()


class _InMemoryJunction:
    def __init__(self):
        self.pairs: List[Tuple[UserId, object]] = []

    async def assign(self, user_id, target_id) -> None:
        if (user_id, target_id) in self.pairs:
            raise AssignmentExistsError("pair already exists")
        self.pairs.append((user_id, target_id))

    async def revoke(self, user_id, target_id) -> bool:
        if (user_id, target_id) not in self.pairs:
            return False
        self.pairs.remove((user_id, target_id))
        return True

    async def has(self, user_id, target_id) -> bool:
        return (user_id, target_id) in self.pairs

    async def list_by_user(self, user_id) -> list:
        return [target for user, target in self.pairs if user == user_id]

    async def _users_of(self, target_id) -> List[UserId]:
        return [user for user, target in self.pairs if target == target_id]

    def count(self, user_id, target_id) -> int:
        return self.pairs.count((user_id, target_id))


class InMemoryUserRoleRepository(_InMemoryJunction):
    async def list_by_role(self, role_id: RoleId) -> List[UserId]:
        return await self._users_of(role_id)


class InMemoryUserPermissionRepository(_InMemoryJunction):
    async def list_by_permission(self, permission_id: PermissionId) -> List[UserId]:
        return await self._users_of(permission_id)


class FailingCacheBackend:
    """CacheBackend whose every operation fails."""

    def __init__(self):
        self.calls: Set[str] = set()

    async def get(self, key):
        self.calls.add("get")
        raise CacheError("cache down")

    async def set(self, key, value, ttl=None):
        self.calls.add("set")
        raise CacheError("cache down")

    async def delete(self, key):
        self.calls.add("delete")
        raise CacheError("cache down")

    async def delete_by_prefix(self, prefix):
        self.calls.add("delete_by_prefix")
        raise CacheError("cache down")


class FailingEventBus:
    async def publish(self, event):
        raise RuntimeError("bus unavailable")
