"""Protocol interfaces for the authorization graph.

Aggregate repositories persist roles and permissions; junction
repositories persist the user/role and user/permission pairs, which have
no identity beyond the pair itself. ``delete`` is always a soft delete.
"""

from abc import abstractmethod
from typing import List, Optional, Protocol, Sequence, runtime_checkable

from ....core.value_objects import PermissionId, RoleId, TenantId, UserId
from .permission import Permission
from .role import Role


@runtime_checkable
class RoleRepository(Protocol):
    """Protocol for role persistence."""

    @abstractmethod
    async def save(self, role: Role) -> None:
        """Insert or update a role together with its ordered permission list."""
        ...

    @abstractmethod
    async def find_by_id(self, role_id: RoleId) -> Optional[Role]:
        """Find a role by id, including soft-deleted ones."""
        ...

    @abstractmethod
    async def find_by_ids(self, role_ids: Sequence[RoleId]) -> List[Role]:
        """Find active roles for the given ids."""
        ...

    @abstractmethod
    async def find_by_name(self, name: str, tenant_id: Optional[TenantId] = None) -> Optional[Role]:
        """Find an active role by name within a scope (None = global)."""
        ...

    @abstractmethod
    async def find_all(
        self,
        tenant_id: Optional[TenantId] = None,
        include_deleted: bool = False,
    ) -> List[Role]:
        """List roles, optionally restricted to one tenant scope."""
        ...

    @abstractmethod
    async def delete(self, role_id: RoleId) -> None:
        """Soft delete a role."""
        ...


@runtime_checkable
class PermissionRepository(Protocol):
    """Protocol for permission persistence."""

    @abstractmethod
    async def save(self, permission: Permission) -> None:
        ...

    @abstractmethod
    async def find_by_id(self, permission_id: PermissionId) -> Optional[Permission]:
        """Find a permission by id, including soft-deleted ones."""
        ...

    @abstractmethod
    async def find_by_ids(self, permission_ids: Sequence[PermissionId]) -> List[Permission]:
        """Find active permissions for the given ids."""
        ...

    @abstractmethod
    async def find_by_name(self, name: str) -> Optional[Permission]:
        ...

    @abstractmethod
    async def find_all(
        self,
        resource: Optional[str] = None,
        include_deleted: bool = False,
    ) -> List[Permission]:
        ...

    @abstractmethod
    async def delete(self, permission_id: PermissionId) -> None:
        """Soft delete a permission."""
        ...


@runtime_checkable
class UserRoleRepository(Protocol):
    """Protocol for the user/role junction."""

    @abstractmethod
    async def assign(self, user_id: UserId, role_id: RoleId) -> None:
        """Insert the pair; raises AssignmentExistsError when it already exists."""
        ...

    @abstractmethod
    async def revoke(self, user_id: UserId, role_id: RoleId) -> bool:
        """Delete the pair, returning whether a row was removed."""
        ...

    @abstractmethod
    async def has(self, user_id: UserId, role_id: RoleId) -> bool:
        ...

    @abstractmethod
    async def list_by_user(self, user_id: UserId) -> List[RoleId]:
        ...

    @abstractmethod
    async def list_by_role(self, role_id: RoleId) -> List[UserId]:
        ...


@runtime_checkable
class UserPermissionRepository(Protocol):
    """Protocol for direct user/permission grants."""

    @abstractmethod
    async def assign(self, user_id: UserId, permission_id: PermissionId) -> None:
        """Insert the pair; raises AssignmentExistsError when it already exists."""
        ...

    @abstractmethod
    async def revoke(self, user_id: UserId, permission_id: PermissionId) -> bool:
        ...

    @abstractmethod
    async def has(self, user_id: UserId, permission_id: PermissionId) -> bool:
        ...

    @abstractmethod
    async def list_by_user(self, user_id: UserId) -> List[PermissionId]:
        ...

    @abstractmethod
    async def list_by_permission(self, permission_id: PermissionId) -> List[UserId]:
        ...
