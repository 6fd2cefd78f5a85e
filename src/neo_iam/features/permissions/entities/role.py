"""Role aggregate.

A role is a named, ordered set of permission identifiers, either global
(no tenant) or scoped to one tenant. System roles are seeded by the
platform and can be neither updated nor deleted.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable, List, Optional, Tuple

from ....core.exceptions import (
    ConflictError,
    NotFoundError,
    SystemRoleProtectedError,
    ValidationError,
)
from ....core.shared import AggregateRoot
from ....core.value_objects import PermissionId, RoleId, TenantId
from ....utils import utc_now
from .events import (
    RoleCreated,
    RoleDeleted,
    RolePermissionAssigned,
    RolePermissionRemoved,
    RoleUpdated,
)


def _dedupe(permission_ids: Iterable[PermissionId]) -> List[PermissionId]:
    ordered: List[PermissionId] = []
    for permission_id in permission_ids:
        if permission_id not in ordered:
            ordered.append(permission_id)
    return ordered


@dataclass
class Role(AggregateRoot):
    """Domain entity representing a role and its permission assignments."""

    id: RoleId
    name: str
    description: str = ""
    tenant_id: Optional[TenantId] = None
    is_system: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = None

    _permission_ids: List[PermissionId] = field(default_factory=list, init=False, repr=False)

    @classmethod
    def create(
        cls,
        name: str,
        description: str = "",
        permission_ids: Iterable[PermissionId] = (),
        tenant_id: Optional[TenantId] = None,
        is_system: bool = False,
        role_id: Optional[RoleId] = None,
    ) -> "Role":
        """Create a new role and record ``RoleCreated``."""
        if name is None or not name.strip():
            raise ValidationError("Role name cannot be empty", details={"field": "name"})

        now = utc_now()
        role = cls(
            id=role_id or RoleId.generate(),
            name=name.strip(),
            description=(description or "").strip(),
            tenant_id=tenant_id,
            is_system=is_system,
            created_at=now,
            updated_at=now,
        )
        role._permission_ids = _dedupe(permission_ids)
        role._record_event(
            RoleCreated(
                aggregate_id=str(role.id),
                name=role.name,
                description=role.description,
                permission_ids=tuple(str(p) for p in role._permission_ids),
                tenant_id=str(tenant_id) if tenant_id else None,
                is_system=is_system,
            ),
            touch=False,
        )
        return role

    @classmethod
    def reconstitute(
        cls,
        role_id: RoleId,
        name: str,
        description: str,
        permission_ids: Iterable[PermissionId],
        tenant_id: Optional[TenantId],
        is_system: bool,
        created_at: datetime,
        updated_at: datetime,
        deleted_at: Optional[datetime] = None,
    ) -> "Role":
        """Rebuild a role from storage without recording events."""
        role = cls(
            id=role_id,
            name=name,
            description=description or "",
            tenant_id=tenant_id,
            is_system=is_system,
            created_at=created_at,
            updated_at=updated_at,
            deleted_at=deleted_at,
        )
        role._permission_ids = _dedupe(permission_ids)
        return role

    @property
    def permission_ids(self) -> Tuple[PermissionId, ...]:
        """Assigned permissions in assignment order."""
        return tuple(self._permission_ids)

    @property
    def is_global(self) -> bool:
        return self.tenant_id is None

    def has_permission(self, permission_id: PermissionId) -> bool:
        return permission_id in self._permission_ids

    def update(self, name: Optional[str] = None, description: Optional[str] = None) -> None:
        if self.is_system:
            raise SystemRoleProtectedError(
                "Cannot update system role", details={"role_id": str(self.id)}
            )
        if name is not None:
            if not name.strip():
                raise ValidationError("Role name cannot be empty", details={"field": "name"})
            self.name = name.strip()
        if description is not None:
            self.description = description.strip()
        self._record_event(
            RoleUpdated(aggregate_id=str(self.id), name=name, description=description)
        )

    def add_permission(self, permission_id: PermissionId) -> None:
        if self.has_permission(permission_id):
            raise ConflictError(
                "Permission already assigned to role",
                details={"role_id": str(self.id), "permission_id": str(permission_id)},
            )
        self._permission_ids.append(permission_id)
        self._record_event(
            RolePermissionAssigned(aggregate_id=str(self.id), permission_id=str(permission_id))
        )

    def remove_permission(self, permission_id: PermissionId) -> None:
        if not self.has_permission(permission_id):
            raise NotFoundError(
                "Permission not assigned to role",
                details={"role_id": str(self.id), "permission_id": str(permission_id)},
            )
        self._permission_ids.remove(permission_id)
        self._record_event(
            RolePermissionRemoved(aggregate_id=str(self.id), permission_id=str(permission_id))
        )

    def delete(self) -> None:
        """Soft delete the role."""
        if self.is_system:
            raise SystemRoleProtectedError(
                "Cannot delete system role", details={"role_id": str(self.id)}
            )
        self._mark_deleted()
        self._record_event(RoleDeleted(aggregate_id=str(self.id)), touch=False)
