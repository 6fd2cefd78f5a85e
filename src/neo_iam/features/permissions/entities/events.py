"""Domain events for roles, permissions and user assignments."""

from dataclasses import dataclass
from typing import Optional, Tuple

from ....core.shared import DomainEvent


@dataclass(frozen=True, kw_only=True)
class RoleCreated(DomainEvent):
    event_type = "role.created"
    aggregate_type = "role"

    name: str
    description: str
    permission_ids: Tuple[str, ...] = ()
    tenant_id: Optional[str] = None
    is_system: bool = False


@dataclass(frozen=True, kw_only=True)
class RoleUpdated(DomainEvent):
    event_type = "role.updated"
    aggregate_type = "role"

    name: Optional[str] = None
    description: Optional[str] = None


@dataclass(frozen=True, kw_only=True)
class RolePermissionAssigned(DomainEvent):
    event_type = "role.permission_assigned"
    aggregate_type = "role"

    permission_id: str


@dataclass(frozen=True, kw_only=True)
class RolePermissionRemoved(DomainEvent):
    event_type = "role.permission_removed"
    aggregate_type = "role"

    permission_id: str


@dataclass(frozen=True, kw_only=True)
class RoleDeleted(DomainEvent):
    event_type = "role.deleted"
    aggregate_type = "role"


@dataclass(frozen=True, kw_only=True)
class PermissionCreated(DomainEvent):
    event_type = "permission.created"
    aggregate_type = "permission"

    name: str
    resource: str
    action: str
    description: str = ""


@dataclass(frozen=True, kw_only=True)
class PermissionUpdated(DomainEvent):
    event_type = "permission.updated"
    aggregate_type = "permission"

    name: Optional[str] = None
    description: Optional[str] = None
    resource: Optional[str] = None
    action: Optional[str] = None


@dataclass(frozen=True, kw_only=True)
class PermissionDeleted(DomainEvent):
    event_type = "permission.deleted"
    aggregate_type = "permission"


# Junction events are raised by the assignment handlers, keyed on the user.
@dataclass(frozen=True, kw_only=True)
class RoleAssigned(DomainEvent):
    event_type = "user.role_assigned"
    aggregate_type = "user"

    role_id: str


@dataclass(frozen=True, kw_only=True)
class RoleRevoked(DomainEvent):
    event_type = "user.role_revoked"
    aggregate_type = "user"

    role_id: str


@dataclass(frozen=True, kw_only=True)
class PermissionDirectlyAssigned(DomainEvent):
    event_type = "user.permission_assigned"
    aggregate_type = "user"

    permission_id: str


@dataclass(frozen=True, kw_only=True)
class PermissionDirectlyRevoked(DomainEvent):
    event_type = "user.permission_revoked"
    aggregate_type = "user"

    permission_id: str
