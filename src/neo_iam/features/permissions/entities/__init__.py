"""Permission domain entities, events and repository contracts."""

from .events import (
    PermissionCreated,
    PermissionDeleted,
    PermissionDirectlyAssigned,
    PermissionDirectlyRevoked,
    PermissionUpdated,
    RoleAssigned,
    RoleCreated,
    RoleDeleted,
    RolePermissionAssigned,
    RolePermissionRemoved,
    RoleRevoked,
    RoleUpdated,
)
from .permission import Permission
from .role import Role
from .protocols import (
    PermissionRepository,
    RoleRepository,
    UserPermissionRepository,
    UserRoleRepository,
)

__all__ = [
    "Permission",
    "Role",
    "PermissionRepository",
    "RoleRepository",
    "UserPermissionRepository",
    "UserRoleRepository",
    "PermissionCreated",
    "PermissionDeleted",
    "PermissionDirectlyAssigned",
    "PermissionDirectlyRevoked",
    "PermissionUpdated",
    "RoleAssigned",
    "RoleCreated",
    "RoleDeleted",
    "RolePermissionAssigned",
    "RolePermissionRemoved",
    "RoleRevoked",
    "RoleUpdated",
]
