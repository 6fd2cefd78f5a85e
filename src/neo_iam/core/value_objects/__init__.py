"""Value objects module for neo-iam."""

from .identifiers import (
    Identifier,
    UserId,
    RoleId,
    PermissionId,
    TenantId,
    OrganizationId,
    WorkspaceId,
    RegionId,
    GroupId,
    Email,
)

__all__ = [
    "Identifier",
    "UserId",
    "RoleId",
    "PermissionId",
    "TenantId",
    "OrganizationId",
    "WorkspaceId",
    "RegionId",
    "GroupId",
    "Email",
]
