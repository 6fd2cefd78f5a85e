"""AsyncPG repositories for the authorization graph."""

from .junction_repository import AsyncPGUserPermissionRepository, AsyncPGUserRoleRepository
from .permission_repository import AsyncPGPermissionRepository
from .role_repository import AsyncPGRoleRepository

__all__ = [
    "AsyncPGPermissionRepository",
    "AsyncPGRoleRepository",
    "AsyncPGUserPermissionRepository",
    "AsyncPGUserRoleRepository",
]
