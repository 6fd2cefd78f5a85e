"""Permission services."""

from .permission_resolver import PermissionContext, PermissionResolver

__all__ = ["PermissionContext", "PermissionResolver"]
