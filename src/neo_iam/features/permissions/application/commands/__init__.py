"""Permission and role command handlers."""

from .add_permission_to_role import AddPermissionToRole, AddPermissionToRoleCommand
from .assign_permission_to_user import AssignPermissionToUser, AssignPermissionToUserCommand
from .assign_role_to_user import AssignRoleToUser, AssignRoleToUserCommand
from .create_permission import CreatePermission, CreatePermissionCommand
from .create_role import CreateRole, CreateRoleCommand
from .delete_permission import DeletePermission, DeletePermissionCommand
from .delete_role import DeleteRole, DeleteRoleCommand
from .remove_permission_from_role import RemovePermissionFromRole, RemovePermissionFromRoleCommand
from .revoke_permission_from_user import RevokePermissionFromUser, RevokePermissionFromUserCommand
from .revoke_role_from_user import RevokeRoleFromUser, RevokeRoleFromUserCommand
from .update_permission import UpdatePermission, UpdatePermissionCommand
from .update_role import UpdateRole, UpdateRoleCommand

__all__ = [
    "AddPermissionToRole",
    "AddPermissionToRoleCommand",
    "AssignPermissionToUser",
    "AssignPermissionToUserCommand",
    "AssignRoleToUser",
    "AssignRoleToUserCommand",
    "CreatePermission",
    "CreatePermissionCommand",
    "CreateRole",
    "CreateRoleCommand",
    "DeletePermission",
    "DeletePermissionCommand",
    "DeleteRole",
    "DeleteRoleCommand",
    "RemovePermissionFromRole",
    "RemovePermissionFromRoleCommand",
    "RevokePermissionFromUser",
    "RevokePermissionFromUserCommand",
    "RevokeRoleFromUser",
    "RevokeRoleFromUserCommand",
    "UpdatePermission",
    "UpdatePermissionCommand",
    "UpdateRole",
    "UpdateRoleCommand",
]
