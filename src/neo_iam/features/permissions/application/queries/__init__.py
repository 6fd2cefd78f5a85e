"""Permission query handlers."""

from .authorize_action import AuthorizationDecision, AuthorizeAction, AuthorizeActionQuery
from .get_role_users import GetRoleUsers, GetRoleUsersQuery, RoleUsersResponse
from .get_user_permissions import (
    EffectivePermission,
    GetUserPermissions,
    GetUserPermissionsQuery,
    UserPermissionsResponse,
)
from .get_user_roles import GetUserRoles, GetUserRolesQuery, UserRolesResponse

__all__ = [
    "AuthorizationDecision",
    "AuthorizeAction",
    "AuthorizeActionQuery",
    "EffectivePermission",
    "GetRoleUsers",
    "GetRoleUsersQuery",
    "GetUserPermissions",
    "GetUserPermissionsQuery",
    "GetUserRoles",
    "GetUserRolesQuery",
    "RoleUsersResponse",
    "UserPermissionsResponse",
    "UserRolesResponse",
]
