"""Add a permission to a role."""

import logging
from dataclasses import dataclass
from typing import Union

from .....core.value_objects import PermissionId, RoleId
from ...entities import PermissionRepository, RoleRepository
from ..common import CommandResult, PostCommitSteps, load_active_permission, load_active_role

logger = logging.getLogger(__name__)


@dataclass
class AddPermissionToRoleCommand:
    role_id: Union[str, RoleId]
    permission_id: Union[str, PermissionId]


class AddPermissionToRole:
    """Command handler extending a role's permission set."""

    def __init__(
        self,
        role_repository: RoleRepository,
        permission_repository: PermissionRepository,
        post_commit: PostCommitSteps,
    ):
        self._roles = role_repository
        self._permissions = permission_repository
        self._post_commit = post_commit

    async def execute(self, command: AddPermissionToRoleCommand) -> CommandResult:
        role_id = RoleId.coerce(command.role_id)
        permission_id = PermissionId.coerce(command.permission_id)

        role = await load_active_role(self._roles, role_id)
        await load_active_permission(self._permissions, permission_id)

        role.add_permission(permission_id)
        await self._roles.save(role)

        result = CommandResult(data=role)
        await self._post_commit.invalidate_all(result)
        await self._post_commit.publish_pending(result, role)
        logger.info(f"Added permission {permission_id} to role {role_id}")
        return result
