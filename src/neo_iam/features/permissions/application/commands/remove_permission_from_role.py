"""Remove a permission from a role."""

import logging
from dataclasses import dataclass
from typing import Union

from .....core.value_objects import PermissionId, RoleId
from ...entities import RoleRepository
from ..common import CommandResult, PostCommitSteps, load_active_role

logger = logging.getLogger(__name__)


@dataclass
class RemovePermissionFromRoleCommand:
    role_id: Union[str, RoleId]
    permission_id: Union[str, PermissionId]


class RemovePermissionFromRole:
    """Command handler shrinking a role's permission set."""

    def __init__(self, role_repository: RoleRepository, post_commit: PostCommitSteps):
        self._roles = role_repository
        self._post_commit = post_commit

    async def execute(self, command: RemovePermissionFromRoleCommand) -> CommandResult:
        role_id = RoleId.coerce(command.role_id)
        permission_id = PermissionId.coerce(command.permission_id)

        role = await load_active_role(self._roles, role_id)
        role.remove_permission(permission_id)
        await self._roles.save(role)

        result = CommandResult(data=role)
        await self._post_commit.invalidate_all(result)
        await self._post_commit.publish_pending(result, role)
        logger.info(f"Removed permission {permission_id} from role {role_id}")
        return result
