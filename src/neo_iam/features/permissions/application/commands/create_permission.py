"""Create a permission."""

import logging
from dataclasses import dataclass

from .....core.exceptions import DuplicateNameError
from ...entities import Permission, PermissionRepository
from ..common import CommandResult, PostCommitSteps

logger = logging.getLogger(__name__)


@dataclass
class CreatePermissionCommand:
    name: str
    resource: str
    action: str
    description: str = ""


class CreatePermission:
    """Command handler creating a globally unique permission."""

    def __init__(self, permission_repository: PermissionRepository, post_commit: PostCommitSteps):
        self._permissions = permission_repository
        self._post_commit = post_commit

    async def execute(self, command: CreatePermissionCommand) -> CommandResult:
        permission = Permission.create(
            name=command.name,
            description=command.description,
            resource=command.resource,
            action=command.action,
        )

        if await self._permissions.find_by_name(permission.name) is not None:
            raise DuplicateNameError(
                f"Permission with name {permission.name} already exists",
                details={"name": permission.name},
            )

        await self._permissions.save(permission)

        result = CommandResult(data=permission)
        await self._post_commit.publish_pending(result, permission)
        logger.info(f"Created permission {permission.id} ({permission.code})")
        return result
