"""Update a permission's name, description, resource or action."""

import logging
from dataclasses import dataclass
from typing import Optional, Union

from .....core.exceptions import DuplicateNameError
from .....core.value_objects import PermissionId
from ...entities import PermissionRepository
from ..common import CommandResult, PostCommitSteps, load_active_permission

logger = logging.getLogger(__name__)


@dataclass
class UpdatePermissionCommand:
    permission_id: Union[str, PermissionId]
    name: Optional[str] = None
    description: Optional[str] = None
    resource: Optional[str] = None
    action: Optional[str] = None


class UpdatePermission:
    """Command handler updating a permission definition.

    Cached effective sets embed the name, resource and action of every
    permission, so the whole permission cache namespace is evicted.
    """

    def __init__(self, permission_repository: PermissionRepository, post_commit: PostCommitSteps):
        self._permissions = permission_repository
        self._post_commit = post_commit

    async def execute(self, command: UpdatePermissionCommand) -> CommandResult:
        permission_id = PermissionId.coerce(command.permission_id)
        permission = await load_active_permission(self._permissions, permission_id)

        if command.name is not None and command.name.strip() != permission.name:
            existing = await self._permissions.find_by_name(command.name.strip())
            if existing is not None and existing.id != permission.id:
                raise DuplicateNameError(
                    f"Permission with name {command.name.strip()} already exists",
                    details={"name": command.name.strip()},
                )

        permission.update(
            name=command.name,
            description=command.description,
            resource=command.resource,
            action=command.action,
        )
        await self._permissions.save(permission)

        result = CommandResult(data=permission)
        await self._post_commit.invalidate_all(result)
        await self._post_commit.publish_pending(result, permission)
        logger.info(f"Updated permission {permission_id} ({permission.code})")
        return result
