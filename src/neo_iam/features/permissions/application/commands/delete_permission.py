"""Soft delete a permission."""

import logging
from dataclasses import dataclass
from typing import Union

from .....core.value_objects import PermissionId
from ...entities import PermissionRepository
from ..common import CommandResult, PostCommitSteps, load_active_permission

logger = logging.getLogger(__name__)


@dataclass
class DeletePermissionCommand:
    permission_id: Union[str, PermissionId]


class DeletePermission:
    """Command handler retiring a permission.

    The permission may be held through any role or direct grant, so the
    whole permission cache namespace is evicted.
    """

    def __init__(self, permission_repository: PermissionRepository, post_commit: PostCommitSteps):
        self._permissions = permission_repository
        self._post_commit = post_commit

    async def execute(self, command: DeletePermissionCommand) -> CommandResult:
        permission_id = PermissionId.coerce(command.permission_id)
        permission = await load_active_permission(self._permissions, permission_id)

        permission.delete()
        await self._permissions.save(permission)

        result = CommandResult()
        await self._post_commit.invalidate_all(result)
        await self._post_commit.publish_pending(result, permission)
        logger.info(f"Deleted permission {permission_id}")
        return result
