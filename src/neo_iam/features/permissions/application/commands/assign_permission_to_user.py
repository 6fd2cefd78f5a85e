"""Grant a permission directly to a user, bypassing roles."""

import logging
from dataclasses import dataclass
from typing import Union

from .....core.exceptions import AssignmentExistsError
from .....core.value_objects import PermissionId, UserId
from ...entities import PermissionDirectlyAssigned, PermissionRepository, UserPermissionRepository
from ....users.entities import UserRepository
from ..common import CommandResult, PostCommitSteps, load_active_permission, load_active_user

logger = logging.getLogger(__name__)


@dataclass
class AssignPermissionToUserCommand:
    user_id: Union[str, UserId]
    permission_id: Union[str, PermissionId]


class AssignPermissionToUser:
    """Command handler inserting a direct user/permission grant."""

    def __init__(
        self,
        user_repository: UserRepository,
        permission_repository: PermissionRepository,
        user_permission_repository: UserPermissionRepository,
        post_commit: PostCommitSteps,
    ):
        self._users = user_repository
        self._permissions = permission_repository
        self._user_permissions = user_permission_repository
        self._post_commit = post_commit

    async def execute(self, command: AssignPermissionToUserCommand) -> CommandResult:
        user_id = UserId.coerce(command.user_id)
        permission_id = PermissionId.coerce(command.permission_id)

        await load_active_user(self._users, user_id)
        await load_active_permission(self._permissions, permission_id)

        if await self._user_permissions.has(user_id, permission_id):
            raise AssignmentExistsError(
                "User already has this permission",
                details={"user_id": str(user_id), "permission_id": str(permission_id)},
            )

        await self._user_permissions.assign(user_id, permission_id)

        result = CommandResult()
        await self._post_commit.invalidate_user(result, user_id)
        await self._post_commit.publish(
            result,
            [PermissionDirectlyAssigned(aggregate_id=str(user_id), permission_id=str(permission_id))],
        )
        logger.info(f"Granted permission {permission_id} directly to user {user_id}")
        return result
