"""Revoke a direct permission grant from a user."""

import logging
from dataclasses import dataclass
from typing import Union

from .....core.exceptions import AssignmentNotFoundError, PermissionNotFoundError
from .....core.value_objects import PermissionId, UserId
from ...entities import PermissionDirectlyRevoked, PermissionRepository, UserPermissionRepository
from ....users.entities import UserRepository
from ..common import CommandResult, PostCommitSteps, load_active_user

logger = logging.getLogger(__name__)


@dataclass
class RevokePermissionFromUserCommand:
    user_id: Union[str, UserId]
    permission_id: Union[str, PermissionId]


class RevokePermissionFromUser:
    """Command handler deleting a direct user/permission grant."""

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

    async def execute(self, command: RevokePermissionFromUserCommand) -> CommandResult:
        user_id = UserId.coerce(command.user_id)
        permission_id = PermissionId.coerce(command.permission_id)

        await load_active_user(self._users, user_id)
        if await self._permissions.find_by_id(permission_id) is None:
            raise PermissionNotFoundError(
                f"Permission {permission_id} not found", details={"permission_id": str(permission_id)}
            )

        if (
            not await self._user_permissions.has(user_id, permission_id)
            or not await self._user_permissions.revoke(user_id, permission_id)
        ):
            raise AssignmentNotFoundError(
                "User does not have this permission",
                details={"user_id": str(user_id), "permission_id": str(permission_id)},
            )

        result = CommandResult()
        await self._post_commit.invalidate_user(result, user_id)
        await self._post_commit.publish(
            result,
            [PermissionDirectlyRevoked(aggregate_id=str(user_id), permission_id=str(permission_id))],
        )
        logger.info(f"Revoked direct permission {permission_id} from user {user_id}")
        return result
