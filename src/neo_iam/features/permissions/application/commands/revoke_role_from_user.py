"""Revoke a role from a user."""

import logging
from dataclasses import dataclass
from typing import Union

from .....core.exceptions import AssignmentNotFoundError, RoleNotFoundError
from .....core.value_objects import RoleId, UserId
from ...entities import RoleRepository, RoleRevoked, UserRoleRepository
from ....users.entities import UserRepository
from ..common import CommandResult, PostCommitSteps, load_active_user

logger = logging.getLogger(__name__)


@dataclass
class RevokeRoleFromUserCommand:
    user_id: Union[str, UserId]
    role_id: Union[str, RoleId]


class RevokeRoleFromUser:
    """Command handler deleting a user/role pair."""

    def __init__(
        self,
        user_repository: UserRepository,
        role_repository: RoleRepository,
        user_role_repository: UserRoleRepository,
        post_commit: PostCommitSteps,
    ):
        self._users = user_repository
        self._roles = role_repository
        self._user_roles = user_role_repository
        self._post_commit = post_commit

    async def execute(self, command: RevokeRoleFromUserCommand) -> CommandResult:
        user_id = UserId.coerce(command.user_id)
        role_id = RoleId.coerce(command.role_id)

        await load_active_user(self._users, user_id)
        # A soft-deleted role may still be held; revoking it must stay possible
        if await self._roles.find_by_id(role_id) is None:
            raise RoleNotFoundError(f"Role {role_id} not found", details={"role_id": str(role_id)})

        # A concurrent revoke can win between the check and the delete
        if (
            not await self._user_roles.has(user_id, role_id)
            or not await self._user_roles.revoke(user_id, role_id)
        ):
            raise AssignmentNotFoundError(
                "User does not have this role",
                details={"user_id": str(user_id), "role_id": str(role_id)},
            )

        result = CommandResult()
        await self._post_commit.invalidate_user(result, user_id)
        await self._post_commit.publish(
            result, [RoleRevoked(aggregate_id=str(user_id), role_id=str(role_id))]
        )
        logger.info(f"Revoked role {role_id} from user {user_id}")
        return result
