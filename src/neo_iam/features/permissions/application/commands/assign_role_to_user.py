"""Assign a role to a user."""

import logging
from dataclasses import dataclass
from typing import Union

from .....core.exceptions import AssignmentExistsError
from .....core.value_objects import RoleId, UserId
from ...entities import RoleAssigned, RoleRepository, UserRoleRepository
from ....users.entities import UserRepository
from ..common import CommandResult, PostCommitSteps, load_active_role, load_active_user

logger = logging.getLogger(__name__)


@dataclass
class AssignRoleToUserCommand:
    """Request to grant ``role_id`` to ``user_id``."""

    user_id: Union[str, UserId]
    role_id: Union[str, RoleId]


class AssignRoleToUser:
    """Command handler inserting a user/role pair.

    Only the affected user's cache entry is evicted.
    """

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

    async def execute(self, command: AssignRoleToUserCommand) -> CommandResult:
        """Execute the assignment.

        Raises:
            ValidationError: malformed identifiers
            UserNotFoundError / RoleNotFoundError: unknown or deleted aggregates
            AssignmentExistsError: the user already holds the role
        """
        user_id = UserId.coerce(command.user_id)
        role_id = RoleId.coerce(command.role_id)

        await load_active_user(self._users, user_id)
        await load_active_role(self._roles, role_id)

        if await self._user_roles.has(user_id, role_id):
            raise AssignmentExistsError(
                "User already has this role",
                details={"user_id": str(user_id), "role_id": str(role_id)},
            )

        # The junction's primary key still rejects a concurrent duplicate
        await self._user_roles.assign(user_id, role_id)

        result = CommandResult()
        await self._post_commit.invalidate_user(result, user_id)
        await self._post_commit.publish(
            result, [RoleAssigned(aggregate_id=str(user_id), role_id=str(role_id))]
        )
        logger.info(f"Assigned role {role_id} to user {user_id}")
        return result
