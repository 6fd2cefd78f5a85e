"""Soft delete a user."""

import logging
from dataclasses import dataclass
from typing import Union

from .....core.value_objects import UserId
from ....permissions.application import CommandResult, PostCommitSteps
from ....permissions.application.common import load_active_user
from ...entities import UserRepository

logger = logging.getLogger(__name__)


@dataclass
class DeleteUserCommand:
    user_id: Union[str, UserId]


class DeleteUser:
    """Command handler retiring a user and evicting their cached permissions."""

    def __init__(self, user_repository: UserRepository, post_commit: PostCommitSteps):
        self._users = user_repository
        self._post_commit = post_commit

    async def execute(self, command: DeleteUserCommand) -> CommandResult:
        user_id = UserId.coerce(command.user_id)
        user = await load_active_user(self._users, user_id)

        user.delete()
        await self._users.save(user)

        result = CommandResult()
        await self._post_commit.invalidate_user(result, user_id)
        await self._post_commit.publish_pending(result, user)
        logger.info(f"Deleted user {user_id}")
        return result
