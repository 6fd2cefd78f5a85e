"""Remove a user from a group."""

import logging
from dataclasses import dataclass
from typing import Union

from .....core.value_objects import GroupId, UserId
from ....permissions.application import CommandResult, PostCommitSteps
from ...entities import GroupRepository
from .add_user_to_group import load_active_group

logger = logging.getLogger(__name__)


@dataclass
class RemoveUserFromGroupCommand:
    group_id: Union[str, GroupId]
    user_id: Union[str, UserId]


class RemoveUserFromGroup:
    """Command handler removing a member from a group."""

    def __init__(self, group_repository: GroupRepository, post_commit: PostCommitSteps):
        self._groups = group_repository
        self._post_commit = post_commit

    async def execute(self, command: RemoveUserFromGroupCommand) -> CommandResult:
        group_id = GroupId.coerce(command.group_id)
        user_id = UserId.coerce(command.user_id)

        group = await load_active_group(self._groups, group_id)
        group.remove_user(user_id)
        await self._groups.save(group)

        result = CommandResult(data=group)
        await self._post_commit.publish_pending(result, group)
        logger.info(f"Removed user {user_id} from group {group_id}")
        return result
