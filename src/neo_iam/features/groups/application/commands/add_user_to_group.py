"""Add a user to a group."""

import logging
from dataclasses import dataclass
from typing import Union

from .....core.exceptions import DomainError, GroupNotFoundError
from .....core.value_objects import GroupId, UserId
from ....permissions.application import CommandResult, PostCommitSteps
from ....permissions.application.common import load_active_user
from ....users.entities import UserRepository
from ...entities import Group, GroupRepository

logger = logging.getLogger(__name__)


@dataclass
class AddUserToGroupCommand:
    group_id: Union[str, GroupId]
    user_id: Union[str, UserId]


async def load_active_group(repository: GroupRepository, group_id: GroupId) -> Group:
    group = await repository.find_by_id(group_id)
    if group is None or group.is_deleted:
        raise GroupNotFoundError(f"Group {group_id} not found", details={"group_id": str(group_id)})
    return group


class AddUserToGroup:
    """Command handler adding a member to an organization-scoped group."""

    def __init__(
        self,
        group_repository: GroupRepository,
        user_repository: UserRepository,
        post_commit: PostCommitSteps,
    ):
        self._groups = group_repository
        self._users = user_repository
        self._post_commit = post_commit

    async def execute(self, command: AddUserToGroupCommand) -> CommandResult:
        group_id = GroupId.coerce(command.group_id)
        user_id = UserId.coerce(command.user_id)

        group = await load_active_group(self._groups, group_id)
        user = await load_active_user(self._users, user_id)

        if group.organization_id is not None and user.organization_id != group.organization_id:
            raise DomainError(
                "User belongs to a different organization than the group",
                details={"group_id": str(group_id), "user_id": str(user_id)},
            )

        group.add_user(user_id)
        await self._groups.save(group)

        result = CommandResult(data=group)
        await self._post_commit.publish_pending(result, group)
        logger.info(f"Added user {user_id} to group {group_id}")
        return result
