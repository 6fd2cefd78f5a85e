"""Soft delete a role."""

import logging
from dataclasses import dataclass
from typing import Union

from .....core.value_objects import RoleId
from ...entities import RoleRepository
from ..common import CommandResult, PostCommitSteps, load_active_role

logger = logging.getLogger(__name__)


@dataclass
class DeleteRoleCommand:
    role_id: Union[str, RoleId]


class DeleteRole:
    """Command handler retiring a non-system role.

    User/role pairs are left in place for audit; deleted roles simply stop
    contributing to effective permission sets.
    """

    def __init__(self, role_repository: RoleRepository, post_commit: PostCommitSteps):
        self._roles = role_repository
        self._post_commit = post_commit

    async def execute(self, command: DeleteRoleCommand) -> CommandResult:
        role_id = RoleId.coerce(command.role_id)
        role = await load_active_role(self._roles, role_id)

        role.delete()
        await self._roles.save(role)

        result = CommandResult()
        await self._post_commit.invalidate_all(result)
        await self._post_commit.publish_pending(result, role)
        logger.info(f"Deleted role {role_id}")
        return result
