"""Update a role's name or description."""

import logging
from dataclasses import dataclass
from typing import Optional, Union

from .....core.exceptions import DuplicateNameError
from .....core.value_objects import RoleId
from ...entities import RoleRepository
from ..common import CommandResult, PostCommitSteps, load_active_role

logger = logging.getLogger(__name__)


@dataclass
class UpdateRoleCommand:
    role_id: Union[str, RoleId]
    name: Optional[str] = None
    description: Optional[str] = None


class UpdateRole:
    """Command handler updating a non-system role.

    Any number of users may hold the role, so the whole permission cache
    namespace is evicted rather than individual entries.
    """

    def __init__(self, role_repository: RoleRepository, post_commit: PostCommitSteps):
        self._roles = role_repository
        self._post_commit = post_commit

    async def execute(self, command: UpdateRoleCommand) -> CommandResult:
        role_id = RoleId.coerce(command.role_id)
        role = await load_active_role(self._roles, role_id)

        if command.name is not None and command.name.strip() != role.name:
            existing = await self._roles.find_by_name(command.name.strip(), role.tenant_id)
            if existing is not None and existing.id != role.id:
                raise DuplicateNameError(
                    f"Role with name {command.name.strip()} already exists",
                    details={"name": command.name.strip()},
                )

        role.update(name=command.name, description=command.description)
        await self._roles.save(role)

        result = CommandResult(data=role)
        await self._post_commit.invalidate_all(result)
        await self._post_commit.publish_pending(result, role)
        logger.info(f"Updated role {role.id}")
        return result
