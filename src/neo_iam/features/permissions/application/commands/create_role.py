"""Create a role."""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Union

from .....core.exceptions import DuplicateNameError, PermissionNotFoundError
from .....core.value_objects import PermissionId, TenantId
from ...entities import PermissionRepository, Role, RoleRepository
from ..common import CommandResult, PostCommitSteps

logger = logging.getLogger(__name__)


@dataclass
class CreateRoleCommand:
    name: str
    description: str = ""
    permission_ids: List[Union[str, PermissionId]] = field(default_factory=list)
    tenant_id: Optional[Union[str, TenantId]] = None


class CreateRole:
    """Command handler creating a role with an initial permission set.

    A fresh role has no holders, so no cache entry can be stale. System
    roles are seeded by the platform and never created here.
    """

    def __init__(
        self,
        role_repository: RoleRepository,
        permission_repository: PermissionRepository,
        post_commit: PostCommitSteps,
    ):
        self._roles = role_repository
        self._permissions = permission_repository
        self._post_commit = post_commit

    async def execute(self, command: CreateRoleCommand) -> CommandResult:
        permission_ids = [PermissionId.coerce(p) for p in command.permission_ids]
        tenant_id = TenantId.coerce(command.tenant_id) if command.tenant_id is not None else None

        role = Role.create(
            name=command.name,
            description=command.description,
            permission_ids=permission_ids,
            tenant_id=tenant_id,
        )

        if await self._roles.find_by_name(role.name, tenant_id) is not None:
            raise DuplicateNameError(
                f"Role with name {role.name} already exists",
                details={"name": role.name, "tenant_id": str(tenant_id) if tenant_id else None},
            )

        if role.permission_ids:
            found = {p.id for p in await self._permissions.find_by_ids(list(role.permission_ids))}
            missing = [str(p) for p in role.permission_ids if p not in found]
            if missing:
                raise PermissionNotFoundError(
                    "Unknown permissions in role definition", details={"permission_ids": missing}
                )

        await self._roles.save(role)

        result = CommandResult(data=role)
        await self._post_commit.publish_pending(result, role)
        logger.info(f"Created role {role.id} ({role.name})")
        return result
