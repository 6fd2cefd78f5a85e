"""Users holding a role."""

from dataclasses import dataclass
from typing import List, Union

from .....core.exceptions import RoleNotFoundError
from .....core.value_objects import RoleId, UserId
from ...entities import RoleRepository, UserRoleRepository


@dataclass
class GetRoleUsersQuery:
    role_id: Union[str, RoleId]


@dataclass
class RoleUsersResponse:
    role_id: RoleId
    user_ids: List[UserId]


class GetRoleUsers:
    """Query handler listing the holders of a role, deleted roles included."""

    def __init__(self, role_repository: RoleRepository, user_role_repository: UserRoleRepository):
        self._roles = role_repository
        self._user_roles = user_role_repository

    async def execute(self, query: GetRoleUsersQuery) -> RoleUsersResponse:
        role_id = RoleId.coerce(query.role_id)
        if await self._roles.find_by_id(role_id) is None:
            raise RoleNotFoundError(f"Role {role_id} not found", details={"role_id": str(role_id)})
        return RoleUsersResponse(role_id=role_id, user_ids=await self._user_roles.list_by_role(role_id))
