"""Roles held by a user."""

from dataclasses import dataclass
from typing import List, Union

from .....core.value_objects import UserId
from ....users.entities import UserRepository
from ...entities import Role, RoleRepository, UserRoleRepository
from ..common import load_active_user


@dataclass
class GetUserRolesQuery:
    user_id: Union[str, UserId]


@dataclass
class UserRolesResponse:
    user_id: UserId
    roles: List[Role]


class GetUserRoles:
    """Query handler listing a user's active roles."""

    def __init__(
        self,
        user_repository: UserRepository,
        role_repository: RoleRepository,
        user_role_repository: UserRoleRepository,
    ):
        self._users = user_repository
        self._roles = role_repository
        self._user_roles = user_role_repository

    async def execute(self, query: GetUserRolesQuery) -> UserRolesResponse:
        user_id = UserId.coerce(query.user_id)
        await load_active_user(self._users, user_id)
        roles = await self._roles.find_by_ids(await self._user_roles.list_by_user(user_id))
        return UserRolesResponse(user_id=user_id, roles=roles)
