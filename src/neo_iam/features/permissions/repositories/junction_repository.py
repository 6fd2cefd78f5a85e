"""AsyncPG junction repositories for user/role and user/permission pairs.

A pair has no identity of its own; the composite primary key on
(user_id, <target>_id) is what serialises concurrent assignments. The
loser of a race gets ``AssignmentExistsError`` from the unique violation.
"""

import logging
from typing import Any, List

from ....core.exceptions import AssignmentExistsError
from ....core.value_objects import PermissionId, RoleId, UserId
from ...database import AsyncPGRepository, database_error_handler

logger = logging.getLogger(__name__)


class _AsyncPGJunctionRepository(AsyncPGRepository):
    """Insert / delete / lookup on a two-column junction table."""

    table_name: str = ""
    target_column: str = ""
    created_column: str = "created_at"

    async def _insert(self, user_id: str, target_id: str) -> None:
        async with self._pool.acquire() as conn:
            await conn.execute(
                f"""
                INSERT INTO {self._table(self.table_name)} (user_id, {self.target_column}, {self.created_column})
                VALUES ($1, $2, NOW())
                """,
                user_id,
                target_id,
            )

    async def _delete(self, user_id: str, target_id: str) -> bool:
        async with self._pool.acquire() as conn:
            status = await conn.execute(
                f"""
                DELETE FROM {self._table(self.table_name)}
                WHERE user_id = $1 AND {self.target_column} = $2
                """,
                user_id,
                target_id,
            )
        # asyncpg returns the command tag, e.g. "DELETE 1"
        return status.split()[-1] != "0"

    async def _exists(self, user_id: str, target_id: str) -> bool:
        async with self._pool.acquire() as conn:
            return bool(
                await conn.fetchval(
                    f"""
                    SELECT EXISTS(
                        SELECT 1 FROM {self._table(self.table_name)}
                        WHERE user_id = $1 AND {self.target_column} = $2
                    )
                    """,
                    user_id,
                    target_id,
                )
            )

    async def _targets_of(self, user_id: str) -> List[Any]:
        async with self._pool.acquire() as conn:
            rows = await conn.fetch(
                f"""
                SELECT {self.target_column} FROM {self._table(self.table_name)}
                WHERE user_id = $1
                ORDER BY {self.created_column}
                """,
                user_id,
            )
        return [row[self.target_column] for row in rows]

    async def _users_of(self, target_id: str) -> List[UserId]:
        async with self._pool.acquire() as conn:
            rows = await conn.fetch(
                f"""
                SELECT user_id FROM {self._table(self.table_name)}
                WHERE {self.target_column} = $1
                ORDER BY {self.created_column}
                """,
                target_id,
            )
        return [UserId(str(row["user_id"])) for row in rows]


class AsyncPGUserRoleRepository(_AsyncPGJunctionRepository):
    """AsyncPG implementation of UserRoleRepository protocol."""

    table_name = "user_roles"
    target_column = "role_id"

    @database_error_handler("assign role to user", conflict_error=AssignmentExistsError,
                            conflict_message="User already has this role")
    async def assign(self, user_id: UserId, role_id: RoleId) -> None:
        await self._insert(user_id.value, role_id.value)

    @database_error_handler("revoke role from user")
    async def revoke(self, user_id: UserId, role_id: RoleId) -> bool:
        return await self._delete(user_id.value, role_id.value)

    @database_error_handler("check user role")
    async def has(self, user_id: UserId, role_id: RoleId) -> bool:
        return await self._exists(user_id.value, role_id.value)

    @database_error_handler("list user roles")
    async def list_by_user(self, user_id: UserId) -> List[RoleId]:
        return [RoleId(str(value)) for value in await self._targets_of(user_id.value)]

    @database_error_handler("list role users")
    async def list_by_role(self, role_id: RoleId) -> List[UserId]:
        return await self._users_of(role_id.value)


class AsyncPGUserPermissionRepository(_AsyncPGJunctionRepository):
    """AsyncPG implementation of UserPermissionRepository protocol."""

    table_name = "user_permissions"
    target_column = "permission_id"

    @database_error_handler("assign permission to user", conflict_error=AssignmentExistsError,
                            conflict_message="User already has this permission")
    async def assign(self, user_id: UserId, permission_id: PermissionId) -> None:
        await self._insert(user_id.value, permission_id.value)

    @database_error_handler("revoke permission from user")
    async def revoke(self, user_id: UserId, permission_id: PermissionId) -> bool:
        return await self._delete(user_id.value, permission_id.value)

    @database_error_handler("check user permission")
    async def has(self, user_id: UserId, permission_id: PermissionId) -> bool:
        return await self._exists(user_id.value, permission_id.value)

    @database_error_handler("list user permissions")
    async def list_by_user(self, user_id: UserId) -> List[PermissionId]:
        return [PermissionId(str(value)) for value in await self._targets_of(user_id.value)]

    @database_error_handler("list permission users")
    async def list_by_permission(self, permission_id: PermissionId) -> List[UserId]:
        return await self._users_of(permission_id.value)
