"""AsyncPG-based role repository implementation.

Roles live in ``{schema}.roles``; their ordered permission list lives in
``{schema}.role_permissions`` keyed by (role_id, permission_id) with a
``position`` column preserving assignment order.
"""

import logging
from typing import Dict, List, Optional, Sequence

import asyncpg

from ....core.exceptions import DuplicateNameError
from ....core.value_objects import PermissionId, RoleId, TenantId
from ....utils import ensure_utc
from ...database import AsyncPGRepository, database_error_handler
from ..entities import Role

logger = logging.getLogger(__name__)

_ROLE_COLUMNS = "id, name, description, tenant_id, is_system, created_at, updated_at, deleted_at"


class AsyncPGRoleRepository(AsyncPGRepository):
    """AsyncPG implementation of RoleRepository protocol."""

    def _build_role_from_row(self, row: asyncpg.Record, permission_ids: Sequence[str]) -> Role:
        """Build Role entity from database row."""
        return Role.reconstitute(
            role_id=RoleId(str(row["id"])),
            name=row["name"],
            description=row["description"] or "",
            permission_ids=[PermissionId(str(p)) for p in permission_ids],
            tenant_id=TenantId(str(row["tenant_id"])) if row["tenant_id"] else None,
            is_system=row["is_system"],
            created_at=ensure_utc(row["created_at"]),
            updated_at=ensure_utc(row["updated_at"]),
            deleted_at=ensure_utc(row["deleted_at"]),
        )

    async def _load_permission_ids(
        self, conn: asyncpg.Connection, role_ids: List[str]
    ) -> Dict[str, List[str]]:
        rows = await conn.fetch(
            f"""
            SELECT role_id, permission_id
            FROM {self._table("role_permissions")}
            WHERE role_id = ANY($1::uuid[])
            ORDER BY role_id, position
            """,
            role_ids,
        )
        grouped: Dict[str, List[str]] = {role_id: [] for role_id in role_ids}
        for row in rows:
            grouped.setdefault(str(row["role_id"]), []).append(str(row["permission_id"]))
        return grouped

    async def _build_roles(self, conn: asyncpg.Connection, rows: List[asyncpg.Record]) -> List[Role]:
        if not rows:
            return []
        permissions = await self._load_permission_ids(conn, [str(row["id"]) for row in rows])
        return [self._build_role_from_row(row, permissions.get(str(row["id"]), [])) for row in rows]

    @database_error_handler("save role", conflict_error=DuplicateNameError,
                            conflict_message="Role name already exists in this scope")
    async def save(self, role: Role) -> None:
        async with self._pool.acquire() as conn:
            async with conn.transaction():
                await conn.execute(
                    f"""
                    INSERT INTO {self._table("roles")} ({_ROLE_COLUMNS})
                    VALUES ($1, $2, $3, $4, $5, $6, $7, $8)
                    ON CONFLICT (id) DO UPDATE SET
                        name = EXCLUDED.name,
                        description = EXCLUDED.description,
                        updated_at = EXCLUDED.updated_at,
                        deleted_at = EXCLUDED.deleted_at
                    """,
                    role.id.value,
                    role.name,
                    role.description,
                    role.tenant_id.value if role.tenant_id else None,
                    role.is_system,
                    role.created_at,
                    role.updated_at,
                    role.deleted_at,
                )
                await conn.execute(
                    f"DELETE FROM {self._table('role_permissions')} WHERE role_id = $1",
                    role.id.value,
                )
                if role.permission_ids:
                    await conn.executemany(
                        f"""
                        INSERT INTO {self._table("role_permissions")} (role_id, permission_id, position)
                        VALUES ($1, $2, $3)
                        """,
                        [
                            (role.id.value, permission_id.value, position)
                            for position, permission_id in enumerate(role.permission_ids)
                        ],
                    )
        logger.debug(f"Saved role {role.id} with {len(role.permission_ids)} permissions in {self._schema}")

    @database_error_handler("get role by id")
    async def find_by_id(self, role_id: RoleId) -> Optional[Role]:
        async with self._pool.acquire() as conn:
            row = await conn.fetchrow(
                f"SELECT {_ROLE_COLUMNS} FROM {self._table('roles')} WHERE id = $1",
                role_id.value,
            )
            if row is None:
                return None
            roles = await self._build_roles(conn, [row])
            return roles[0]

    @database_error_handler("get roles by ids")
    async def find_by_ids(self, role_ids: Sequence[RoleId]) -> List[Role]:
        if not role_ids:
            return []
        async with self._pool.acquire() as conn:
            rows = await conn.fetch(
                f"""
                SELECT {_ROLE_COLUMNS} FROM {self._table("roles")}
                WHERE id = ANY($1::uuid[]) AND deleted_at IS NULL
                ORDER BY name
                """,
                [role_id.value for role_id in role_ids],
            )
            return await self._build_roles(conn, rows)

    @database_error_handler("get role by name")
    async def find_by_name(self, name: str, tenant_id: Optional[TenantId] = None) -> Optional[Role]:
        async with self._pool.acquire() as conn:
            row = await conn.fetchrow(
                f"""
                SELECT {_ROLE_COLUMNS} FROM {self._table("roles")}
                WHERE name = $1 AND tenant_id IS NOT DISTINCT FROM $2 AND deleted_at IS NULL
                """,
                name,
                tenant_id.value if tenant_id else None,
            )
            if row is None:
                return None
            roles = await self._build_roles(conn, [row])
            return roles[0]

    @database_error_handler("list roles")
    async def find_all(
        self,
        tenant_id: Optional[TenantId] = None,
        include_deleted: bool = False,
    ) -> List[Role]:
        conditions = []
        params = []
        if tenant_id is not None:
            params.append(tenant_id.value)
            conditions.append(f"tenant_id = ${len(params)}")
        if not include_deleted:
            conditions.append("deleted_at IS NULL")
        where_clause = f"WHERE {' AND '.join(conditions)}" if conditions else ""

        async with self._pool.acquire() as conn:
            rows = await conn.fetch(
                f"SELECT {_ROLE_COLUMNS} FROM {self._table('roles')} {where_clause} ORDER BY name",
                *params,
            )
            return await self._build_roles(conn, rows)

    @database_error_handler("delete role")
    async def delete(self, role_id: RoleId) -> None:
        async with self._pool.acquire() as conn:
            await conn.execute(
                f"""
                UPDATE {self._table("roles")}
                SET deleted_at = NOW(), updated_at = NOW()
                WHERE id = $1 AND deleted_at IS NULL
                """,
                role_id.value,
            )
