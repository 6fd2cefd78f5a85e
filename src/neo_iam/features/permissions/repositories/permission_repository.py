"""AsyncPG-based permission repository implementation."""

import logging
from typing import List, Optional, Sequence

import asyncpg

from ....core.exceptions import DuplicateNameError
from ....core.value_objects import PermissionId
from ....utils import ensure_utc
from ...database import AsyncPGRepository, database_error_handler
from ..entities import Permission

logger = logging.getLogger(__name__)

_PERMISSION_COLUMNS = "id, name, description, resource, action, created_at, updated_at, deleted_at"


class AsyncPGPermissionRepository(AsyncPGRepository):
    """AsyncPG implementation of PermissionRepository protocol."""

    def _build_permission_from_row(self, row: asyncpg.Record) -> Permission:
        return Permission.reconstitute(
            permission_id=PermissionId(str(row["id"])),
            name=row["name"],
            description=row["description"] or "",
            resource=row["resource"],
            action=row["action"],
            created_at=ensure_utc(row["created_at"]),
            updated_at=ensure_utc(row["updated_at"]),
            deleted_at=ensure_utc(row["deleted_at"]),
        )

    @database_error_handler("save permission", conflict_error=DuplicateNameError,
                            conflict_message="Permission name already exists")
    async def save(self, permission: Permission) -> None:
        async with self._pool.acquire() as conn:
            await conn.execute(
                f"""
                INSERT INTO {self._table("permissions")} ({_PERMISSION_COLUMNS})
                VALUES ($1, $2, $3, $4, $5, $6, $7, $8)
                ON CONFLICT (id) DO UPDATE SET
                    name = EXCLUDED.name,
                    description = EXCLUDED.description,
                    resource = EXCLUDED.resource,
                    action = EXCLUDED.action,
                    updated_at = EXCLUDED.updated_at,
                    deleted_at = EXCLUDED.deleted_at
                """,
                permission.id.value,
                permission.name,
                permission.description,
                permission.resource,
                permission.action,
                permission.created_at,
                permission.updated_at,
                permission.deleted_at,
            )

    @database_error_handler("get permission by id")
    async def find_by_id(self, permission_id: PermissionId) -> Optional[Permission]:
        async with self._pool.acquire() as conn:
            row = await conn.fetchrow(
                f"SELECT {_PERMISSION_COLUMNS} FROM {self._table('permissions')} WHERE id = $1",
                permission_id.value,
            )
        return self._build_permission_from_row(row) if row else None

    @database_error_handler("get permissions by ids")
    async def find_by_ids(self, permission_ids: Sequence[PermissionId]) -> List[Permission]:
        if not permission_ids:
            return []
        async with self._pool.acquire() as conn:
            rows = await conn.fetch(
                f"""
                SELECT {_PERMISSION_COLUMNS} FROM {self._table("permissions")}
                WHERE id = ANY($1::uuid[]) AND deleted_at IS NULL
                ORDER BY resource, action
                """,
                [permission_id.value for permission_id in permission_ids],
            )
        return [self._build_permission_from_row(row) for row in rows]

    @database_error_handler("get permission by name")
    async def find_by_name(self, name: str) -> Optional[Permission]:
        async with self._pool.acquire() as conn:
            row = await conn.fetchrow(
                f"""
                SELECT {_PERMISSION_COLUMNS} FROM {self._table("permissions")}
                WHERE name = $1 AND deleted_at IS NULL
                """,
                name,
            )
        return self._build_permission_from_row(row) if row else None

    @database_error_handler("list permissions")
    async def find_all(
        self,
        resource: Optional[str] = None,
        include_deleted: bool = False,
    ) -> List[Permission]:
        conditions = []
        params = []
        if resource is not None:
            params.append(resource)
            conditions.append(f"resource = ${len(params)}")
        if not include_deleted:
            conditions.append("deleted_at IS NULL")
        where_clause = f"WHERE {' AND '.join(conditions)}" if conditions else ""

        async with self._pool.acquire() as conn:
            rows = await conn.fetch(
                f"""
                SELECT {_PERMISSION_COLUMNS} FROM {self._table("permissions")}
                {where_clause}
                ORDER BY resource, action
                """,
                *params,
            )
        return [self._build_permission_from_row(row) for row in rows]

    @database_error_handler("delete permission")
    async def delete(self, permission_id: PermissionId) -> None:
        async with self._pool.acquire() as conn:
            await conn.execute(
                f"""
                UPDATE {self._table("permissions")}
                SET deleted_at = NOW(), updated_at = NOW()
                WHERE id = $1 AND deleted_at IS NULL
                """,
                permission_id.value,
            )
