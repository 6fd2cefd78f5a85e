"""AsyncPG-based group repository implementation.

Groups live in ``{schema}.groups``; membership in ``{schema}.group_users``.
``save`` replaces the membership set inside one transaction.
"""

import logging
from typing import Dict, List, Optional

import asyncpg

from ....core.exceptions import DuplicateNameError
from ....core.value_objects import GroupId, OrganizationId, UserId
from ....utils import ensure_utc
from ...database import AsyncPGRepository, database_error_handler
from ..entities import Group

logger = logging.getLogger(__name__)

_GROUP_COLUMNS = "id, name, description, organization_id, created_at, updated_at, deleted_at"


class AsyncPGGroupRepository(AsyncPGRepository):
    """AsyncPG implementation of GroupRepository protocol."""

    async def _load_members(self, conn: asyncpg.Connection, group_ids: List[str]) -> Dict[str, List[str]]:
        rows = await conn.fetch(
            f"""
            SELECT group_id, user_id FROM {self._table("group_users")}
            WHERE group_id = ANY($1::uuid[])
            ORDER BY group_id, created_at
            """,
            group_ids,
        )
        members: Dict[str, List[str]] = {group_id: [] for group_id in group_ids}
        for row in rows:
            members.setdefault(str(row["group_id"]), []).append(str(row["user_id"]))
        return members

    async def _build_groups(self, conn: asyncpg.Connection, rows: List[asyncpg.Record]) -> List[Group]:
        if not rows:
            return []
        members = await self._load_members(conn, [str(row["id"]) for row in rows])
        return [
            Group.reconstitute(
                group_id=GroupId(str(row["id"])),
                name=row["name"],
                description=row["description"] or "",
                user_ids=[UserId(user_id) for user_id in members.get(str(row["id"]), [])],
                organization_id=OrganizationId(str(row["organization_id"])) if row["organization_id"] else None,
                created_at=ensure_utc(row["created_at"]),
                updated_at=ensure_utc(row["updated_at"]),
                deleted_at=ensure_utc(row["deleted_at"]),
            )
            for row in rows
        ]

    @database_error_handler("save group", conflict_error=DuplicateNameError,
                            conflict_message="Group name already exists in this organization")
    async def save(self, group: Group) -> None:
        async with self._pool.acquire() as conn:
            async with conn.transaction():
                await conn.execute(
                    f"""
                    INSERT INTO {self._table("groups")} ({_GROUP_COLUMNS})
                    VALUES ($1, $2, $3, $4, $5, $6, $7)
                    ON CONFLICT (id) DO UPDATE SET
                        name = EXCLUDED.name,
                        description = EXCLUDED.description,
                        updated_at = EXCLUDED.updated_at,
                        deleted_at = EXCLUDED.deleted_at
                    """,
                    group.id.value,
                    group.name,
                    group.description,
                    group.organization_id.value if group.organization_id else None,
                    group.created_at,
                    group.updated_at,
                    group.deleted_at,
                )
                await conn.execute(
                    f"DELETE FROM {self._table('group_users')} WHERE group_id = $1",
                    group.id.value,
                )
                if group.user_ids:
                    await conn.executemany(
                        f"""
                        INSERT INTO {self._table("group_users")} (group_id, user_id, created_at)
                        VALUES ($1, $2, NOW())
                        """,
                        [(group.id.value, user_id.value) for user_id in group.user_ids],
                    )

    @database_error_handler("get group by id")
    async def find_by_id(self, group_id: GroupId) -> Optional[Group]:
        async with self._pool.acquire() as conn:
            row = await conn.fetchrow(
                f"SELECT {_GROUP_COLUMNS} FROM {self._table('groups')} WHERE id = $1",
                group_id.value,
            )
            groups = await self._build_groups(conn, [row] if row else [])
        return groups[0] if groups else None

    @database_error_handler("get group by name")
    async def find_by_name(self, name: str, organization_id: Optional[OrganizationId] = None) -> Optional[Group]:
        async with self._pool.acquire() as conn:
            row = await conn.fetchrow(
                f"""
                SELECT {_GROUP_COLUMNS} FROM {self._table("groups")}
                WHERE name = $1 AND organization_id IS NOT DISTINCT FROM $2 AND deleted_at IS NULL
                """,
                name,
                organization_id.value if organization_id else None,
            )
            groups = await self._build_groups(conn, [row] if row else [])
        return groups[0] if groups else None

    @database_error_handler("list groups")
    async def find_all(
        self,
        organization_id: Optional[OrganizationId] = None,
        member_id: Optional[UserId] = None,
    ) -> List[Group]:
        conditions = ["g.deleted_at IS NULL"]
        params = []
        if organization_id is not None:
            params.append(organization_id.value)
            conditions.append(f"g.organization_id = ${len(params)}")
        if member_id is not None:
            params.append(member_id.value)
            conditions.append(
                f"EXISTS (SELECT 1 FROM {self._table('group_users')} gu "
                f"WHERE gu.group_id = g.id AND gu.user_id = ${len(params)})"
            )

        async with self._pool.acquire() as conn:
            rows = await conn.fetch(
                f"""
                SELECT {", ".join(f"g.{c.strip()}" for c in _GROUP_COLUMNS.split(","))}
                FROM {self._table("groups")} g
                WHERE {" AND ".join(conditions)}
                ORDER BY g.name
                """,
                *params,
            )
            return await self._build_groups(conn, rows)

    @database_error_handler("delete group")
    async def delete(self, group_id: GroupId) -> None:
        async with self._pool.acquire() as conn:
            await conn.execute(
                f"""
                UPDATE {self._table("groups")}
                SET deleted_at = NOW(), updated_at = NOW()
                WHERE id = $1 AND deleted_at IS NULL
                """,
                group_id.value,
            )
