"""AsyncPG-based user repository implementation."""

import logging
from typing import List, Optional

import asyncpg

from ....core.exceptions import DuplicateNameError
from ....core.value_objects import Email, OrganizationId, TenantId, UserId
from ....utils import ensure_utc
from ...database import AsyncPGRepository, database_error_handler
from ..entities import User

logger = logging.getLogger(__name__)

_USER_COLUMNS = (
    "id, email, password_hash, first_name, last_name, mfa_enabled, mfa_secret, "
    "force_password_change, password_changed_at, is_initial_password, tenant_id, "
    "organization_id, last_login_at, is_active, email_verified, created_at, updated_at, deleted_at"
)


class AsyncPGUserRepository(AsyncPGRepository):
    """AsyncPG implementation of UserRepository protocol."""

    def _build_user_from_row(self, row: asyncpg.Record) -> User:
        return User.reconstitute(
            id=UserId(str(row["id"])),
            email=Email(row["email"]),
            password_hash=row["password_hash"],
            first_name=row["first_name"],
            last_name=row["last_name"],
            mfa_enabled=row["mfa_enabled"],
            mfa_secret=row["mfa_secret"],
            force_password_change=row["force_password_change"],
            password_changed_at=ensure_utc(row["password_changed_at"]),
            is_initial_password=row["is_initial_password"],
            tenant_id=TenantId(str(row["tenant_id"])) if row["tenant_id"] else None,
            organization_id=OrganizationId(str(row["organization_id"])) if row["organization_id"] else None,
            last_login_at=ensure_utc(row["last_login_at"]),
            is_active=row["is_active"],
            email_verified=row["email_verified"],
            created_at=ensure_utc(row["created_at"]),
            updated_at=ensure_utc(row["updated_at"]),
            deleted_at=ensure_utc(row["deleted_at"]),
        )

    @database_error_handler("save user", conflict_error=DuplicateNameError,
                            conflict_message="Email already registered")
    async def save(self, user: User) -> None:
        async with self._pool.acquire() as conn:
            await conn.execute(
                f"""
                INSERT INTO {self._table("users")} ({_USER_COLUMNS})
                VALUES ($1, $2, $3, $4, $5, $6, $7, $8, $9, $10, $11, $12, $13, $14, $15, $16, $17, $18)
                ON CONFLICT (id) DO UPDATE SET
                    email = EXCLUDED.email,
                    password_hash = EXCLUDED.password_hash,
                    first_name = EXCLUDED.first_name,
                    last_name = EXCLUDED.last_name,
                    mfa_enabled = EXCLUDED.mfa_enabled,
                    mfa_secret = EXCLUDED.mfa_secret,
                    force_password_change = EXCLUDED.force_password_change,
                    password_changed_at = EXCLUDED.password_changed_at,
                    is_initial_password = EXCLUDED.is_initial_password,
                    tenant_id = EXCLUDED.tenant_id,
                    organization_id = EXCLUDED.organization_id,
                    last_login_at = EXCLUDED.last_login_at,
                    is_active = EXCLUDED.is_active,
                    email_verified = EXCLUDED.email_verified,
                    updated_at = EXCLUDED.updated_at,
                    deleted_at = EXCLUDED.deleted_at
                """,
                user.id.value,
                user.email.value,
                user.password_hash,
                user.first_name,
                user.last_name,
                user.mfa_enabled,
                user.mfa_secret,
                user.force_password_change,
                user.password_changed_at,
                user.is_initial_password,
                user.tenant_id.value if user.tenant_id else None,
                user.organization_id.value if user.organization_id else None,
                user.last_login_at,
                user.is_active,
                user.email_verified,
                user.created_at,
                user.updated_at,
                user.deleted_at,
            )

    @database_error_handler("get user by id")
    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        async with self._pool.acquire() as conn:
            row = await conn.fetchrow(
                f"SELECT {_USER_COLUMNS} FROM {self._table('users')} WHERE id = $1",
                user_id.value,
            )
        return self._build_user_from_row(row) if row else None

    @database_error_handler("get user by email")
    async def find_by_email(self, email: Email) -> Optional[User]:
        async with self._pool.acquire() as conn:
            row = await conn.fetchrow(
                f"""
                SELECT {_USER_COLUMNS} FROM {self._table("users")}
                WHERE email = $1 AND deleted_at IS NULL
                """,
                email.value,
            )
        return self._build_user_from_row(row) if row else None

    @database_error_handler("list users")
    async def find_all(
        self,
        tenant_id: Optional[TenantId] = None,
        organization_id: Optional[OrganizationId] = None,
        include_deleted: bool = False,
    ) -> List[User]:
        conditions = []
        params = []
        if tenant_id is not None:
            params.append(tenant_id.value)
            conditions.append(f"tenant_id = ${len(params)}")
        if organization_id is not None:
            params.append(organization_id.value)
            conditions.append(f"organization_id = ${len(params)}")
        if not include_deleted:
            conditions.append("deleted_at IS NULL")
        where_clause = f"WHERE {' AND '.join(conditions)}" if conditions else ""

        async with self._pool.acquire() as conn:
            rows = await conn.fetch(
                f"SELECT {_USER_COLUMNS} FROM {self._table('users')} {where_clause} ORDER BY email",
                *params,
            )
        return [self._build_user_from_row(row) for row in rows]

    @database_error_handler("delete user")
    async def delete(self, user_id: UserId) -> None:
        async with self._pool.acquire() as conn:
            await conn.execute(
                f"""
                UPDATE {self._table("users")}
                SET deleted_at = NOW(), updated_at = NOW()
                WHERE id = $1 AND deleted_at IS NULL
                """,
                user_id.value,
            )
