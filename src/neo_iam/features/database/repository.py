"""Base class for asyncpg repositories bound to one schema."""

import logging
from typing import Optional

import asyncpg

from ...config.constants import DatabaseSchemas
from ...core.exceptions import ValidationError

logger = logging.getLogger(__name__)


def validate_schema_name(schema_name: str) -> str:
    """Validate a schema name before it is interpolated into SQL."""
    if schema_name == DatabaseSchemas.ADMIN:
        return schema_name
    if (
        schema_name.startswith(DatabaseSchemas.TENANT_PREFIX)
        and len(schema_name) > len(DatabaseSchemas.TENANT_PREFIX)
        and schema_name.replace("_", "").isalnum()
    ):
        return schema_name
    raise ValidationError(f"Invalid schema name: {schema_name}", details={"schema": schema_name})


class AsyncPGRepository:
    """Holds the pool and validated schema shared by all asyncpg repositories."""

    def __init__(self, pool: asyncpg.Pool, schema: str = DatabaseSchemas.ADMIN):
        self._pool = pool
        self._schema = validate_schema_name(schema)

    @property
    def schema(self) -> str:
        return self._schema

    def _table(self, name: str) -> str:
        return f"{self._schema}.{name}"


async def create_pool(
    dsn: str,
    min_size: int = 1,
    max_size: int = 10,
    command_timeout: Optional[float] = 60.0,
) -> asyncpg.Pool:
    """Create the asyncpg pool shared by the repositories."""
    pool = await asyncpg.create_pool(
        dsn,
        min_size=min_size,
        max_size=max_size,
        command_timeout=command_timeout,
    )
    logger.info(f"Created database pool (min={min_size}, max={max_size})")
    return pool
