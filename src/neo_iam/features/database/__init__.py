"""asyncpg plumbing shared by the repositories."""

from .repository import AsyncPGRepository, create_pool, validate_schema_name
from .utils import database_error_handler

__all__ = ["AsyncPGRepository", "create_pool", "validate_schema_name", "database_error_handler"]
