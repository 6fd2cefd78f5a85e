"""Standardized error handling for asyncpg repository methods."""

import functools
import logging
from typing import Any, Callable, Optional, Type

import asyncpg

from ....core.exceptions import ConflictError, NeoIamError, RepositoryError

logger = logging.getLogger(__name__)


def database_error_handler(
    operation_name: str,
    conflict_error: Optional[Type[ConflictError]] = None,
    conflict_message: Optional[str] = None,
):
    """Decorator translating driver errors into the neo-iam taxonomy.

    ``asyncpg.UniqueViolationError`` becomes ``conflict_error`` when one is
    given; any other driver error becomes ``RepositoryError``. neo-iam
    errors raised inside the method pass through unchanged.

    Usage:
        @database_error_handler("assign role", conflict_error=AssignmentExistsError)
        async def assign(self, user_id, role_id):
            ...
    """
    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        async def wrapper(*args, **kwargs) -> Any:
            try:
                return await func(*args, **kwargs)
            except NeoIamError:
                raise
            except asyncpg.UniqueViolationError as e:
                if conflict_error is None:
                    logger.error(f"Failed to {operation_name}: {e}")
                    raise RepositoryError(f"Failed to {operation_name}: {e}") from e
                logger.info(f"Conflict during {operation_name}: {getattr(e, 'constraint_name', None) or e}")
                raise conflict_error(
                    conflict_message or f"Failed to {operation_name}: record already exists",
                    details={"constraint": getattr(e, "constraint_name", None)},
                ) from e
            except (asyncpg.PostgresError, asyncpg.InterfaceError, OSError) as e:
                logger.error(f"Failed to {operation_name}: {e}")
                raise RepositoryError(f"Failed to {operation_name}: {e}") from e

        return wrapper
    return decorator
