"""Database utilities."""

from .error_handling import database_error_handler

__all__ = ["database_error_handler"]
