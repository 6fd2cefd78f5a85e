"""User repositories."""

from .user_repository import AsyncPGUserRepository

__all__ = ["AsyncPGUserRepository"]
