"""Group repositories."""

from .group_repository import AsyncPGGroupRepository

__all__ = ["AsyncPGGroupRepository"]
