"""User domain entities and contracts."""

from .events import UserCreated, UserDeleted, UserUpdated
from .user import User
from .protocols import UserRepository

__all__ = ["User", "UserRepository", "UserCreated", "UserDeleted", "UserUpdated"]
