"""Group domain entities and contracts."""

from .events import GroupCreated, GroupDeleted, GroupUpdated, UserAddedToGroup, UserRemovedFromGroup
from .group import Group
from .protocols import GroupRepository

__all__ = [
    "Group",
    "GroupRepository",
    "GroupCreated",
    "GroupDeleted",
    "GroupUpdated",
    "UserAddedToGroup",
    "UserRemovedFromGroup",
]
