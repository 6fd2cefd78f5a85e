"""Group command handlers."""

from .add_user_to_group import AddUserToGroup, AddUserToGroupCommand
from .remove_user_from_group import RemoveUserFromGroup, RemoveUserFromGroupCommand

__all__ = [
    "AddUserToGroup",
    "AddUserToGroupCommand",
    "RemoveUserFromGroup",
    "RemoveUserFromGroupCommand",
]
