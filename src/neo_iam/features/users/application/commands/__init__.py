"""User command handlers."""

from .create_user import CreateUser, CreateUserCommand
from .delete_user import DeleteUser, DeleteUserCommand

__all__ = ["CreateUser", "CreateUserCommand", "DeleteUser", "DeleteUserCommand"]
