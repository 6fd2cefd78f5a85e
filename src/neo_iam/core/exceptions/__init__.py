"""Exceptions module for neo-iam."""

from .base import NeoIamError, create_error_response
from .domain import (
    ValidationError,
    NotFoundError,
    ConflictError,
    DomainError,
    RoleNotFoundError,
    PermissionNotFoundError,
    UserNotFoundError,
    GroupNotFoundError,
    AssignmentNotFoundError,
    AssignmentExistsError,
    DuplicateNameError,
    SystemRoleProtectedError,
)
from .infrastructure import (
    RepositoryError,
    CacheError,
    CacheInvalidationError,
    EventPublishingError,
)
from .http_mapping import HTTP_STATUS_MAP, get_http_status_code

__all__ = [
    "NeoIamError",
    "create_error_response",
    "ValidationError",
    "NotFoundError",
    "ConflictError",
    "DomainError",
    "RoleNotFoundError",
    "PermissionNotFoundError",
    "UserNotFoundError",
    "GroupNotFoundError",
    "AssignmentNotFoundError",
    "AssignmentExistsError",
    "DuplicateNameError",
    "SystemRoleProtectedError",
    "RepositoryError",
    "CacheError",
    "CacheInvalidationError",
    "EventPublishingError",
    "HTTP_STATUS_MAP",
    "get_http_status_code",
]
