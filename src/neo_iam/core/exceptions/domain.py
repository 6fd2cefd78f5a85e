"""Domain and application exceptions for neo-iam.

Four families: ValidationError (rejected before any I/O), NotFoundError,
ConflictError and DomainError (any other invariant violation).
"""

from .base import NeoIamError


class ValidationError(NeoIamError):
    """Raised when an identifier or input value is malformed."""
    pass


class NotFoundError(NeoIamError):
    """Raised when a referenced aggregate or association does not exist."""
    pass


class ConflictError(NeoIamError):
    """Raised on duplicate assignments or duplicate names within a scope."""
    pass


class DomainError(NeoIamError):
    """Raised when an aggregate invariant would be violated."""
    pass


# Not found
class RoleNotFoundError(NotFoundError):
    """Raised when role is not found."""
    pass


class PermissionNotFoundError(NotFoundError):
    """Raised when permission is not found."""
    pass


class UserNotFoundError(NotFoundError):
    """Raised when user is not found."""
    pass


class GroupNotFoundError(NotFoundError):
    """Raised when group is not found."""
    pass


class AssignmentNotFoundError(NotFoundError):
    """Raised when a user/role or user/permission pair does not exist."""
    pass


# Conflicts
class AssignmentExistsError(ConflictError):
    """Raised when a user/role or user/permission pair already exists."""
    pass


class DuplicateNameError(ConflictError):
    """Raised when a name or code is already taken within its scope."""
    pass


# Invariants
class SystemRoleProtectedError(DomainError):
    """Raised when mutating or deleting a system role."""
    pass
