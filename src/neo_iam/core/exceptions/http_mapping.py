"""HTTP status code mapping for exceptions.

Lets an HTTP collaborator translate handler failures without knowing
the exception hierarchy in detail.
"""

from typing import Dict, Type

from .domain import (
    ValidationError,
    NotFoundError,
    ConflictError,
    DomainError,
)
from .infrastructure import (
    RepositoryError,
    CacheError,
    EventPublishingError,
)


HTTP_STATUS_MAP: Dict[Type[Exception], int] = {
    ValidationError: 400,
    NotFoundError: 404,
    ConflictError: 409,
    DomainError: 422,
    RepositoryError: 500,
    EventPublishingError: 500,
    CacheError: 503,
}


def get_http_status_code(exception: Exception) -> int:
    """Get HTTP status code for exception.

    Walks the exception's MRO so subclasses inherit their family's code.

    Args:
        exception: The exception instance

    Returns:
        HTTP status code (500 for anything unmapped)
    """
    for exc_type in type(exception).__mro__:
        if exc_type in HTTP_STATUS_MAP:
            return HTTP_STATUS_MAP[exc_type]
    return 500
