"""Infrastructure exceptions for neo-iam.

Raised by the cache, event bus and repository adapters.
"""

from .base import NeoIamError


class RepositoryError(NeoIamError):
    """Raised when a persistence operation fails."""
    pass


class CacheError(NeoIamError):
    """Base class for cache-related errors."""
    pass


class CacheInvalidationError(CacheError):
    """Raised when permission cache entries could not be evicted."""
    pass


class EventPublishingError(NeoIamError):
    """Raised when a domain event could not be handed to the bus."""
    pass
