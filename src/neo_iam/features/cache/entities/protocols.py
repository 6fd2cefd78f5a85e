"""Cache protocols for neo-iam.

The cache is content-agnostic: it stores and evicts JSON-compatible values
and never computes permissions itself.
"""

from abc import abstractmethod
from typing import Any, Optional, Protocol, runtime_checkable


@runtime_checkable
class CacheBackend(Protocol):
    """Protocol for an atomic, namespaced key-value store."""

    @abstractmethod
    async def get(self, key: str) -> Optional[Any]:
        """Return the cached value, or None on a miss."""
        ...

    @abstractmethod
    async def set(self, key: str, value: Any, ttl: Optional[int] = None) -> None:
        """Store a value, replacing any previous one."""
        ...

    @abstractmethod
    async def delete(self, key: str) -> bool:
        """Remove a key, returning whether it existed."""
        ...

    @abstractmethod
    async def delete_by_prefix(self, prefix: str) -> int:
        """Remove every key starting with ``prefix`` and return the count."""
        ...
