"""Cache contracts."""

from .protocols import CacheBackend

__all__ = ["CacheBackend"]
