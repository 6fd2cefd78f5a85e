"""Cache backend adapters."""

from .memory_adapter import MemoryCacheAdapter
from .redis_adapter import RedisCacheAdapter

__all__ = ["MemoryCacheAdapter", "RedisCacheAdapter"]
