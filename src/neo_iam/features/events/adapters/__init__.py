"""Event bus adapters."""

from .memory_event_bus import InMemoryEventBus
from .redis_stream_event_bus import RedisStreamEventBus

__all__ = ["InMemoryEventBus", "RedisStreamEventBus"]
