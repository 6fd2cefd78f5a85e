"""Domain event publication feature."""

from .adapters import InMemoryEventBus, RedisStreamEventBus
from .entities import EventBus
from .services import EventPublisherService, PublishOutcome

__all__ = [
    "EventBus",
    "InMemoryEventBus",
    "RedisStreamEventBus",
    "EventPublisherService",
    "PublishOutcome",
]
