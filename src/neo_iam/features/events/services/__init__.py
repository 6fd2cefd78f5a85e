"""Event services."""

from .event_publisher_service import EventPublisherService, PublishOutcome

__all__ = ["EventPublisherService", "PublishOutcome"]
