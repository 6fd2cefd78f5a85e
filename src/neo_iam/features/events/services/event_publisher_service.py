"""Event publisher service.

Handlers call this only after persistence has succeeded. Publication is
best-effort: a failing bus is logged and counted, and the committed write
stands.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable, List

from ....core.shared import AggregateRoot, DomainEvent
from ..entities.protocols import EventBus

logger = logging.getLogger(__name__)


@dataclass
class PublishOutcome:
    """Counts from one publication batch."""

    published: int = 0
    failed: int = 0
    failed_event_ids: List[str] = field(default_factory=list)

    def merge(self, other: "PublishOutcome") -> "PublishOutcome":
        return PublishOutcome(
            published=self.published + other.published,
            failed=self.failed + other.failed,
            failed_event_ids=self.failed_event_ids + other.failed_event_ids,
        )


class EventPublisherService:
    """Publishes domain events to the configured bus."""

    def __init__(self, bus: EventBus):
        self._bus = bus

    async def publish(self, event: DomainEvent) -> bool:
        """Publish one event, returning False instead of raising on failure."""
        try:
            await self._bus.publish(event)
        except Exception as e:
            logger.error(
                f"Failed to publish {event.event_type} event {event.event_id} "
                f"for {event.aggregate_type} {event.aggregate_id}: {e}"
            )
            return False
        return True

    async def publish_all(self, events: Iterable[DomainEvent]) -> PublishOutcome:
        outcome = PublishOutcome()
        for event in events:
            if await self.publish(event):
                outcome.published += 1
            else:
                outcome.failed += 1
                outcome.failed_event_ids.append(event.event_id)
        return outcome

    async def publish_pending(self, aggregate: AggregateRoot) -> PublishOutcome:
        """Drain an aggregate's buffer and publish each event in order."""
        return await self.publish_all(aggregate.pull_domain_events())
