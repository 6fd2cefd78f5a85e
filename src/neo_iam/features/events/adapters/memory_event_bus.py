"""In-process event bus."""

import logging
from collections import defaultdict
from typing import Callable, DefaultDict, List, Optional

from ....core.shared import DomainEvent

logger = logging.getLogger(__name__)

EventSubscriber = Callable[[DomainEvent], None]


class InMemoryEventBus:
    """Records published events and fans them out to synchronous subscribers.

    Subscribers registered for ``"*"`` receive every event.
    """

    def __init__(self):
        self.published: List[DomainEvent] = []
        self._subscribers: DefaultDict[str, List[EventSubscriber]] = defaultdict(list)

    def subscribe(self, event_type: str, subscriber: EventSubscriber) -> None:
        self._subscribers[event_type].append(subscriber)

    async def publish(self, event: DomainEvent) -> Optional[str]:
        self.published.append(event)
        for subscriber in self._subscribers.get(event.event_type, []) + self._subscribers.get("*", []):
            subscriber(event)
        logger.debug(f"Published {event.event_type} for {event.aggregate_id} in-process")
        return event.event_id

    def of_type(self, event_type: str) -> List[DomainEvent]:
        return [event for event in self.published if event.event_type == event_type]

    def clear(self) -> None:
        self.published.clear()
