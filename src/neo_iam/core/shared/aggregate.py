"""Aggregate root base class.

Each aggregate owns a private buffer of domain events. Mutations append to
the buffer through ``_record_event``; the application layer drains it with
``pull_domain_events`` once persistence has succeeded.
"""

from dataclasses import dataclass, field
from typing import List, Tuple

from .domain_event import DomainEvent
from ...utils import utc_now


@dataclass
class AggregateRoot:
    """Event-buffering base for dataclass aggregates.

    Subclasses declare ``created_at``, ``updated_at`` and ``deleted_at``.
    """

    _domain_events: List[DomainEvent] = field(
        default_factory=list, init=False, repr=False, compare=False
    )

    def _record_event(self, event: DomainEvent, touch: bool = True) -> None:
        """Append an event to the buffer, bumping ``updated_at`` unless told not to."""
        if touch:
            self.updated_at = utc_now()
        self._domain_events.append(event)

    def pull_domain_events(self) -> List[DomainEvent]:
        """Return buffered events in order and clear the buffer."""
        events, self._domain_events = self._domain_events, []
        return events

    @property
    def pending_events(self) -> Tuple[DomainEvent, ...]:
        """Read-only view of events not yet pulled."""
        return tuple(self._domain_events)

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    def _mark_deleted(self) -> None:
        now = utc_now()
        self.deleted_at = now
        self.updated_at = now
