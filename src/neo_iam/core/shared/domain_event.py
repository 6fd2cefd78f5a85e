"""Domain event record shared by every aggregate.

Events are plain, immutable data: the identifier of the aggregate that
changed plus the scalar fields describing the change. They carry no
behaviour beyond serialisation.
"""

from dataclasses import dataclass, field, fields
from datetime import datetime
from typing import Any, ClassVar, Dict

from ...utils import generate_uuid_v7, utc_now


_ENVELOPE_FIELDS = frozenset({"event_id", "occurred_at", "aggregate_id"})


@dataclass(frozen=True, kw_only=True)
class DomainEvent:
    """Base record for everything an aggregate buffers on mutation."""

    event_type: ClassVar[str] = "domain.event"
    aggregate_type: ClassVar[str] = "aggregate"

    aggregate_id: str
    event_id: str = field(default_factory=generate_uuid_v7)
    occurred_at: datetime = field(default_factory=utc_now)

    def __post_init__(self):
        # Event type format is category.action
        if "." not in self.event_type:
            raise ValueError(
                f"Invalid event type format: {self.event_type}. Expected format: 'category.action'"
            )
        if not self.aggregate_id:
            raise ValueError("Event aggregate_id cannot be empty")

    @property
    def payload(self) -> Dict[str, Any]:
        """Scalar fields specific to this event type."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if f.name not in _ENVELOPE_FIELDS
        }

    def to_dict(self) -> Dict[str, Any]:
        """Serialise the event into a JSON-friendly envelope."""
        return {
            "event_id": self.event_id,
            "event_type": self.event_type,
            "aggregate_type": self.aggregate_type,
            "aggregate_id": self.aggregate_id,
            "occurred_at": self.occurred_at.isoformat(),
            "data": {key: _to_primitive(value) for key, value in self.payload.items()},
        }


def _to_primitive(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, (list, tuple, set, frozenset)):
        return [_to_primitive(item) for item in value]
    return value
