"""Domain events for users."""

from dataclasses import dataclass
from typing import Optional

from ....core.shared import DomainEvent


@dataclass(frozen=True, kw_only=True)
class UserCreated(DomainEvent):
    event_type = "user.created"
    aggregate_type = "user"

    email: str
    tenant_id: Optional[str] = None
    organization_id: Optional[str] = None


@dataclass(frozen=True, kw_only=True)
class UserUpdated(DomainEvent):
    """``change`` names the operation, e.g. ``password_changed``."""

    event_type = "user.updated"
    aggregate_type = "user"

    change: str


@dataclass(frozen=True, kw_only=True)
class UserDeleted(DomainEvent):
    event_type = "user.deleted"
    aggregate_type = "user"
