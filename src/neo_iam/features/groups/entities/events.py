"""Domain events for groups."""

from dataclasses import dataclass
from typing import Optional

from ....core.shared import DomainEvent


@dataclass(frozen=True, kw_only=True)
class GroupCreated(DomainEvent):
    event_type = "group.created"
    aggregate_type = "group"

    name: str
    organization_id: Optional[str] = None


@dataclass(frozen=True, kw_only=True)
class GroupUpdated(DomainEvent):
    event_type = "group.updated"
    aggregate_type = "group"

    name: Optional[str] = None
    description: Optional[str] = None


@dataclass(frozen=True, kw_only=True)
class UserAddedToGroup(DomainEvent):
    event_type = "group.user_added"
    aggregate_type = "group"

    user_id: str


@dataclass(frozen=True, kw_only=True)
class UserRemovedFromGroup(DomainEvent):
    event_type = "group.user_removed"
    aggregate_type = "group"

    user_id: str


@dataclass(frozen=True, kw_only=True)
class GroupDeleted(DomainEvent):
    event_type = "group.deleted"
    aggregate_type = "group"
