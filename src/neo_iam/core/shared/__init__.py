"""Shared domain building blocks."""

from .aggregate import AggregateRoot
from .domain_event import DomainEvent

__all__ = ["AggregateRoot", "DomainEvent"]
