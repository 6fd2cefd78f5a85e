"""Event publication contracts."""

from .protocols import EventBus

__all__ = ["EventBus"]
