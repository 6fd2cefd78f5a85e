"""Event bus protocol.

Publishing is fire-and-forget from the authorization core's point of view;
delivery guarantees belong to the bus.
"""

from abc import abstractmethod
from typing import Optional, Protocol, runtime_checkable

from ....core.shared import DomainEvent


@runtime_checkable
class EventBus(Protocol):
    """Protocol for handing domain events to an external bus."""

    @abstractmethod
    async def publish(self, event: DomainEvent) -> Optional[str]:
        """Publish one event, returning a bus message id when available."""
        ...
