"""Protocol interfaces for user persistence."""

from abc import abstractmethod
from typing import List, Optional, Protocol, runtime_checkable

from ....core.value_objects import Email, OrganizationId, TenantId, UserId
from .user import User


@runtime_checkable
class UserRepository(Protocol):
    """Protocol for user persistence."""

    @abstractmethod
    async def save(self, user: User) -> None:
        ...

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by id, including soft-deleted ones."""
        ...

    @abstractmethod
    async def find_by_email(self, email: Email) -> Optional[User]:
        """Find an active user by normalised email."""
        ...

    @abstractmethod
    async def find_all(
        self,
        tenant_id: Optional[TenantId] = None,
        organization_id: Optional[OrganizationId] = None,
        include_deleted: bool = False,
    ) -> List[User]:
        ...

    @abstractmethod
    async def delete(self, user_id: UserId) -> None:
        """Soft delete a user."""
        ...
