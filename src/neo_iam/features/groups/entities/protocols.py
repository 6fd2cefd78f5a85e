"""Protocol interfaces for group persistence."""

from abc import abstractmethod
from typing import List, Optional, Protocol, runtime_checkable

from ....core.value_objects import GroupId, OrganizationId, UserId
from .group import Group


@runtime_checkable
class GroupRepository(Protocol):
    """Protocol for group persistence, membership included."""

    @abstractmethod
    async def save(self, group: Group) -> None:
        """Persist the group and replace its membership set."""
        ...

    @abstractmethod
    async def find_by_id(self, group_id: GroupId) -> Optional[Group]:
        ...

    @abstractmethod
    async def find_by_name(
        self, name: str, organization_id: Optional[OrganizationId] = None
    ) -> Optional[Group]:
        ...

    @abstractmethod
    async def find_all(
        self,
        organization_id: Optional[OrganizationId] = None,
        member_id: Optional[UserId] = None,
    ) -> List[Group]:
        ...

    @abstractmethod
    async def delete(self, group_id: GroupId) -> None:
        ...
