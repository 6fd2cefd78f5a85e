"""Protocol interfaces for tenancy-chain persistence.

Every repository follows the same shape: ``save``, ``find_by_id``
(soft-deleted rows included), ``find_by_code`` (active only), ``find_all``
and a soft ``delete``.
"""

from abc import abstractmethod
from typing import List, Optional, Protocol, runtime_checkable

from ....core.value_objects import (
    OrganizationId,
    RegionId,
    TenantId,
    WorkspaceId,
)
from .organization import Organization
from .region import Region
from .tenant import Tenant
from .workspace import Workspace


@runtime_checkable
class RegionRepository(Protocol):
    """Protocol for region persistence."""

    @abstractmethod
    async def save(self, region: Region) -> None:
        ...

    @abstractmethod
    async def find_by_id(self, region_id: RegionId) -> Optional[Region]:
        ...

    @abstractmethod
    async def find_by_code(self, code: str) -> Optional[Region]:
        ...

    @abstractmethod
    async def find_all(self, active_only: bool = False) -> List[Region]:
        ...

    @abstractmethod
    async def delete(self, region_id: RegionId) -> None:
        ...


@runtime_checkable
class OrganizationRepository(Protocol):
    """Protocol for organization persistence."""

    @abstractmethod
    async def save(self, organization: Organization) -> None:
        ...

    @abstractmethod
    async def find_by_id(self, organization_id: OrganizationId) -> Optional[Organization]:
        ...

    @abstractmethod
    async def find_by_code(self, code: str) -> Optional[Organization]:
        ...

    @abstractmethod
    async def find_all(self, region_id: Optional[RegionId] = None) -> List[Organization]:
        ...

    @abstractmethod
    async def delete(self, organization_id: OrganizationId) -> None:
        ...


@runtime_checkable
class WorkspaceRepository(Protocol):
    """Protocol for workspace persistence."""

    @abstractmethod
    async def save(self, workspace: Workspace) -> None:
        ...

    @abstractmethod
    async def find_by_id(self, workspace_id: WorkspaceId) -> Optional[Workspace]:
        ...

    @abstractmethod
    async def find_by_code(self, code: str) -> Optional[Workspace]:
        ...

    @abstractmethod
    async def find_all(self, organization_id: Optional[OrganizationId] = None) -> List[Workspace]:
        ...

    @abstractmethod
    async def delete(self, workspace_id: WorkspaceId) -> None:
        ...


@runtime_checkable
class TenantRepository(Protocol):
    """Protocol for tenant persistence."""

    @abstractmethod
    async def save(self, tenant: Tenant) -> None:
        ...

    @abstractmethod
    async def find_by_id(self, tenant_id: TenantId) -> Optional[Tenant]:
        ...

    @abstractmethod
    async def find_by_code(self, code: str) -> Optional[Tenant]:
        ...

    @abstractmethod
    async def find_all(self, workspace_id: Optional[WorkspaceId] = None) -> List[Tenant]:
        ...

    @abstractmethod
    async def delete(self, tenant_id: TenantId) -> None:
        ...
