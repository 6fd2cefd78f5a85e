"""Tenancy chain: region, organization, workspace, tenant."""

from .events import (
    OrganizationCreated,
    OrganizationDeleted,
    OrganizationUpdated,
    RegionCreated,
    RegionDeleted,
    RegionUpdated,
    TenantCreated,
    TenantDeleted,
    TenantUpdated,
    WorkspaceCreated,
    WorkspaceDeleted,
    WorkspaceUpdated,
)
from .organization import Organization
from .region import Region
from .tenant import Tenant
from .workspace import Workspace
from .protocols import (
    OrganizationRepository,
    RegionRepository,
    TenantRepository,
    WorkspaceRepository,
)

__all__ = [
    "Organization",
    "Region",
    "Tenant",
    "Workspace",
    "OrganizationRepository",
    "RegionRepository",
    "TenantRepository",
    "WorkspaceRepository",
    "OrganizationCreated",
    "OrganizationDeleted",
    "OrganizationUpdated",
    "RegionCreated",
    "RegionDeleted",
    "RegionUpdated",
    "TenantCreated",
    "TenantDeleted",
    "TenantUpdated",
    "WorkspaceCreated",
    "WorkspaceDeleted",
    "WorkspaceUpdated",
]
