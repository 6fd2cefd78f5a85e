"""Domain events for the region / organization / workspace / tenant chain."""

from dataclasses import dataclass
from typing import Optional

from ....core.shared import DomainEvent


@dataclass(frozen=True, kw_only=True)
class RegionCreated(DomainEvent):
    event_type = "region.created"
    aggregate_type = "region"

    name: str
    code: str


@dataclass(frozen=True, kw_only=True)
class RegionUpdated(DomainEvent):
    event_type = "region.updated"
    aggregate_type = "region"

    change: str
    name: Optional[str] = None


@dataclass(frozen=True, kw_only=True)
class RegionDeleted(DomainEvent):
    event_type = "region.deleted"
    aggregate_type = "region"


@dataclass(frozen=True, kw_only=True)
class OrganizationCreated(DomainEvent):
    event_type = "organization.created"
    aggregate_type = "organization"

    name: str
    code: str
    region_id: str


@dataclass(frozen=True, kw_only=True)
class OrganizationUpdated(DomainEvent):
    event_type = "organization.updated"
    aggregate_type = "organization"

    change: str
    name: Optional[str] = None


@dataclass(frozen=True, kw_only=True)
class OrganizationDeleted(DomainEvent):
    event_type = "organization.deleted"
    aggregate_type = "organization"


@dataclass(frozen=True, kw_only=True)
class WorkspaceCreated(DomainEvent):
    event_type = "workspace.created"
    aggregate_type = "workspace"

    name: str
    code: str
    organization_id: str


@dataclass(frozen=True, kw_only=True)
class WorkspaceUpdated(DomainEvent):
    event_type = "workspace.updated"
    aggregate_type = "workspace"

    change: str
    name: Optional[str] = None


@dataclass(frozen=True, kw_only=True)
class WorkspaceDeleted(DomainEvent):
    event_type = "workspace.deleted"
    aggregate_type = "workspace"


@dataclass(frozen=True, kw_only=True)
class TenantCreated(DomainEvent):
    event_type = "tenant.created"
    aggregate_type = "tenant"

    name: str
    code: str
    workspace_id: str


@dataclass(frozen=True, kw_only=True)
class TenantUpdated(DomainEvent):
    event_type = "tenant.updated"
    aggregate_type = "tenant"

    change: str
    name: Optional[str] = None


@dataclass(frozen=True, kw_only=True)
class TenantDeleted(DomainEvent):
    event_type = "tenant.deleted"
    aggregate_type = "tenant"
