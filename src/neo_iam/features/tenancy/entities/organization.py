"""Organization aggregate, scoped to a region."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ....core.value_objects import OrganizationId, RegionId
from ....utils import utc_now
from .base import TenancyNode, require_text
from .events import OrganizationCreated, OrganizationDeleted, OrganizationUpdated


@dataclass(kw_only=True)
class Organization(TenancyNode):
    """Customer organization; the unit of authorization scope."""

    updated_event = OrganizationUpdated
    deleted_event = OrganizationDeleted

    id: OrganizationId
    name: str
    code: str
    region_id: RegionId
    description: Optional[str] = None
    domain: Optional[str] = None

    @classmethod
    def create(
        cls,
        name: str,
        code: str,
        region_id: RegionId,
        description: Optional[str] = None,
        domain: Optional[str] = None,
        organization_id: Optional[OrganizationId] = None,
    ) -> "Organization":
        now = utc_now()
        organization = cls(
            id=organization_id or OrganizationId.generate(),
            name=require_text(name, "name", "Organization"),
            code=require_text(code, "code", "Organization"),
            region_id=region_id,
            description=description,
            domain=domain.strip().lower() if domain else None,
            created_at=now,
            updated_at=now,
        )
        organization._record_event(
            OrganizationCreated(
                aggregate_id=str(organization.id),
                name=organization.name,
                code=organization.code,
                region_id=str(region_id),
            ),
            touch=False,
        )
        return organization

    @classmethod
    def reconstitute(
        cls,
        organization_id: OrganizationId,
        name: str,
        code: str,
        region_id: RegionId,
        description: Optional[str],
        domain: Optional[str],
        is_active: bool,
        created_at: datetime,
        updated_at: datetime,
        deleted_at: Optional[datetime] = None,
    ) -> "Organization":
        return cls(
            id=organization_id,
            name=name,
            code=code,
            region_id=region_id,
            description=description,
            domain=domain,
            is_active=is_active,
            created_at=created_at,
            updated_at=updated_at,
            deleted_at=deleted_at,
        )

    def update(
        self,
        name: Optional[str] = None,
        description: Optional[str] = None,
        domain: Optional[str] = None,
    ) -> None:
        if name is not None:
            self.name = require_text(name, "name", "Organization")
        if description is not None:
            self.description = description
        if domain is not None:
            self.domain = domain.strip().lower() or None
        self._changed("updated")
