"""Region aggregate, the top of the tenancy chain."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ....core.value_objects import RegionId
from ....utils import utc_now
from .base import TenancyNode, require_text
from .events import RegionCreated, RegionDeleted, RegionUpdated


@dataclass(kw_only=True)
class Region(TenancyNode):
    """Deployment region hosting organizations."""

    updated_event = RegionUpdated
    deleted_event = RegionDeleted

    id: RegionId
    name: str
    code: str
    description: str = ""

    @classmethod
    def create(cls, name: str, code: str, description: str = "", region_id: Optional[RegionId] = None) -> "Region":
        now = utc_now()
        region = cls(
            id=region_id or RegionId.generate(),
            name=require_text(name, "name", "Region"),
            code=require_text(code, "code", "Region"),
            description=(description or "").strip(),
            created_at=now,
            updated_at=now,
        )
        region._record_event(
            RegionCreated(aggregate_id=str(region.id), name=region.name, code=region.code),
            touch=False,
        )
        return region

    @classmethod
    def reconstitute(
        cls,
        region_id: RegionId,
        name: str,
        code: str,
        description: str,
        is_active: bool,
        created_at: datetime,
        updated_at: datetime,
        deleted_at: Optional[datetime] = None,
    ) -> "Region":
        return cls(
            id=region_id,
            name=name,
            code=code,
            description=description or "",
            is_active=is_active,
            created_at=created_at,
            updated_at=updated_at,
            deleted_at=deleted_at,
        )

    def update(self, name: Optional[str] = None, description: Optional[str] = None) -> None:
        if name is not None:
            self.name = require_text(name, "name", "Region")
        if description is not None:
            self.description = description.strip()
        self._changed("updated")
