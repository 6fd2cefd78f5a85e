"""Tenant aggregate, scoped to a workspace."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ....core.value_objects import TenantId, WorkspaceId
from ....utils import utc_now
from .base import TenancyNode, require_text
from .events import TenantCreated, TenantDeleted, TenantUpdated


@dataclass(kw_only=True)
class Tenant(TenancyNode):
    """Tenant; users and tenant-scoped roles hang off it."""

    updated_event = TenantUpdated
    deleted_event = TenantDeleted

    id: TenantId
    name: str
    code: str
    workspace_id: WorkspaceId
    domain: Optional[str] = None

    @classmethod
    def create(
        cls,
        name: str,
        code: str,
        workspace_id: WorkspaceId,
        domain: Optional[str] = None,
        tenant_id: Optional[TenantId] = None,
    ) -> "Tenant":
        now = utc_now()
        tenant = cls(
            id=tenant_id or TenantId.generate(),
            name=require_text(name, "name", "Tenant"),
            code=require_text(code, "code", "Tenant"),
            workspace_id=workspace_id,
            domain=domain.strip().lower() if domain else None,
            created_at=now,
            updated_at=now,
        )
        tenant._record_event(
            TenantCreated(
                aggregate_id=str(tenant.id),
                name=tenant.name,
                code=tenant.code,
                workspace_id=str(workspace_id),
            ),
            touch=False,
        )
        return tenant

    @classmethod
    def reconstitute(
        cls,
        tenant_id: TenantId,
        name: str,
        code: str,
        workspace_id: WorkspaceId,
        domain: Optional[str],
        is_active: bool,
        created_at: datetime,
        updated_at: datetime,
        deleted_at: Optional[datetime] = None,
    ) -> "Tenant":
        return cls(
            id=tenant_id,
            name=name,
            code=code,
            workspace_id=workspace_id,
            domain=domain,
            is_active=is_active,
            created_at=created_at,
            updated_at=updated_at,
            deleted_at=deleted_at,
        )

    def update(self, name: Optional[str] = None, domain: Optional[str] = None) -> None:
        if name is not None:
            self.name = require_text(name, "name", "Tenant")
        if domain is not None:
            self.domain = domain.strip().lower() or None
        self._changed("updated")
