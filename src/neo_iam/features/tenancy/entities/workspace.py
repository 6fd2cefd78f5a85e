"""Workspace aggregate, scoped to an organization."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional

from ....core.value_objects import OrganizationId, WorkspaceId
from ....utils import utc_now
from .base import TenancyNode, require_text
from .events import WorkspaceCreated, WorkspaceDeleted, WorkspaceUpdated


@dataclass(kw_only=True)
class Workspace(TenancyNode):
    """Workspace grouping tenants and their datasource configuration."""

    updated_event = WorkspaceUpdated
    deleted_event = WorkspaceDeleted

    id: WorkspaceId
    name: str
    code: str
    organization_id: OrganizationId
    description: Optional[str] = None
    datasource_config: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def create(
        cls,
        name: str,
        code: str,
        organization_id: OrganizationId,
        description: Optional[str] = None,
        datasource_config: Optional[Dict[str, Any]] = None,
        workspace_id: Optional[WorkspaceId] = None,
    ) -> "Workspace":
        now = utc_now()
        workspace = cls(
            id=workspace_id or WorkspaceId.generate(),
            name=require_text(name, "name", "Workspace"),
            code=require_text(code, "code", "Workspace"),
            organization_id=organization_id,
            description=description,
            datasource_config=dict(datasource_config or {}),
            created_at=now,
            updated_at=now,
        )
        workspace._record_event(
            WorkspaceCreated(
                aggregate_id=str(workspace.id),
                name=workspace.name,
                code=workspace.code,
                organization_id=str(organization_id),
            ),
            touch=False,
        )
        return workspace

    @classmethod
    def reconstitute(
        cls,
        workspace_id: WorkspaceId,
        name: str,
        code: str,
        organization_id: OrganizationId,
        description: Optional[str],
        datasource_config: Optional[Dict[str, Any]],
        is_active: bool,
        created_at: datetime,
        updated_at: datetime,
        deleted_at: Optional[datetime] = None,
    ) -> "Workspace":
        return cls(
            id=workspace_id,
            name=name,
            code=code,
            organization_id=organization_id,
            description=description,
            datasource_config=dict(datasource_config or {}),
            is_active=is_active,
            created_at=created_at,
            updated_at=updated_at,
            deleted_at=deleted_at,
        )

    def update(
        self,
        name: Optional[str] = None,
        description: Optional[str] = None,
        datasource_config: Optional[Dict[str, Any]] = None,
    ) -> None:
        if name is not None:
            self.name = require_text(name, "name", "Workspace")
        if description is not None:
            self.description = description
        if datasource_config is not None:
            self.datasource_config = dict(datasource_config)
        self._changed("updated")
