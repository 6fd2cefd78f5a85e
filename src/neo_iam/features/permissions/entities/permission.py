"""Permission aggregate.

A permission names one action on one resource (``user:delete``). Names are
globally unique; uniqueness is enforced by the create handler and the
``permissions.name`` constraint.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ....core.exceptions import ValidationError
from ....core.shared import AggregateRoot
from ....core.value_objects import PermissionId
from ....utils import utc_now
from .events import PermissionCreated, PermissionDeleted, PermissionUpdated


def _require_text(value: Optional[str], field_name: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"Permission {field_name} cannot be empty", details={"field": field_name})
    return str(value).strip()


@dataclass
class Permission(AggregateRoot):
    """Domain entity representing a single resource/action grant."""

    id: PermissionId
    name: str
    description: str = ""
    resource: str = ""
    action: str = ""
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = None

    @classmethod
    def create(
        cls,
        name: str,
        description: str,
        resource: str,
        action: str,
        permission_id: Optional[PermissionId] = None,
    ) -> "Permission":
        now = utc_now()
        permission = cls(
            id=permission_id or PermissionId.generate(),
            name=_require_text(name, "name"),
            description=(description or "").strip(),
            resource=_require_text(resource, "resource"),
            action=_require_text(action, "action"),
            created_at=now,
            updated_at=now,
        )
        permission._record_event(
            PermissionCreated(
                aggregate_id=str(permission.id),
                name=permission.name,
                description=permission.description,
                resource=permission.resource,
                action=permission.action,
            ),
            touch=False,
        )
        return permission

    @classmethod
    def reconstitute(
        cls,
        permission_id: PermissionId,
        name: str,
        description: str,
        resource: str,
        action: str,
        created_at: datetime,
        updated_at: datetime,
        deleted_at: Optional[datetime] = None,
    ) -> "Permission":
        return cls(
            id=permission_id,
            name=name,
            description=description or "",
            resource=resource,
            action=action,
            created_at=created_at,
            updated_at=updated_at,
            deleted_at=deleted_at,
        )

    @property
    def code(self) -> str:
        """Permission in ``resource:action`` form."""
        return f"{self.resource}:{self.action}"

    def update(
        self,
        name: Optional[str] = None,
        description: Optional[str] = None,
        resource: Optional[str] = None,
        action: Optional[str] = None,
    ) -> None:
        if name is not None:
            self.name = _require_text(name, "name")
        if description is not None:
            self.description = description.strip()
        if resource is not None:
            self.resource = _require_text(resource, "resource")
        if action is not None:
            self.action = _require_text(action, "action")
        self._record_event(
            PermissionUpdated(
                aggregate_id=str(self.id),
                name=name,
                description=description,
                resource=resource,
                action=action,
            )
        )

    def delete(self) -> None:
        """Soft delete; the row stays addressable for audit."""
        self._mark_deleted()
        self._record_event(PermissionDeleted(aggregate_id=str(self.id)), touch=False)
