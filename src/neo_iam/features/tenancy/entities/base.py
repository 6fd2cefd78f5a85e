"""Shared behaviour for the named, activatable nodes of the tenancy chain."""

from dataclasses import dataclass
from datetime import datetime
from typing import ClassVar, Optional, Type

from ....core.exceptions import ValidationError
from ....core.shared import AggregateRoot, DomainEvent


def require_text(value: Optional[str], field_name: str, entity: str) -> str:
    if value is None or not value.strip():
        raise ValidationError(f"{entity} {field_name} cannot be empty", details={"field": field_name})
    return value.strip()


@dataclass(kw_only=True)
class TenancyNode(AggregateRoot):
    """Region, organization, workspace and tenant all share this shape."""

    updated_event: ClassVar[Type[DomainEvent]]
    deleted_event: ClassVar[Type[DomainEvent]]

    is_active: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = None

    def _changed(self, change: str) -> None:
        self._record_event(self.updated_event(aggregate_id=str(self.id), change=change, name=self.name))

    def activate(self) -> None:
        self.is_active = True
        self._changed("activated")

    def deactivate(self) -> None:
        self.is_active = False
        self._changed("deactivated")

    def delete(self) -> None:
        """Soft delete the node."""
        self._mark_deleted()
        self._record_event(self.deleted_event(aggregate_id=str(self.id)), touch=False)
