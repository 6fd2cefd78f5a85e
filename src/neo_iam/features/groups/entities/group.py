"""Group aggregate: an organization-scoped set of users."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable, List, Optional, Tuple

from ....core.exceptions import ConflictError, NotFoundError, ValidationError
from ....core.shared import AggregateRoot
from ....core.value_objects import GroupId, OrganizationId, UserId
from ....utils import utc_now
from .events import (
    GroupCreated,
    GroupDeleted,
    GroupUpdated,
    UserAddedToGroup,
    UserRemovedFromGroup,
)


@dataclass
class Group(AggregateRoot):
    """Domain entity representing a group of users."""

    id: GroupId
    name: str
    description: str = ""
    organization_id: Optional[OrganizationId] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = None

    _user_ids: List[UserId] = field(default_factory=list, init=False, repr=False)

    @classmethod
    def create(
        cls,
        name: str,
        description: str = "",
        organization_id: Optional[OrganizationId] = None,
        group_id: Optional[GroupId] = None,
    ) -> "Group":
        if name is None or not name.strip():
            raise ValidationError("Group name cannot be empty", details={"field": "name"})
        now = utc_now()
        group = cls(
            id=group_id or GroupId.generate(),
            name=name.strip(),
            description=(description or "").strip(),
            organization_id=organization_id,
            created_at=now,
            updated_at=now,
        )
        group._record_event(
            GroupCreated(
                aggregate_id=str(group.id),
                name=group.name,
                organization_id=str(organization_id) if organization_id else None,
            ),
            touch=False,
        )
        return group

    @classmethod
    def reconstitute(
        cls,
        group_id: GroupId,
        name: str,
        description: str,
        user_ids: Iterable[UserId],
        organization_id: Optional[OrganizationId],
        created_at: datetime,
        updated_at: datetime,
        deleted_at: Optional[datetime] = None,
    ) -> "Group":
        group = cls(
            id=group_id,
            name=name,
            description=description or "",
            organization_id=organization_id,
            created_at=created_at,
            updated_at=updated_at,
            deleted_at=deleted_at,
        )
        group._user_ids = list(dict.fromkeys(user_ids))
        return group

    @property
    def user_ids(self) -> Tuple[UserId, ...]:
        return tuple(self._user_ids)

    def has_user(self, user_id: UserId) -> bool:
        return user_id in self._user_ids

    def update(self, name: Optional[str] = None, description: Optional[str] = None) -> None:
        if name is not None:
            if not name.strip():
                raise ValidationError("Group name cannot be empty", details={"field": "name"})
            self.name = name.strip()
        if description is not None:
            self.description = description.strip()
        self._record_event(GroupUpdated(aggregate_id=str(self.id), name=name, description=description))

    def add_user(self, user_id: UserId) -> None:
        if self.has_user(user_id):
            raise ConflictError(
                "User already in group",
                details={"group_id": str(self.id), "user_id": str(user_id)},
            )
        self._user_ids.append(user_id)
        self._record_event(UserAddedToGroup(aggregate_id=str(self.id), user_id=str(user_id)))

    def remove_user(self, user_id: UserId) -> None:
        if not self.has_user(user_id):
            raise NotFoundError(
                "User not in group",
                details={"group_id": str(self.id), "user_id": str(user_id)},
            )
        self._user_ids.remove(user_id)
        self._record_event(UserRemovedFromGroup(aggregate_id=str(self.id), user_id=str(user_id)))

    def delete(self) -> None:
        self._mark_deleted()
        self._record_event(GroupDeleted(aggregate_id=str(self.id)), touch=False)
