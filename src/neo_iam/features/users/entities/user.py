"""User aggregate.

Users belong to at most one tenant and one organization. Credentials are
stored as an opaque password hash; hashing is an authentication concern
and happens before the aggregate sees the value.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ....core.exceptions import DomainError, ValidationError
from ....core.shared import AggregateRoot
from ....core.value_objects import Email, OrganizationId, TenantId, UserId
from ....utils import utc_now
from .events import UserCreated, UserDeleted, UserUpdated


def _require_name(value: Optional[str], field_name: str) -> str:
    if value is None or not value.strip():
        raise ValidationError(f"{field_name.replace('_', ' ').capitalize()} cannot be empty",
                              details={"field": field_name})
    return value.strip()


@dataclass
class User(AggregateRoot):
    """Domain entity representing a platform user."""

    id: UserId
    email: Email
    password_hash: str
    first_name: str
    last_name: str
    mfa_enabled: bool = False
    mfa_secret: Optional[str] = None
    force_password_change: bool = False
    password_changed_at: Optional[datetime] = None
    is_initial_password: bool = True
    tenant_id: Optional[TenantId] = None
    organization_id: Optional[OrganizationId] = None
    last_login_at: Optional[datetime] = None
    is_active: bool = True
    email_verified: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = None

    @classmethod
    def create(
        cls,
        email: Email,
        password_hash: str,
        first_name: str,
        last_name: str,
        tenant_id: Optional[TenantId] = None,
        organization_id: Optional[OrganizationId] = None,
        user_id: Optional[UserId] = None,
    ) -> "User":
        if not password_hash:
            raise ValidationError("Password hash cannot be empty", details={"field": "password_hash"})

        now = utc_now()
        user = cls(
            id=user_id or UserId.generate(),
            email=email,
            password_hash=password_hash,
            first_name=_require_name(first_name, "first_name"),
            last_name=_require_name(last_name, "last_name"),
            force_password_change=True,
            tenant_id=tenant_id,
            organization_id=organization_id,
            created_at=now,
            updated_at=now,
        )
        user._record_event(
            UserCreated(
                aggregate_id=str(user.id),
                email=str(email),
                tenant_id=str(tenant_id) if tenant_id else None,
                organization_id=str(organization_id) if organization_id else None,
            ),
            touch=False,
        )
        return user

    @classmethod
    def reconstitute(cls, **state) -> "User":
        """Rebuild a user from stored column values without recording events."""
        return cls(**state)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def _changed(self, change: str) -> None:
        self._record_event(UserUpdated(aggregate_id=str(self.id), change=change))

    def change_password(self, new_password_hash: str) -> None:
        if not new_password_hash:
            raise ValidationError("Password hash cannot be empty", details={"field": "password_hash"})
        self.password_hash = new_password_hash
        self.password_changed_at = utc_now()
        self.is_initial_password = False
        self.force_password_change = False
        self._changed("password_changed")

    def enable_mfa(self, secret: str) -> None:
        if not secret:
            raise ValidationError("MFA secret cannot be empty", details={"field": "mfa_secret"})
        self.mfa_enabled = True
        self.mfa_secret = secret
        self._changed("mfa_enabled")

    def disable_mfa(self) -> None:
        self.mfa_enabled = False
        self.mfa_secret = None
        self._changed("mfa_disabled")

    def record_login(self) -> None:
        self.last_login_at = utc_now()
        self._changed("logged_in")

    def activate(self) -> None:
        self.is_active = True
        self._changed("activated")

    def deactivate(self) -> None:
        self.is_active = False
        self._changed("deactivated")

    def verify_email(self) -> None:
        self.email_verified = True
        self._changed("email_verified")

    def require_password_change(self) -> None:
        self.force_password_change = True
        self._changed("password_change_required")

    def update_profile(self, first_name: Optional[str] = None, last_name: Optional[str] = None) -> None:
        if first_name is not None:
            self.first_name = _require_name(first_name, "first_name")
        if last_name is not None:
            self.last_name = _require_name(last_name, "last_name")
        self._changed("profile_updated")

    def assign_scope(
        self,
        tenant_id: Optional[TenantId] = None,
        organization_id: Optional[OrganizationId] = None,
    ) -> None:
        """Attach the user to a tenant and/or organization.

        A user holds at most one of each; moving to a different one requires
        clearing the current association first.
        """
        if tenant_id and self.tenant_id and tenant_id != self.tenant_id:
            raise DomainError(
                "User already belongs to a tenant",
                details={"user_id": str(self.id), "tenant_id": str(self.tenant_id)},
            )
        if organization_id and self.organization_id and organization_id != self.organization_id:
            raise DomainError(
                "User already belongs to an organization",
                details={"user_id": str(self.id), "organization_id": str(self.organization_id)},
            )
        if tenant_id:
            self.tenant_id = tenant_id
        if organization_id:
            self.organization_id = organization_id
        self._changed("scope_assigned")

    def clear_scope(self) -> None:
        self.tenant_id = None
        self.organization_id = None
        self._changed("scope_cleared")

    def delete(self) -> None:
        self._mark_deleted()
        self._record_event(UserDeleted(aggregate_id=str(self.id)), touch=False)
