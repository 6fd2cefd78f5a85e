"""Value objects for identifiers in neo-iam.

Every entity in the authorization graph is addressed by a typed, validated
identifier. Identifiers compare by value and by type: a UserId never
equals a RoleId even when both wrap the same string.
"""

import re
from dataclasses import dataclass
from typing import ClassVar, Optional, Union
from uuid import UUID

from ..exceptions import ValidationError
from ...utils import generate_uuid_v7


@dataclass(frozen=True)
class Identifier:
    """Base class for string-valued entity identifiers."""

    value: str

    entity_name: ClassVar[str] = "Identifier"

    def __post_init__(self):
        """Validate and normalise the raw value."""
        raw = self.value
        if isinstance(raw, UUID):
            raw = str(raw)
        if not isinstance(raw, str) or not raw.strip():
            raise ValidationError(
                f"{self.entity_name} cannot be empty",
                details={"identifier": self.entity_name},
            )
        object.__setattr__(self, "value", raw.strip())

    @classmethod
    def create(cls, raw_value: Optional[Union[str, UUID]] = None):
        """Build an identifier from a raw value, generating one when absent."""
        if raw_value is None:
            return cls.generate()
        return cls(raw_value)

    @classmethod
    def generate(cls):
        """Generate a new identifier with a random, time-ordered value."""
        return cls(generate_uuid_v7())

    @classmethod
    def from_string(cls, raw_value: str):
        """Alias of the constructor for string input."""
        return cls(raw_value)

    @classmethod
    def coerce(cls, raw_value):
        """Accept an existing identifier of this type or a raw value; never generates."""
        if isinstance(raw_value, cls):
            return raw_value
        return cls(raw_value)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class UserId(Identifier):
    """User identifier."""
    entity_name: ClassVar[str] = "UserId"


@dataclass(frozen=True)
class RoleId(Identifier):
    """Role identifier."""
    entity_name: ClassVar[str] = "RoleId"


@dataclass(frozen=True)
class PermissionId(Identifier):
    """Permission identifier."""
    entity_name: ClassVar[str] = "PermissionId"


@dataclass(frozen=True)
class TenantId(Identifier):
    """Tenant identifier."""
    entity_name: ClassVar[str] = "TenantId"


@dataclass(frozen=True)
class OrganizationId(Identifier):
    """Organization identifier."""
    entity_name: ClassVar[str] = "OrganizationId"


@dataclass(frozen=True)
class WorkspaceId(Identifier):
    """Workspace identifier."""
    entity_name: ClassVar[str] = "WorkspaceId"


@dataclass(frozen=True)
class RegionId(Identifier):
    """Region identifier."""
    entity_name: ClassVar[str] = "RegionId"


@dataclass(frozen=True)
class GroupId(Identifier):
    """Group identifier."""
    entity_name: ClassVar[str] = "GroupId"


_EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


@dataclass(frozen=True)
class Email:
    """Normalised (trimmed, lower-cased) email address."""

    value: str

    def __post_init__(self):
        if not isinstance(self.value, str):
            raise ValidationError("Email must be a string")
        normalized = self.value.strip().lower()
        if not _EMAIL_PATTERN.match(normalized):
            raise ValidationError(f"Invalid email format: {self.value}", details={"field": "email"})
        object.__setattr__(self, "value", normalized)

    @property
    def domain(self) -> str:
        return self.value.split("@", 1)[1]

    def __str__(self) -> str:
        return self.value
