"""Constants and enums for neo-iam.

Cache key layouts, TTLs and the role tier ladder used by permission
resolution. Values mirror the platform's RBAC tables and seed data.
"""

from enum import Enum
from typing import Dict, Final


class CacheKeys:
    """Cache key patterns for the permission cache."""

    PERMISSIONS_PREFIX: Final[str] = "rbac:permissions:"
    USER_PERMISSIONS: Final[str] = "rbac:permissions:{user_id}"


class CacheTTL:
    """Cache TTL values in seconds."""

    PERMISSIONS_SHORT: Final[int] = 300      # 5 minutes
    PERMISSIONS_DEFAULT: Final[int] = 600    # 10 minutes
    PERMISSIONS_LONG: Final[int] = 3600      # 1 hour


class DatabaseSchemas:
    """Database schema names."""

    ADMIN: Final[str] = "admin"
    TENANT_PREFIX: Final[str] = "tenant_"


class RoleTier(str, Enum):
    """Platform role tiers, most privileged first."""

    SUPER_ADMINISTRATOR = "super_administrator"
    ADMINISTRATOR = "administrator"
    DEVELOPER = "developer"
    VIEWER = "viewer"

    @classmethod
    def from_string(cls, value: str) -> "RoleTier":
        """Parse a tier name, raising ValidationError for unknown values."""
        from ..core.exceptions import ValidationError

        normalized = (value or "").strip().lower()
        for tier in cls:
            if tier.value == normalized:
                return tier
        raise ValidationError(
            f"Invalid role tier: {value}",
            details={"allowed": [tier.value for tier in cls]},
        )

    @property
    def level(self) -> int:
        """Numeric position in the hierarchy (higher = more privileged)."""
        return ROLE_TIER_HIERARCHY[self]


ROLE_TIER_HIERARCHY: Dict[RoleTier, int] = {
    RoleTier.SUPER_ADMINISTRATOR: 4,
    RoleTier.ADMINISTRATOR: 3,
    RoleTier.DEVELOPER: 2,
    RoleTier.VIEWER: 1,
}


class CrudAction(str, Enum):
    """Capability verbs evaluated by the permission resolver."""

    CREATE = "create"
    READ = "read"
    UPDATE = "update"
    DELETE = "delete"


class CacheBackendType(str, Enum):
    """Supported permission cache backends."""

    MEMORY = "memory"
    REDIS = "redis"
