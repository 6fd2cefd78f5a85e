"""Stateless permission resolution over the four platform role tiers.

Decision order:

1. ``super_administrator`` is granted everything, in every organization.
2. Any other tier is denied outright when the target carries an
   organization the principal does not belong to.
3. Otherwise the tier's capability predicates decide.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Union

from ....config.constants import CrudAction, RoleTier
from ....core.value_objects import OrganizationId

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PermissionContext:
    """Principal tier plus the organizations involved in a decision."""

    role: RoleTier
    user_organization_id: Optional[OrganizationId] = None
    target_organization_id: Optional[OrganizationId] = None


_ROLE_DESCRIPTIONS: Dict[RoleTier, str] = {
    RoleTier.SUPER_ADMINISTRATOR: "Can manage all the SaaS Platform across all organizations and regions",
    RoleTier.ADMINISTRATOR: "Can manage all permissions within their organization across multiple regions",
    RoleTier.DEVELOPER: "Can create and update resources within their organization, but cannot delete",
    RoleTier.VIEWER: "Read-only access to resources within their organization",
}


class PermissionResolver:
    """Role-tier capability checks and organization scoping."""

    # Capability predicates

    @staticmethod
    def can_manage_all_platform(tier: RoleTier) -> bool:
        return tier is RoleTier.SUPER_ADMINISTRATOR

    @staticmethod
    def can_manage_organization(tier: RoleTier) -> bool:
        return tier in (RoleTier.SUPER_ADMINISTRATOR, RoleTier.ADMINISTRATOR)

    @staticmethod
    def can_create(tier: RoleTier) -> bool:
        return tier is not RoleTier.VIEWER

    @staticmethod
    def can_read(tier: RoleTier) -> bool:
        return True

    @staticmethod
    def can_update(tier: RoleTier) -> bool:
        return tier is not RoleTier.VIEWER

    @staticmethod
    def can_delete(tier: RoleTier) -> bool:
        return tier in (RoleTier.SUPER_ADMINISTRATOR, RoleTier.ADMINISTRATOR)

    @staticmethod
    def has_higher_or_equal_privilege(tier: RoleTier, other: RoleTier) -> bool:
        """Whether ``tier`` sits at or above ``other`` in the hierarchy."""
        return tier.level >= other.level

    # Decisions

    @classmethod
    def can_access_organization(
        cls,
        tier: RoleTier,
        user_organization_id: Optional[OrganizationId],
        target_organization_id: OrganizationId,
    ) -> bool:
        if tier is RoleTier.SUPER_ADMINISTRATOR:
            return True
        if user_organization_id is None:
            return False
        return user_organization_id == target_organization_id

    @classmethod
    def can_perform_action(
        cls,
        action: Union[CrudAction, str],
        context: PermissionContext,
    ) -> bool:
        """Decide whether the context's tier may perform ``action``.

        ``action`` is either a CRUD verb (``"delete"``) or a named
        permission from the matrix (``"user:delete"``). Unknown actions are
        denied.
        """
        tier = context.role
        if tier is RoleTier.SUPER_ADMINISTRATOR:
            return True

        if context.target_organization_id is not None and not cls.can_access_organization(
            tier, context.user_organization_id, context.target_organization_id
        ):
            logger.debug(
                f"Denied {action} for {tier.value}: organization {context.target_organization_id} "
                f"outside principal scope {context.user_organization_id}"
            )
            return False

        verb = action.value if isinstance(action, CrudAction) else str(action).strip().lower()
        crud = cls._crud_predicates().get(verb)
        if crud is not None:
            return crud(tier)

        granted = cls.permission_matrix(tier).get(verb)
        if granted is None:
            logger.debug(f"Denied unknown action {action!r} for {tier.value}")
            return False
        return granted

    @staticmethod
    def _crud_predicates() -> Dict[str, Callable[[RoleTier], bool]]:
        return {
            CrudAction.CREATE.value: PermissionResolver.can_create,
            CrudAction.READ.value: PermissionResolver.can_read,
            CrudAction.UPDATE.value: PermissionResolver.can_update,
            CrudAction.DELETE.value: PermissionResolver.can_delete,
        }

    @classmethod
    def permission_matrix(cls, tier: RoleTier) -> Dict[str, bool]:
        """Named platform permissions and whether ``tier`` holds each."""
        platform = cls.can_manage_all_platform(tier)
        organization = cls.can_manage_organization(tier)
        create = cls.can_create(tier)
        read = cls.can_read(tier)
        update = cls.can_update(tier)
        delete = cls.can_delete(tier)

        matrix: Dict[str, bool] = {
            "platform:manage": platform,
            "platform:view": True,
            "organization:create": platform,
            "organization:read": True,
            "organization:update": organization,
            "organization:delete": platform,
            "role:create": organization,
            "role:read": read,
            "role:update": organization,
            "role:delete": organization,
            "permission:create": platform,
            "permission:read": read,
            "permission:update": platform,
            "permission:delete": platform,
            "region:create": platform,
            "region:read": read,
            "region:update": platform,
            "region:delete": platform,
        }

        for resource in ("user", "tenant", "workspace", "dashboard", "alert",
                         "alert-rule-group", "agent", "uptime"):
            matrix[f"{resource}:create"] = create
            matrix[f"{resource}:read"] = read
            matrix[f"{resource}:update"] = update
            matrix[f"{resource}:delete"] = delete

        for signal in ("metrics", "logs", "traces"):
            matrix[f"{signal}:read"] = read
            matrix[f"{signal}:write"] = create

        matrix["agent:register"] = create
        matrix["agent:unregister"] = delete
        matrix["uptime:check"] = read
        matrix["audit:read"] = read
        matrix["audit:export"] = organization
        return matrix

    @staticmethod
    def role_description(tier: RoleTier) -> str:
        return _ROLE_DESCRIPTIONS.get(tier, "Unknown role")
