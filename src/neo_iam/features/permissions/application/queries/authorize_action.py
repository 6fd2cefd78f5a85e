"""Authorization decision for one principal, action and target."""

import logging
from dataclasses import dataclass
from typing import Optional, Union

from .....config.constants import RoleTier
from .....core.exceptions import ValidationError
from .....core.value_objects import OrganizationId, UserId
from ....users.entities import UserRepository
from ...services import PermissionContext, PermissionResolver
from ..common import load_active_user
from .get_user_permissions import GetUserPermissions, GetUserPermissionsQuery

logger = logging.getLogger(__name__)


@dataclass
class AuthorizeActionQuery:
    """``action`` is a CRUD verb or a ``resource:verb`` permission name."""

    user_id: Union[str, UserId]
    role: Union[str, RoleTier]
    action: str
    target_organization_id: Optional[Union[str, OrganizationId]] = None


@dataclass
class AuthorizationDecision:
    allowed: bool
    reason: str


class AuthorizeAction:
    """Query handler combining tier capability with explicit grants.

    The organization scope check runs before either source is consulted;
    a super administrator bypasses both. Deactivated users are denied
    before any tier is considered.
    """

    def __init__(
        self,
        user_repository: UserRepository,
        get_user_permissions: GetUserPermissions,
        resolver: type = PermissionResolver,
    ):
        self._users = user_repository
        self._get_user_permissions = get_user_permissions
        self._resolver = resolver

    async def execute(self, query: AuthorizeActionQuery) -> AuthorizationDecision:
        user_id = UserId.coerce(query.user_id)
        tier = query.role if isinstance(query.role, RoleTier) else RoleTier.from_string(query.role)
        target_organization_id = (
            OrganizationId.coerce(query.target_organization_id)
            if query.target_organization_id is not None
            else None
        )
        if not query.action or not query.action.strip():
            raise ValidationError("Action cannot be empty", details={"field": "action"})

        user = await load_active_user(self._users, user_id)
        if not user.is_active:
            return self._decide(user_id, query.action, False, "inactive_principal")

        if tier is RoleTier.SUPER_ADMINISTRATOR:
            return self._decide(user_id, query.action, True, "super_administrator")

        if target_organization_id is not None and not self._resolver.can_access_organization(
            tier, user.organization_id, target_organization_id
        ):
            return self._decide(user_id, query.action, False, "organization_scope")

        context = PermissionContext(
            role=tier,
            user_organization_id=user.organization_id,
            target_organization_id=target_organization_id,
        )
        if self._resolver.can_perform_action(query.action, context):
            return self._decide(user_id, query.action, True, "role_capability")

        effective = await self._get_user_permissions.execute(GetUserPermissionsQuery(user_id=user_id))
        if effective.grants(query.action.strip()):
            return self._decide(user_id, query.action, True, "explicit_permission")

        return self._decide(user_id, query.action, False, "insufficient_privileges")

    @staticmethod
    def _decide(user_id: UserId, action: str, allowed: bool, reason: str) -> AuthorizationDecision:
        logger.info(f"Authorization {'granted' if allowed else 'denied'} for user {user_id} on {action}: {reason}")
        return AuthorizationDecision(allowed=allowed, reason=reason)
