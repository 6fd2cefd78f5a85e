"""Tests for role-tier permission resolution."""

import pytest

from neo_iam.config import CrudAction, RoleTier
from neo_iam.core.exceptions import ValidationError
from neo_iam.core.value_objects import OrganizationId
from neo_iam.features.permissions.services import PermissionContext, PermissionResolver

ORG_A = OrganizationId("org-a")
ORG_B = OrganizationId("org-b")


class TestCapabilityPredicates:
    @pytest.mark.parametrize(
        "tier,create,read,update,delete",
        [
            (RoleTier.SUPER_ADMINISTRATOR, True, True, True, True),
            (RoleTier.ADMINISTRATOR, True, True, True, True),
            (RoleTier.DEVELOPER, True, True, True, False),
            (RoleTier.VIEWER, False, True, False, False),
        ],
    )
    def test_crud_matrix(self, tier, create, read, update, delete):
        assert PermissionResolver.can_create(tier) is create
        assert PermissionResolver.can_read(tier) is read
        assert PermissionResolver.can_update(tier) is update
        assert PermissionResolver.can_delete(tier) is delete

    def test_management_predicates(self):
        assert PermissionResolver.can_manage_all_platform(RoleTier.SUPER_ADMINISTRATOR)
        assert not PermissionResolver.can_manage_all_platform(RoleTier.ADMINISTRATOR)
        assert PermissionResolver.can_manage_organization(RoleTier.ADMINISTRATOR)
        assert not PermissionResolver.can_manage_organization(RoleTier.DEVELOPER)

    def test_privilege_ordering(self):
        assert PermissionResolver.has_higher_or_equal_privilege(RoleTier.ADMINISTRATOR, RoleTier.DEVELOPER)
        assert PermissionResolver.has_higher_or_equal_privilege(RoleTier.VIEWER, RoleTier.VIEWER)
        assert not PermissionResolver.has_higher_or_equal_privilege(RoleTier.DEVELOPER, RoleTier.ADMINISTRATOR)


class TestCanPerformAction:
    @pytest.mark.parametrize("tier", [RoleTier.VIEWER, RoleTier.DEVELOPER])
    def test_lower_tiers_cannot_delete_users(self, tier):
        context = PermissionContext(role=tier)
        assert not PermissionResolver.can_perform_action("user:delete", context)

    def test_administrator_can_delete_users_in_own_organization(self):
        context = PermissionContext(
            role=RoleTier.ADMINISTRATOR, user_organization_id=ORG_A, target_organization_id=ORG_A
        )
        assert PermissionResolver.can_perform_action("user:delete", context)
        assert PermissionResolver.can_perform_action(CrudAction.DELETE, context)

    def test_administrator_denied_in_other_organization(self):
        context = PermissionContext(
            role=RoleTier.ADMINISTRATOR, user_organization_id=ORG_A, target_organization_id=ORG_B
        )
        assert not PermissionResolver.can_perform_action("read", context)
        assert not PermissionResolver.can_perform_action("user:delete", context)

    def test_super_administrator_ignores_scope(self):
        context = PermissionContext(
            role=RoleTier.SUPER_ADMINISTRATOR, user_organization_id=ORG_A, target_organization_id=ORG_B
        )
        assert PermissionResolver.can_perform_action("organization:delete", context)
        assert PermissionResolver.can_perform_action("anything:at-all", context)

    def test_principal_without_organization_cannot_reach_scoped_target(self):
        context = PermissionContext(role=RoleTier.ADMINISTRATOR, target_organization_id=ORG_A)
        assert not PermissionResolver.can_perform_action("read", context)

    def test_unknown_action_is_denied(self):
        context = PermissionContext(role=RoleTier.ADMINISTRATOR)
        assert not PermissionResolver.can_perform_action("spaceship:launch", context)

    def test_action_is_normalised(self):
        context = PermissionContext(role=RoleTier.DEVELOPER)
        assert PermissionResolver.can_perform_action("  Create ", context)


class TestPermissionMatrix:
    def test_platform_permissions_reserved_for_super_administrator(self):
        admin = PermissionResolver.permission_matrix(RoleTier.ADMINISTRATOR)
        superuser = PermissionResolver.permission_matrix(RoleTier.SUPER_ADMINISTRATOR)
        assert not admin["platform:manage"]
        assert not admin["permission:create"]
        assert superuser["platform:manage"]
        assert all(superuser.values())

    def test_viewer_is_read_only(self):
        matrix = PermissionResolver.permission_matrix(RoleTier.VIEWER)
        granted = {name for name, allowed in matrix.items() if allowed}
        assert "dashboard:read" in granted
        assert all(name.endswith((":read", ":view", ":check")) for name in granted)

    def test_developer_writes_signals_but_cannot_unregister_agents(self):
        matrix = PermissionResolver.permission_matrix(RoleTier.DEVELOPER)
        assert matrix["metrics:write"]
        assert matrix["agent:register"]
        assert not matrix["agent:unregister"]
        assert not matrix["audit:export"]

    def test_role_description(self):
        assert "Read-only" in PermissionResolver.role_description(RoleTier.VIEWER)


class TestRoleTier:
    def test_from_string(self):
        assert RoleTier.from_string(" Administrator ") is RoleTier.ADMINISTRATOR

    def test_from_string_rejects_unknown(self):
        with pytest.raises(ValidationError):
            RoleTier.from_string("owner")
