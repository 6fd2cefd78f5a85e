"""Tests for the user, group and tenancy aggregates."""

import pytest

from neo_iam.core.exceptions import ConflictError, DomainError, NotFoundError, ValidationError
from neo_iam.core.value_objects import Email, OrganizationId, RegionId, TenantId, UserId, WorkspaceId
from neo_iam.features.groups.entities import Group, GroupCreated, UserAddedToGroup, UserRemovedFromGroup
from neo_iam.features.tenancy.entities import (
    Organization,
    OrganizationCreated,
    Region,
    RegionDeleted,
    Tenant,
    TenantUpdated,
)
from neo_iam.features.users.entities import User, UserCreated, UserDeleted, UserUpdated


class TestUser:
    @pytest.fixture
    def user(self):
        user = User.create(
            email=Email("jane@example.com"),
            password_hash="$argon2id$hash",
            first_name="Jane",
            last_name="Doe",
        )
        user.pull_domain_events()
        return user

    def test_create_forces_password_change(self):
        user = User.create(
            email=Email("jane@example.com"),
            password_hash="$argon2id$hash",
            first_name="Jane",
            last_name="Doe",
        )
        assert user.force_password_change
        assert user.is_initial_password
        assert user.is_active
        assert user.full_name == "Jane Doe"
        events = user.pull_domain_events()
        assert isinstance(events[0], UserCreated)
        assert events[0].email == "jane@example.com"

    def test_create_requires_password_hash(self):
        with pytest.raises(ValidationError):
            User.create(email=Email("a@example.com"), password_hash="", first_name="A", last_name="B")

    def test_change_password_clears_flags(self, user):
        user.change_password("$argon2id$other")
        assert not user.force_password_change
        assert not user.is_initial_password
        assert user.password_changed_at is not None
        event = user.pull_domain_events()[0]
        assert isinstance(event, UserUpdated)
        assert event.change == "password_changed"

    def test_mfa_toggle(self, user):
        user.enable_mfa("SECRET")
        assert user.mfa_enabled and user.mfa_secret == "SECRET"
        user.disable_mfa()
        assert not user.mfa_enabled and user.mfa_secret is None
        assert [e.change for e in user.pull_domain_events()] == ["mfa_enabled", "mfa_disabled"]

    def test_assign_scope_rejects_second_organization(self, user):
        first, second = OrganizationId.generate(), OrganizationId.generate()
        user.assign_scope(organization_id=first)

        with pytest.raises(DomainError):
            user.assign_scope(organization_id=second)
        assert user.organization_id == first

        user.clear_scope()
        user.assign_scope(organization_id=second, tenant_id=TenantId("t-1"))
        assert user.organization_id == second
        assert user.tenant_id == TenantId("t-1")

    def test_delete(self, user):
        user.delete()
        assert user.is_deleted
        assert isinstance(user.pull_domain_events()[0], UserDeleted)


class TestGroup:
    @pytest.fixture
    def group(self):
        group = Group.create(name="on-call", organization_id=OrganizationId("org-1"))
        return group

    def test_create_records_event(self, group):
        assert isinstance(group.pull_domain_events()[0], GroupCreated)

    def test_membership_changes(self, group):
        group.pull_domain_events()
        user_id = UserId.generate()

        group.add_user(user_id)
        assert group.has_user(user_id)
        with pytest.raises(ConflictError):
            group.add_user(user_id)

        group.remove_user(user_id)
        with pytest.raises(NotFoundError):
            group.remove_user(user_id)

        assert [type(e) for e in group.pull_domain_events()] == [UserAddedToGroup, UserRemovedFromGroup]
        assert group.user_ids == ()


class TestTenancy:
    def test_region_requires_code(self):
        with pytest.raises(ValidationError):
            Region.create(name="Europe", code=" ")

    def test_region_delete(self):
        region = Region.create(name="Europe", code="eu-west")
        region.pull_domain_events()
        region.delete()
        assert region.is_deleted
        assert isinstance(region.pull_domain_events()[0], RegionDeleted)

    def test_organization_belongs_to_region(self):
        region_id = RegionId.generate()
        organization = Organization.create(name="Acme", code="acme", region_id=region_id)
        assert organization.region_id == region_id
        event = organization.pull_domain_events()[0]
        assert isinstance(event, OrganizationCreated)

    def test_tenant_deactivate_records_update(self):
        tenant = Tenant.create(name="Acme EU", code="acme-eu", workspace_id=WorkspaceId("ws-1"), domain="ACME.eu ")
        tenant.pull_domain_events()
        assert tenant.domain == "acme.eu"

        tenant.deactivate()
        assert not tenant.is_active
        event = tenant.pull_domain_events()[0]
        assert isinstance(event, TenantUpdated)
        assert event.change == "deactivated"
