"""Tests for user lifecycle and group membership handlers."""

import pytest

from neo_iam.core.exceptions import (
    ConflictError,
    DomainError,
    DuplicateNameError,
    GroupNotFoundError,
    UserNotFoundError,
    ValidationError,
)
from neo_iam.core.value_objects import GroupId, OrganizationId
from neo_iam.features.groups.application.commands import AddUserToGroupCommand, RemoveUserFromGroupCommand
from neo_iam.features.groups.entities import Group
from neo_iam.features.permissions.application.commands import AssignRoleToUserCommand
from neo_iam.features.permissions.application.queries import GetUserPermissionsQuery
from neo_iam.features.users.application.commands import CreateUserCommand, DeleteUserCommand

ORG_A = OrganizationId("org-a")


class TestUserLifecycle:
    @pytest.mark.asyncio
    async def test_create_user(self, factory, user_repository, event_bus):
        result = await factory.get_create_user().execute(
            CreateUserCommand(email="Jane@Example.com", password_hash="$argon2id$hash",
                              first_name="Jane", last_name="Doe", organization_id="org-a")
        )

        user = result.data
        assert user_repository.rows[user.id].email.value == "jane@example.com"
        assert user.organization_id == ORG_A
        assert event_bus.published[0].event_type == "user.created"

    @pytest.mark.asyncio
    async def test_duplicate_email(self, factory, make_user):
        await make_user(email="jane@example.com")
        with pytest.raises(DuplicateNameError):
            await factory.get_create_user().execute(
                CreateUserCommand(email="JANE@example.com", password_hash="h", first_name="J", last_name="D")
            )

    @pytest.mark.asyncio
    async def test_invalid_email(self, factory):
        with pytest.raises(ValidationError):
            await factory.get_create_user().execute(
                CreateUserCommand(email="nope", password_hash="h", first_name="J", last_name="D")
            )

    @pytest.mark.asyncio
    async def test_deleted_user_loses_access(self, factory, make_user, make_role, make_permission, permission_cache):
        permission = await make_permission()
        user = await make_user()
        role = await make_role(permissions=[permission])
        await factory.get_assign_role_to_user().execute(AssignRoleToUserCommand(user_id=user.id, role_id=role.id))
        await factory.get_user_permissions().execute(GetUserPermissionsQuery(user_id=user.id))

        result = await factory.get_delete_user().execute(DeleteUserCommand(user_id=user.id))

        assert result.invalidated_entries == 1
        assert await permission_cache.get_user_permissions(user.id) is None
        with pytest.raises(UserNotFoundError):
            await factory.get_user_permissions().execute(GetUserPermissionsQuery(user_id=user.id))


class TestGroupMembership:
    @pytest.fixture
    def group(self):
        group = Group.create(name="on-call", organization_id=ORG_A)
        group.pull_domain_events()
        return group

    @pytest.mark.asyncio
    async def test_add_and_remove_member(self, factory, group, group_repository, make_user, event_bus):
        await group_repository.save(group)
        user = await make_user(organization_id=ORG_A)

        await factory.get_add_user_to_group().execute(AddUserToGroupCommand(group_id=group.id, user_id=user.id))
        assert group_repository.rows[group.id].has_user(user.id)

        with pytest.raises(ConflictError):
            await factory.get_add_user_to_group().execute(AddUserToGroupCommand(group_id=group.id, user_id=user.id))

        await factory.get_remove_user_from_group().execute(
            RemoveUserFromGroupCommand(group_id=group.id, user_id=user.id)
        )
        assert not group_repository.rows[group.id].has_user(user.id)
        assert [e.event_type for e in event_bus.published] == ["group.user_added", "group.user_removed"]

    @pytest.mark.asyncio
    async def test_member_must_share_group_organization(self, factory, group, group_repository, make_user):
        await group_repository.save(group)
        outsider = await make_user(organization_id=OrganizationId("org-b"))

        with pytest.raises(DomainError):
            await factory.get_add_user_to_group().execute(
                AddUserToGroupCommand(group_id=group.id, user_id=outsider.id)
            )

    @pytest.mark.asyncio
    async def test_unknown_group(self, factory, make_user):
        user = await make_user()
        with pytest.raises(GroupNotFoundError):
            await factory.get_add_user_to_group().execute(
                AddUserToGroupCommand(group_id=GroupId.generate(), user_id=user.id)
            )
