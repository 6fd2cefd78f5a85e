"""Tests for the user/role and user/permission assignment handlers."""

from unittest.mock import AsyncMock

import pytest

from neo_iam.core.exceptions import (
    AssignmentExistsError,
    AssignmentNotFoundError,
    ConflictError,
    PermissionNotFoundError,
    RoleNotFoundError,
    UserNotFoundError,
    ValidationError,
)
from neo_iam.core.value_objects import RoleId, UserId
from neo_iam.factory import IamServiceFactory
from neo_iam.features.permissions.application.commands import (
    AssignPermissionToUserCommand,
    AssignRoleToUserCommand,
    DeleteRoleCommand,
    RevokePermissionFromUserCommand,
    RevokeRoleFromUserCommand,
)
from neo_iam.features.permissions.application.queries import GetUserPermissionsQuery

from fakes import FailingCacheBackend, FailingEventBus


class TestAssignRoleToUser:
    @pytest.fixture
    def handler(self, factory):
        return factory.get_assign_role_to_user()

    @pytest.mark.asyncio
    async def test_assign_invalidates_user_and_publishes(
        self, handler, factory, make_user, make_role, permission_cache, event_bus
    ):
        user = await make_user()
        role = await make_role()
        await permission_cache.set_user_permissions(user.id, [])

        result = await handler.execute(AssignRoleToUserCommand(user_id=user.id.value, role_id=role.id.value))

        assert result.cache_invalidated
        assert result.invalidated_entries == 1
        assert result.events_published == 1
        assert await permission_cache.get_user_permissions(user.id) is None
        event = event_bus.of_type("user.role_assigned")[0]
        assert event.aggregate_id == user.id.value
        assert event.role_id == role.id.value

    @pytest.mark.asyncio
    async def test_double_assign_conflicts_and_keeps_one_pair(
        self, handler, make_user, make_role, user_role_repository, event_bus
    ):
        user = await make_user()
        role = await make_role()
        await handler.execute(AssignRoleToUserCommand(user_id=user.id, role_id=role.id))

        with pytest.raises(AssignmentExistsError):
            await handler.execute(AssignRoleToUserCommand(user_id=user.id, role_id=role.id))

        assert user_role_repository.count(user.id, role.id) == 1
        assert len(event_bus.of_type("user.role_assigned")) == 1

    @pytest.mark.asyncio
    async def test_concurrent_insert_rejected_by_junction(
        self, handler, make_user, make_role, user_role_repository, permission_cache, event_bus
    ):
        user = await make_user()
        role = await make_role()
        # Another writer inserted the pair after the existence check ran
        user_role_repository.pairs.append((user.id, role.id))
        user_role_repository.has = AsyncMock(return_value=False)
        await permission_cache.set_user_permissions(user.id, [])

        with pytest.raises(ConflictError):
            await handler.execute(AssignRoleToUserCommand(user_id=user.id, role_id=role.id))

        user_role_repository.has.assert_awaited_once()
        assert user_role_repository.count(user.id, role.id) == 1
        assert event_bus.of_type("user.role_assigned") == []
        assert await permission_cache.get_user_permissions(user.id) is not None

    @pytest.mark.asyncio
    async def test_missing_user_or_role(self, handler, make_user, make_role):
        user = await make_user()
        role = await make_role()

        with pytest.raises(UserNotFoundError):
            await handler.execute(AssignRoleToUserCommand(user_id=UserId.generate(), role_id=role.id))
        with pytest.raises(RoleNotFoundError):
            await handler.execute(AssignRoleToUserCommand(user_id=user.id, role_id=RoleId.generate()))

    @pytest.mark.asyncio
    async def test_deleted_role_cannot_be_assigned(self, handler, make_user, make_role, factory):
        user = await make_user()
        role = await make_role()
        await factory.get_delete_role().execute(DeleteRoleCommand(role_id=role.id))

        with pytest.raises(RoleNotFoundError):
            await handler.execute(AssignRoleToUserCommand(user_id=user.id, role_id=role.id))

    @pytest.mark.asyncio
    async def test_blank_identifier_rejected_before_lookup(self, handler):
        with pytest.raises(ValidationError):
            await handler.execute(AssignRoleToUserCommand(user_id=" ", role_id="role-1"))

    @pytest.mark.asyncio
    async def test_cache_failure_reports_degraded_result(
        self, settings, user_repository, role_repository, user_role_repository, make_user, make_role
    ):
        factory = IamServiceFactory(
            settings=settings,
            cache_backend=FailingCacheBackend(),
            user_repository=user_repository,
            role_repository=role_repository,
            user_role_repository=user_role_repository,
        )
        user = await make_user()
        role = await make_role()

        result = await factory.get_assign_role_to_user().execute(
            AssignRoleToUserCommand(user_id=user.id, role_id=role.id)
        )

        assert not result.cache_invalidated
        assert result.degraded
        assert result.warnings
        assert await user_role_repository.has(user.id, role.id)

    @pytest.mark.asyncio
    async def test_event_failure_keeps_committed_assignment(
        self, settings, user_repository, role_repository, user_role_repository, make_user, make_role
    ):
        factory = IamServiceFactory(
            settings=settings,
            event_bus=FailingEventBus(),
            user_repository=user_repository,
            role_repository=role_repository,
            user_role_repository=user_role_repository,
        )
        user = await make_user()
        role = await make_role()

        result = await factory.get_assign_role_to_user().execute(
            AssignRoleToUserCommand(user_id=user.id, role_id=role.id)
        )

        assert result.cache_invalidated
        assert result.events_failed == 1
        assert await user_role_repository.has(user.id, role.id)


class TestRevokeRoleFromUser:
    @pytest.fixture
    def handler(self, factory):
        return factory.get_revoke_role_from_user()

    @pytest.mark.asyncio
    async def test_revoke_removes_pair_and_refreshes_permissions(
        self, handler, factory, make_user, make_role, make_permission, event_bus
    ):
        permission = await make_permission("dashboard", "read")
        user = await make_user()
        role = await make_role(permissions=[permission])
        await factory.get_assign_role_to_user().execute(AssignRoleToUserCommand(user_id=user.id, role_id=role.id))

        query = factory.get_user_permissions()
        assert (await query.execute(GetUserPermissionsQuery(user_id=user.id))).names == {"dashboard:read"}

        await handler.execute(RevokeRoleFromUserCommand(user_id=user.id, role_id=role.id))

        response = await query.execute(GetUserPermissionsQuery(user_id=user.id))
        assert response.permissions == []
        assert not response.from_cache
        assert len(event_bus.of_type("user.role_revoked")) == 1

    @pytest.mark.asyncio
    async def test_revoke_unheld_role(self, handler, make_user, make_role):
        user = await make_user()
        role = await make_role()

        with pytest.raises(AssignmentNotFoundError):
            await handler.execute(RevokeRoleFromUserCommand(user_id=user.id, role_id=role.id))

    @pytest.mark.asyncio
    async def test_revoke_unknown_role(self, handler, make_user):
        user = await make_user()
        with pytest.raises(RoleNotFoundError):
            await handler.execute(RevokeRoleFromUserCommand(user_id=user.id, role_id=RoleId.generate()))


class TestDirectPermissionAssignment:
    @pytest.mark.asyncio
    async def test_assign_and_revoke(
        self, factory, make_user, make_permission, user_permission_repository, event_bus
    ):
        user = await make_user()
        permission = await make_permission("alert", "create")

        await factory.get_assign_permission_to_user().execute(
            AssignPermissionToUserCommand(user_id=user.id, permission_id=permission.id)
        )
        assert await user_permission_repository.has(user.id, permission.id)

        with pytest.raises(AssignmentExistsError):
            await factory.get_assign_permission_to_user().execute(
                AssignPermissionToUserCommand(user_id=user.id, permission_id=permission.id)
            )

        await factory.get_revoke_permission_from_user().execute(
            RevokePermissionFromUserCommand(user_id=user.id, permission_id=permission.id)
        )
        assert not await user_permission_repository.has(user.id, permission.id)

        with pytest.raises(AssignmentNotFoundError):
            await factory.get_revoke_permission_from_user().execute(
                RevokePermissionFromUserCommand(user_id=user.id, permission_id=permission.id)
            )

        assert [e.event_type for e in event_bus.published] == [
            "user.permission_assigned",
            "user.permission_revoked",
        ]

    @pytest.mark.asyncio
    async def test_unknown_permission(self, factory, make_user):
        user = await make_user()
        with pytest.raises(PermissionNotFoundError):
            await factory.get_assign_permission_to_user().execute(
                AssignPermissionToUserCommand(user_id=user.id, permission_id="missing")
            )
