"""Tests for domain events, event buses and the publisher service."""

import json

import pytest
from unittest.mock import AsyncMock, MagicMock

from redis.exceptions import ConnectionError as RedisConnectionError

from neo_iam.core.exceptions import EventPublishingError
from neo_iam.features.events import EventPublisherService, InMemoryEventBus, RedisStreamEventBus
from neo_iam.features.permissions.entities import Role, RoleAssigned, RoleCreated


class TestDomainEvent:
    def test_envelope(self):
        event = RoleAssigned(aggregate_id="user-1", role_id="role-1")
        data = event.to_dict()

        assert data["event_type"] == "user.role_assigned"
        assert data["aggregate_id"] == "user-1"
        assert data["data"] == {"role_id": "role-1"}
        assert event.event_id

    def test_tuple_payloads_serialise_as_lists(self):
        event = RoleCreated(
            aggregate_id="role-1", name="editor", description="", permission_ids=("p1", "p2"),
            tenant_id=None, is_system=False,
        )
        assert event.to_dict()["data"]["permission_ids"] == ["p1", "p2"]

    def test_aggregate_id_required(self):
        with pytest.raises(ValueError):
            RoleAssigned(aggregate_id="", role_id="role-1")


class TestInMemoryEventBus:
    @pytest.mark.asyncio
    async def test_publish_notifies_subscribers(self):
        bus = InMemoryEventBus()
        typed, wildcard = [], []
        bus.subscribe("user.role_assigned", typed.append)
        bus.subscribe("*", wildcard.append)

        event = RoleAssigned(aggregate_id="user-1", role_id="role-1")
        assert await bus.publish(event) == event.event_id
        assert typed == [event]
        assert wildcard == [event]
        assert bus.of_type("user.role_assigned") == [event]


class TestRedisStreamEventBus:
    @pytest.fixture
    def redis_client(self):
        client = MagicMock()
        client.xadd = AsyncMock(return_value=b"1700000000000-0")
        return client

    @pytest.mark.asyncio
    async def test_publish_appends_to_trimmed_stream(self, redis_client):
        bus = RedisStreamEventBus(redis_client, stream_name="events:test", max_len=10)
        event = RoleAssigned(aggregate_id="user-1", role_id="role-1")

        message_id = await bus.publish(event)

        assert message_id == "1700000000000-0"
        args, kwargs = redis_client.xadd.call_args
        assert args[0] == "events:test"
        assert args[1]["event_type"] == "user.role_assigned"
        assert json.loads(args[1]["event_data"]) == {"role_id": "role-1"}
        assert kwargs == {"maxlen": 10, "approximate": True}

    @pytest.mark.asyncio
    async def test_redis_failure_raises_publishing_error(self, redis_client):
        redis_client.xadd.side_effect = RedisConnectionError("down")
        bus = RedisStreamEventBus(redis_client)

        with pytest.raises(EventPublishingError):
            await bus.publish(RoleAssigned(aggregate_id="user-1", role_id="role-1"))


class TestEventPublisherService:
    @pytest.mark.asyncio
    async def test_publish_pending_drains_aggregate(self):
        bus = InMemoryEventBus()
        role = Role.create(name="editor")

        outcome = await EventPublisherService(bus).publish_pending(role)

        assert outcome.published == 1
        assert role.pending_events == ()
        assert bus.published[0].event_type == "role.created"

    @pytest.mark.asyncio
    async def test_failures_are_counted_not_raised(self):
        bus = MagicMock()
        bus.publish = AsyncMock(side_effect=[EventPublishingError("down"), "ok"])
        events = [
            RoleAssigned(aggregate_id="user-1", role_id="role-1"),
            RoleAssigned(aggregate_id="user-1", role_id="role-2"),
        ]

        outcome = await EventPublisherService(bus).publish_all(events)

        assert outcome.published == 1
        assert outcome.failed == 1
        assert outcome.failed_event_ids == [events[0].event_id]
