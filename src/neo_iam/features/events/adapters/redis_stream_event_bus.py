"""Redis Streams event bus.

Each event is appended with ``XADD`` to a single stream (``events:iam`` by
default) trimmed with ``MAXLEN ~`` so the stream cannot grow unbounded.
"""

import json
import logging
from typing import Dict, Optional

import redis.asyncio as redis
from redis.exceptions import RedisError

from ....core.exceptions import EventPublishingError
from ....core.shared import DomainEvent

logger = logging.getLogger(__name__)


class RedisStreamEventBus:
    """EventBus backed by a Redis stream."""

    def __init__(self, redis_client: redis.Redis, stream_name: str = "events:iam", max_len: int = 100000):
        self._redis = redis_client
        self._stream_name = stream_name
        self._max_len = max_len

    @property
    def stream_name(self) -> str:
        return self._stream_name

    async def publish(self, event: DomainEvent) -> Optional[str]:
        payload = self._serialize_event(event)
        try:
            message_id = await self._redis.xadd(
                self._stream_name,
                payload,
                maxlen=self._max_len,
                approximate=True,
            )
        except RedisError as e:
            logger.error(f"Failed to publish event {event.event_id} to Redis: {e}")
            raise EventPublishingError(
                f"Failed to publish event: {e}",
                details={"event_id": event.event_id, "event_type": event.event_type},
            ) from e

        message_id = message_id.decode() if isinstance(message_id, bytes) else str(message_id)
        logger.info(
            f"Published event {event.event_id} ({event.event_type}) to stream "
            f"'{self._stream_name}' with message_id '{message_id}'"
        )
        return message_id

    def _serialize_event(self, event: DomainEvent) -> Dict[str, str]:
        """Flatten an event into string fields for XADD."""
        envelope = event.to_dict()
        return {
            "event_id": envelope["event_id"],
            "event_type": envelope["event_type"],
            "aggregate_id": envelope["aggregate_id"],
            "aggregate_type": envelope["aggregate_type"],
            "occurred_at": envelope["occurred_at"],
            "event_data": json.dumps(envelope["data"]),
        }
