"""Broadcast realtime para o dashboard do profissional via Redis pub/sub.

Canal `dashboard-{professional_id}`; o frontend assina o canal através do
gateway de websockets e recebe `{"event", "payload"}` em JSON.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

from redis.exceptions import RedisError

from utils.errors import RedisConnectionError

if TYPE_CHECKING:
    from redis.asyncio import Redis as AsyncRedis

    from app.domain.notification import RealtimeEvent

logger = logging.getLogger(__name__)


class RedisRealtimePublisher:
    """Implementa RealtimePublisherProtocol com PUBLISH."""

    def __init__(self, redis_client: AsyncRedis) -> None:
        self._redis = redis_client

    async def publish(self, event: RealtimeEvent) -> None:
        message = json.dumps({"event": event.event, "payload": event.payload}, default=str)
        try:
            receivers = await self._redis.publish(event.channel, message)
        except RedisError as exc:
            raise RedisConnectionError("Falha ao publicar evento realtime") from exc
        logger.debug(
            "realtime_event_published",
            extra={"component": "realtime_publisher", "event": event.event, "receivers": receivers},
        )


class LoggingRealtimePublisher:
    """Fallback sem Redis (desenvolvimento): apenas registra o evento."""

    async def publish(self, event: RealtimeEvent) -> None:
        logger.info(
            "realtime_disabled_skip",
            extra={"component": "realtime_publisher", "event": event.event},
        )


__all__ = ["LoggingRealtimePublisher", "RedisRealtimePublisher"]
