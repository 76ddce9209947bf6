"""Adapters de notificação (FCM push e Redis realtime)."""

from app.infra.notifications.fcm_push_sender import (
    FcmPushSender,
    LoggingPushSender,
    create_push_sender,
)
from app.infra.notifications.redis_realtime_publisher import (
    LoggingRealtimePublisher,
    RedisRealtimePublisher,
)

__all__ = [
    "FcmPushSender",
    "LoggingPushSender",
    "LoggingRealtimePublisher",
    "RedisRealtimePublisher",
    "create_push_sender",
]
