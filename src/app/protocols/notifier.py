"""Protocolos de notificacao (push FCM e realtime do dashboard)."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from app.domain.notification import PushMessage, RealtimeEvent


class PushSenderProtocol(Protocol):
    async def send(self, token: str, message: PushMessage) -> bool:
        """Envia para um dispositivo; False se o token nao e mais valido."""
        ...


class RealtimePublisherProtocol(Protocol):
    async def publish(self, event: RealtimeEvent) -> None: ...
