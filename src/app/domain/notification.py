"""Contratos de notificacao (push e realtime do dashboard)."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

NEW_PUBLIC_APPOINTMENT_EVENT = "new_public_appointment"


def dashboard_channel(professional_id: str) -> str:
    return f"dashboard-{professional_id}"


class PushToken(BaseModel):
    """Token de dispositivo; unico, reassociado ao ultimo profissional."""

    model_config = ConfigDict(extra="ignore")

    token: str = Field(..., min_length=1)
    professional_id: str = Field(..., min_length=1)
    updated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    def to_document(self) -> dict[str, object]:
        return self.model_dump(mode="json")


@dataclass(frozen=True, slots=True)
class PushMessage:
    title: str
    body: str
    data: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class RealtimeEvent:
    channel: str
    event: str
    payload: dict[str, Any] = field(default_factory=dict)


__all__ = [
    "NEW_PUBLIC_APPOINTMENT_EVENT",
    "PushMessage",
    "PushToken",
    "RealtimeEvent",
    "dashboard_channel",
]
