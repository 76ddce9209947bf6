"""Cota diaria de agendamentos por profissional."""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict


class Plan(StrEnum):
    TRIAL = "trial"
    PREMIUM = "premium"


class UsageProfile(BaseModel):
    """Contador diario com rollover e plano.

    Perfil inexistente equivale a trial com uso zero.
    """

    model_config = ConfigDict(extra="ignore")

    professional_id: str
    plan: Plan = Plan.TRIAL
    daily_usage: int = 0
    last_usage_date: str | None = None
    premium_expires_at: datetime | None = None

    def to_document(self) -> dict[str, object]:
        return self.model_dump(mode="json")


__all__ = ["Plan", "UsageProfile"]
