"""Settings do fluxo de agendamento publico.

Centralizar a leitura de env aqui evita espalhar parse de configuracao
pelos servicos de disponibilidade, cota e notificacao.
"""

from __future__ import annotations

import os
from functools import lru_cache
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, ConfigDict, Field


class BookingSettings(BaseModel):
    """Configuracoes usadas pelo dominio de agendamentos."""

    model_config = ConfigDict(extra="ignore")

    timezone: str = Field(
        default="America/Sao_Paulo",
        description="Timezone do calendario local do profissional.",
    )
    trial_daily_limit: int = Field(
        default=5,
        ge=1,
        description="Maximo de agendamentos por dia no plano trial.",
    )
    notification_timeout_seconds: float = Field(
        default=5.0,
        gt=0,
        description="Timeout de cada envio best-effort (push e realtime).",
    )

    def validate_runtime(self) -> list[str]:
        """Valida o que o schema nao cobre (timezone existente)."""
        errors: list[str] = []
        try:
            ZoneInfo(self.timezone)
        except (ZoneInfoNotFoundError, ValueError):
            errors.append(f"BOOKING_TIMEZONE invalido: {self.timezone}")
        return errors


def _load_booking_from_env() -> BookingSettings:
    """Carrega BookingSettings a partir de variaveis de ambiente."""
    return BookingSettings(
        timezone=os.getenv("BOOKING_TIMEZONE", "America/Sao_Paulo"),
        trial_daily_limit=int(os.getenv("TRIAL_DAILY_LIMIT", "5")),
        notification_timeout_seconds=float(os.getenv("NOTIFICATION_TIMEOUT_SECONDS", "5.0")),
    )


@lru_cache(maxsize=1)
def get_booking_settings() -> BookingSettings:
    """Retorna instancia cacheada de BookingSettings."""
    return _load_booking_from_env()


__all__ = ["BookingSettings", "get_booking_settings"]
