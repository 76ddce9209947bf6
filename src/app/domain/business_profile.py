"""Perfil de atendimento do profissional (jornada, bloqueios e preco).

Lido como esta salvo; campos ausentes ou nulos caem nos fallbacks
documentados: 09:00-17:00, segunda a sexta, preco 0.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from app.domain.formats import validate_date_str, validate_time_str

# Domingo=0 ... Sabado=6
DEFAULT_WORKING_DAYS: frozenset[int] = frozenset({1, 2, 3, 4, 5})
DEFAULT_START_TIME = "09:00"
DEFAULT_END_TIME = "17:00"

_FALLBACKS: dict[str, object] = {
    "working_days": DEFAULT_WORKING_DAYS,
    "start_time": DEFAULT_START_TIME,
    "end_time": DEFAULT_END_TIME,
    "blocked_dates": frozenset(),
    "blocked_times": {},
    "service_price": 0.0,
}


class BusinessProfile(BaseModel):
    """Configuracao de disponibilidade e preco de um profissional."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    professional_id: str
    working_days: frozenset[int] = DEFAULT_WORKING_DAYS
    start_time: str = DEFAULT_START_TIME
    end_time: str = DEFAULT_END_TIME
    blocked_dates: frozenset[str] = frozenset()
    blocked_times: dict[int, frozenset[str]] = Field(default_factory=dict)
    service_price: float = Field(default=0.0, ge=0)

    @model_validator(mode="before")
    @classmethod
    def _apply_fallbacks(cls, data: object) -> object:
        if not isinstance(data, dict):
            return data
        cleaned = dict(data)
        for key, fallback in _FALLBACKS.items():
            if cleaned.get(key) is None:
                cleaned[key] = fallback
        return cleaned

    @field_validator("working_days")
    @classmethod
    def _check_weekdays(cls, value: frozenset[int]) -> frozenset[int]:
        invalid = [day for day in value if not 0 <= day <= 6]
        if invalid:
            raise ValueError(f"dias da semana devem estar entre 0 e 6: {sorted(invalid)}")
        return value

    @field_validator("start_time", "end_time")
    @classmethod
    def _check_time(cls, value: str) -> str:
        return validate_time_str(value)

    @field_validator("blocked_dates")
    @classmethod
    def _check_dates(cls, value: frozenset[str]) -> frozenset[str]:
        for item in value:
            validate_date_str(item)
        return value

    @field_validator("blocked_times")
    @classmethod
    def _check_blocked_times(
        cls, value: dict[int, frozenset[str]]
    ) -> dict[int, frozenset[str]]:
        for weekday, times in value.items():
            if not 0 <= weekday <= 6:
                raise ValueError(f"dia da semana invalido em blocked_times: {weekday}")
            for item in times:
                validate_time_str(item)
        return value

    @property
    def requires_payment(self) -> bool:
        return self.service_price > 0

    def blocked_times_for(self, weekday: int) -> frozenset[str]:
        return self.blocked_times.get(weekday, frozenset())

    def to_document(self) -> dict[str, object]:
        """Representacao para persistencia (chaves de blocked_times como string)."""
        return {
            "professional_id": self.professional_id,
            "working_days": sorted(self.working_days),
            "start_time": self.start_time,
            "end_time": self.end_time,
            "blocked_dates": sorted(self.blocked_dates),
            "blocked_times": {
                str(weekday): sorted(times) for weekday, times in self.blocked_times.items()
            },
            "service_price": self.service_price,
        }


def default_business_profile(professional_id: str) -> BusinessProfile:
    """Perfil usado quando o profissional ainda nao salvou configuracao."""
    return BusinessProfile(professional_id=professional_id)


__all__ = [
    "DEFAULT_END_TIME",
    "DEFAULT_START_TIME",
    "DEFAULT_WORKING_DAYS",
    "BusinessProfile",
    "default_business_profile",
]
