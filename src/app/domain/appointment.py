"""Modelos de dominio para agendamento.

Esses contratos ficam no dominio para compartilhar dados entre servicos,
stores e rotas sem acoplar regras de negocio ao Firestore ou ao gateway.
"""

from __future__ import annotations

import re
from datetime import UTC, datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.domain.formats import validate_date_str, validate_time_str
from fsm.states import OCCUPYING_STATES, AppointmentStatus

PHONE_MIN_DIGITS = 10
PHONE_MAX_DIGITS = 13

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class AppointmentSource(StrEnum):
    """Origem do agendamento."""

    PUBLIC_LINK = "public_link"
    DASHBOARD = "dashboard"


class ClientInfo(BaseModel):
    """Dados de contato do cliente final (PII: nunca logar)."""

    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=120)
    phone: str = Field(..., min_length=1, max_length=32)
    email: str | None = Field(default=None, max_length=254)

    @field_validator("phone")
    @classmethod
    def _check_phone(cls, value: str) -> str:
        digits = re.sub(r"\D", "", value)
        if not PHONE_MIN_DIGITS <= len(digits) <= PHONE_MAX_DIGITS:
            raise ValueError(
                f"telefone deve conter entre {PHONE_MIN_DIGITS} e {PHONE_MAX_DIGITS} digitos"
            )
        return value

    @field_validator("email", mode="before")
    @classmethod
    def _check_email(cls, value: object) -> object:
        if value is None:
            return None
        if isinstance(value, str):
            value = value.strip()
            if not value:
                return None
            if not _EMAIL_RE.match(value):
                raise ValueError("email invalido")
        return value


class Appointment(BaseModel):
    """Agendamento persistido.

    Invariante: no maximo um agendamento nao-Cancelado por
    (professional_id, date, time). Garantida pelo slot claim do store.
    """

    model_config = ConfigDict(extra="ignore")

    id: str
    professional_id: str
    client_name: str
    client_phone: str
    client_email: str | None = None
    date: str
    time: str
    status: AppointmentStatus
    source: AppointmentSource = AppointmentSource.PUBLIC_LINK
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime | None = None

    @field_validator("date")
    @classmethod
    def _check_date(cls, value: str) -> str:
        return validate_date_str(value)

    @field_validator("time")
    @classmethod
    def _check_time(cls, value: str) -> str:
        return validate_time_str(value)

    @property
    def occupies_slot(self) -> bool:
        return self.status in OCCUPYING_STATES

    @property
    def slot_key(self) -> str:
        return slot_key(self.professional_id, self.date, self.time)

    def to_document(self) -> dict[str, object]:
        """Representacao para persistencia (status como string)."""
        return self.model_dump(mode="json")


def slot_key(professional_id: str, date: str, time: str) -> str:
    """Chave deterministica do slot: `{professional}_{date}_{time}`."""
    return f"{professional_id}_{date}_{time}"


__all__ = [
    "PHONE_MAX_DIGITS",
    "PHONE_MIN_DIGITS",
    "Appointment",
    "AppointmentSource",
    "ClientInfo",
    "slot_key",
]
