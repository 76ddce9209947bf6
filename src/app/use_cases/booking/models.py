"""Contratos de entrada/saida dos use cases de agendamento."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from app.domain.appointment import ClientInfo
from app.domain.errors import InvalidBookingRequest
from app.domain.formats import validate_date_str, validate_time_str

if TYPE_CHECKING:
    from app.domain.appointment import Appointment


def _first_error_message(exc: ValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return InvalidBookingRequest.default_message
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()))
    return f"Campo inválido: {location}" if location else InvalidBookingRequest.default_message


class SlotRequest(BaseModel):
    """Data/horario solicitados + dados do cliente."""

    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    client: ClientInfo
    date: str
    time: str

    @field_validator("date")
    @classmethod
    def _check_date(cls, value: str) -> str:
        return validate_date_str(value)

    @field_validator("time")
    @classmethod
    def _check_time(cls, value: str) -> str:
        return validate_time_str(value)

    @classmethod
    def parse(cls, payload: dict[str, Any]) -> SlotRequest:
        """Valida payload `{name, phone, email, date, time}`.

        Raises:
            InvalidBookingRequest: payload fora do contrato
        """
        try:
            return cls.model_validate(
                {
                    "client": {
                        "name": payload.get("name"),
                        "phone": payload.get("phone"),
                        "email": payload.get("email"),
                    },
                    "date": payload.get("date"),
                    "time": payload.get("time"),
                }
            )
        except ValidationError as exc:
            raise InvalidBookingRequest(_first_error_message(exc)) from exc


class BookingRequest(SlotRequest):
    """Pedido de agendamento via link publico."""

    token: str = Field(..., min_length=1)

    @classmethod
    def parse(cls, payload: dict[str, Any]) -> BookingRequest:
        slot = SlotRequest.parse(payload)
        token = payload.get("tokenId") or payload.get("token")
        if not isinstance(token, str) or not token.strip():
            raise InvalidBookingRequest("Campo inválido: tokenId")
        return cls(token=token.strip(), client=slot.client, date=slot.date, time=slot.time)


@dataclass(frozen=True, slots=True)
class BookingResult:
    appointment: Appointment
    resumed: bool = False
    requires_payment: bool = False
    payment_id: str | None = None

    def to_response(self) -> dict[str, Any]:
        return {
            "success": True,
            "appointment": self.appointment.to_document(),
            "resumed": self.resumed,
            "requires_payment": self.requires_payment,
            "payment_id": self.payment_id,
        }


__all__ = ["BookingRequest", "BookingResult", "SlotRequest"]
