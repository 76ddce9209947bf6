"""Erros de dominio do fluxo de agendamento e pagamento.

Cada erro carrega `kind` (estavel, para o cliente), mensagem em portugues
e status HTTP. As rotas respondem `{"error": message, "kind": kind}`.
"""

from __future__ import annotations


class BookingError(Exception):
    """Base dos erros de negocio com resposta ao cliente."""

    kind: str = "booking_error"
    http_status: int = 400
    default_message: str = "Não foi possível concluir a operação."

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_response(self) -> dict[str, str]:
        return {"error": self.message, "kind": self.kind}


class InvalidLink(BookingError):
    kind = "invalid_link"
    http_status = 404
    default_message = "Link inválido ou expirado."


class UsedLink(BookingError):
    kind = "used_link"
    http_status = 410
    default_message = "Este link de agendamento já foi utilizado."


class AlreadyCompleted(BookingError):
    kind = "already_completed"
    http_status = 409
    default_message = "Este agendamento já foi concluído e confirmado."


class QuotaExceeded(BookingError):
    kind = "quota_exceeded"
    http_status = 429
    default_message = (
        "Este profissional atingiu o limite de agendamentos para hoje. "
        "Tente novamente amanhã."
    )


class SlotTaken(BookingError):
    kind = "slot_taken"
    http_status = 409
    default_message = "Este horário acabou de ser reservado. Escolha outro horário."


class GatewayError(BookingError):
    kind = "gateway_error"
    http_status = 502
    default_message = "Falha ao comunicar com o Mercado Pago. Tente novamente."


class Disconnected(BookingError):
    kind = "disconnected"
    http_status = 400
    default_message = "Profissional desconectado."


class InvalidBookingRequest(BookingError):
    kind = "invalid_request"
    http_status = 422
    default_message = "Dados do agendamento inválidos."


class AppointmentNotFound(BookingError):
    kind = "appointment_not_found"
    http_status = 404
    default_message = "Agendamento não encontrado."


class PaymentNotRequired(BookingError):
    kind = "payment_not_required"
    http_status = 409
    default_message = "Este agendamento não está aguardando pagamento."


class InvalidTransition(BookingError):
    kind = "invalid_transition"
    http_status = 409
    default_message = "Mudança de status não permitida para este agendamento."


__all__ = [
    "AlreadyCompleted",
    "AppointmentNotFound",
    "BookingError",
    "Disconnected",
    "GatewayError",
    "InvalidBookingRequest",
    "InvalidLink",
    "InvalidTransition",
    "PaymentNotRequired",
    "QuotaExceeded",
    "SlotTaken",
    "UsedLink",
]
