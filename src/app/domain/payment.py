"""Modelos de pagamento Pix e conexao com o gateway (Mercado Pago)."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field

# Status do gateway que confirma o agendamento
PAYMENT_APPROVED = "approved"
PAYMENT_PENDING = "pending"


class PaymentIntent(BaseModel):
    """Espelho local de um pagamento criado no gateway.

    Um para um com o agendamento que exigiu pagamento. Status atualizado
    apenas pela reconciliacao.
    """

    model_config = ConfigDict(extra="ignore")

    payment_id: str
    appointment_id: str
    professional_id: str
    status: str = PAYMENT_PENDING
    amount: float
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime | None = None

    def to_document(self) -> dict[str, object]:
        return self.model_dump(mode="json")


class GatewayConnection(BaseModel):
    """Credenciais OAuth do profissional no Mercado Pago (segredo: nunca logar)."""

    model_config = ConfigDict(extra="ignore")

    professional_id: str
    mp_user_id: str | None = None
    access_token: str
    refresh_token: str | None = None
    expires_in: int | None = None
    scope: str | None = None
    token_type: str | None = None
    connected_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    def to_document(self) -> dict[str, object]:
        return self.model_dump(mode="json")


class PaymentQr(BaseModel):
    """Resposta publica de criacao/consulta de pagamento Pix."""

    id: str
    status: str
    qr_code: str | None = None
    qr_code_base64: str | None = None
    ticket_url: str | None = None


@dataclass(frozen=True, slots=True)
class RequiresPayment:
    amount: float


@dataclass(frozen=True, slots=True)
class Free:
    pass


PaymentDecision = RequiresPayment | Free


__all__ = [
    "PAYMENT_APPROVED",
    "PAYMENT_PENDING",
    "Free",
    "GatewayConnection",
    "PaymentDecision",
    "PaymentIntent",
    "PaymentQr",
    "RequiresPayment",
]
