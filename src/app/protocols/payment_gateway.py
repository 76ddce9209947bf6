"""Protocolo do gateway de pagamento (Mercado Pago).

Evita dependencia direta do app na camada api/connectors.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True, slots=True)
class PixPaymentRequest:
    appointment_id: str
    amount: float
    description: str
    payer_email: str


@dataclass(frozen=True, slots=True)
class GatewayPayment:
    id: str
    status: str
    external_reference: str | None = None
    qr_code: str | None = None
    qr_code_base64: str | None = None
    ticket_url: str | None = None


@dataclass(frozen=True, slots=True)
class OAuthCredentials:
    access_token: str
    user_id: str | None = None
    refresh_token: str | None = None
    expires_in: int | None = None
    scope: str | None = None
    token_type: str | None = None


class PaymentGatewayProtocol(Protocol):
    """Contrato minimo do gateway; erros de transporte levantam GatewayError."""

    async def create_pix_payment(
        self,
        access_token: str,
        request: PixPaymentRequest,
    ) -> GatewayPayment: ...

    async def get_payment(self, access_token: str, payment_id: str) -> GatewayPayment: ...

    async def exchange_oauth_code(self, code: str) -> OAuthCredentials: ...
