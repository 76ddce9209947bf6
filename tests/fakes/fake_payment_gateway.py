"""Fake in-memory do Mercado Pago para testes deterministas."""

from __future__ import annotations

from app.domain.errors import GatewayError
from app.protocols.payment_gateway import GatewayPayment, OAuthCredentials, PixPaymentRequest


class FakePaymentGateway:
    """Implementa PaymentGatewayProtocol sem IO.

    Pagamentos nascem `pending`; `approve()` simula a aprovação que o
    webhook vai buscar em seguida.
    """

    def __init__(self) -> None:
        self.payments: dict[str, GatewayPayment] = {}
        self.created: list[PixPaymentRequest] = []
        self.fail_next_get = False
        self._sequence = 0

    async def create_pix_payment(
        self,
        access_token: str,
        request: PixPaymentRequest,
    ) -> GatewayPayment:
        self._sequence += 1
        payment = GatewayPayment(
            id=f"mp-{self._sequence}",
            status="pending",
            external_reference=request.appointment_id,
            qr_code=f"pix-copia-e-cola-{self._sequence}",
            qr_code_base64="aW1hZ2U=",
            ticket_url=f"https://mp.test/ticket/{self._sequence}",
        )
        self.payments[payment.id] = payment
        self.created.append(request)
        return payment

    async def get_payment(self, access_token: str, payment_id: str) -> GatewayPayment:
        if self.fail_next_get:
            self.fail_next_get = False
            raise GatewayError()
        payment = self.payments.get(payment_id)
        if payment is None:
            raise GatewayError()
        return payment

    async def exchange_oauth_code(self, code: str) -> OAuthCredentials:
        if code == "invalid":
            raise GatewayError()
        return OAuthCredentials(access_token=f"token-{code}", user_id="mp-user-1")

    def approve(self, payment_id: str) -> None:
        current = self.payments[payment_id]
        self.payments[payment_id] = GatewayPayment(
            id=current.id,
            status="approved",
            external_reference=current.external_reference,
            qr_code=current.qr_code,
            qr_code_base64=current.qr_code_base64,
            ticket_url=current.ticket_url,
        )
