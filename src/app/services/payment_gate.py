"""Gate de pagamento Pix: decide se cobra, cria e consulta pagamentos.

A chave de idempotencia enviada ao gateway e o id do agendamento, entao
repetir `create_intent` nunca gera duas cobrancas.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from app.domain.errors import (
    AppointmentNotFound,
    Disconnected,
    GatewayError,
    InvalidBookingRequest,
    PaymentNotRequired,
)
from app.domain.payment import Free, PaymentIntent, PaymentQr, RequiresPayment
from app.observability import record_outcome
from app.protocols.payment_gateway import PixPaymentRequest
from fsm.states import AppointmentStatus
from utils.errors import InfrastructureError

if TYPE_CHECKING:
    from app.domain.business_profile import BusinessProfile
    from app.domain.payment import GatewayConnection, PaymentDecision
    from app.protocols.booking_store import BookingStoreProtocol
    from app.protocols.payment_gateway import GatewayPayment, PaymentGatewayProtocol
    from app.protocols.payment_store import PaymentStoreProtocol

logger = logging.getLogger(__name__)

DEFAULT_DESCRIPTION = "Serviço Agendado"
# Centavos: diferenca menor que isso e arredondamento do cliente
PRICE_TOLERANCE = 0.01


def decide(
    profile: BusinessProfile,
    connection: GatewayConnection | None,
) -> PaymentDecision:
    """Cobra apenas com preco > 0 e gateway conectado."""
    if profile.requires_payment and connection is not None:
        return RequiresPayment(amount=profile.service_price)
    return Free()


def _to_qr(payment: GatewayPayment) -> PaymentQr:
    return PaymentQr(
        id=payment.id,
        status=payment.status,
        qr_code=payment.qr_code,
        qr_code_base64=payment.qr_code_base64,
        ticket_url=payment.ticket_url,
    )


class PaymentGate:
    """Cria e consulta pagamentos Pix do profissional no gateway."""

    def __init__(
        self,
        booking_store: BookingStoreProtocol,
        payment_store: PaymentStoreProtocol,
        gateway: PaymentGatewayProtocol,
        default_payer_email: str,
    ) -> None:
        self._booking_store = booking_store
        self._store = payment_store
        self._gateway = gateway
        self._default_payer_email = default_payer_email

    async def _service_price(self, professional_id: str) -> float:
        profile = await self._booking_store.get_business_profile(professional_id)
        return profile.service_price if profile is not None else 0.0

    async def decide_for(self, profile: BusinessProfile) -> PaymentDecision:
        connection = await self._store.get_connection(profile.professional_id)
        return decide(profile, connection)

    async def _require_connection(self, professional_id: str) -> GatewayConnection:
        connection = await self._store.get_connection(professional_id)
        if connection is None:
            raise Disconnected()
        return connection

    async def create_intent(
        self,
        *,
        appointment_id: str,
        amount: float,
        professional_id: str,
        payer_email: str | None = None,
        description: str | None = None,
    ) -> PaymentQr:
        """Cria (ou reaproveita) o pagamento Pix do agendamento.

        O valor cobrado e sempre o preco do servico salvo no perfil; o
        `amount` do cliente so e conferido contra ele.

        Raises:
            AppointmentNotFound: agendamento inexistente ou de outro profissional
            PaymentNotRequired: agendamento fora de Aguardando Pagamento
            InvalidBookingRequest: valor diferente do preco do servico
            Disconnected: profissional sem conexao com o gateway
            GatewayError: falha no gateway ou ao persistir o pagamento criado
        """
        appointment = await self._booking_store.get_appointment(appointment_id)
        if appointment is None or appointment.professional_id != professional_id:
            logger.warning(
                "payment_intent_rejected",
                extra={
                    "component": "payment_gate",
                    "appointment_id": appointment_id,
                    "reason": "appointment_not_owned",
                },
            )
            raise AppointmentNotFound()
        if appointment.status != AppointmentStatus.AGUARDANDO_PAGAMENTO:
            raise PaymentNotRequired()

        price = await self._service_price(professional_id)
        if price <= 0 or abs(amount - price) >= PRICE_TOLERANCE:
            raise InvalidBookingRequest("Valor do pagamento não confere com o preço do serviço.")
        connection = await self._require_connection(professional_id)

        existing = await self._store.get_intent_by_appointment(appointment_id)
        if existing is not None:
            logger.info(
                "payment_intent_reused",
                extra={"component": "payment_gate", "appointment_id": appointment_id},
            )
            payment = await self._gateway.get_payment(
                connection.access_token, existing.payment_id
            )
            return _to_qr(payment)

        payment = await self._gateway.create_pix_payment(
            connection.access_token,
            PixPaymentRequest(
                appointment_id=appointment_id,
                amount=price,
                description=description or DEFAULT_DESCRIPTION,
                payer_email=payer_email or self._default_payer_email,
            ),
        )

        intent = PaymentIntent(
            payment_id=payment.id,
            appointment_id=appointment_id,
            professional_id=professional_id,
            status=payment.status,
            amount=price,
        )
        try:
            await self._store.save_intent(intent)
        except InfrastructureError as exc:
            logger.error(
                "payment_intent_persist_failed",
                extra={
                    "component": "payment_gate",
                    "appointment_id": appointment_id,
                    "payment_id": payment.id,
                    "error_type": type(exc).__name__,
                },
            )
            raise GatewayError("Pagamento criado, mas não registrado. Tente novamente.") from exc

        record_outcome("payment_gate", "intent_created", {"payment_status": payment.status})
        return _to_qr(payment)

    async def retrieve_intent(self, payment_id: str, professional_id: str) -> PaymentQr:
        """Consulta o pagamento no gateway (mesmo formato de create_intent).

        Raises:
            Disconnected: profissional sem conexao com o gateway
        """
        connection = await self._require_connection(professional_id)
        payment = await self._gateway.get_payment(connection.access_token, payment_id)
        return _to_qr(payment)


__all__ = ["DEFAULT_DESCRIPTION", "PaymentGate", "decide"]
