"""Reconciliacao de pagamento: espelha o status do gateway no agendamento.

Webhook, "ja paguei" manual e polling do cliente chamam o mesmo
`reconcile`. Idempotente: confirmar um agendamento ja Confirmado e no-op
e Cancelado nunca e revertido.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from app.domain.payment import PAYMENT_APPROVED
from app.observability import record_outcome
from fsm import AppointmentStateMachine, AppointmentStatus, TransitionTrigger

if TYPE_CHECKING:
    from app.protocols.booking_store import BookingStoreProtocol
    from app.protocols.payment_gateway import PaymentGatewayProtocol
    from app.protocols.payment_store import PaymentStoreProtocol
    from app.services.notifications import NotificationService

logger = logging.getLogger(__name__)

DEFAULT_ACTION = "payment.updated"


@dataclass(frozen=True, slots=True)
class ReconciliationRequest:
    payment_id: str
    action: str = DEFAULT_ACTION


@dataclass(frozen=True, slots=True)
class ReconciliationNoop:
    """Nada a fazer (reconhecido com 200)."""

    reason: str


@dataclass(frozen=True, slots=True)
class ReconciliationApplied:
    payment_status: str
    appointment_status: AppointmentStatus | None
    transitioned: bool


ReconciliationResult = ReconciliationNoop | ReconciliationApplied


class ReconciliationService:
    def __init__(
        self,
        booking_store: BookingStoreProtocol,
        payment_store: PaymentStoreProtocol,
        gateway: PaymentGatewayProtocol,
        notifications: NotificationService,
    ) -> None:
        self._booking_store = booking_store
        self._payment_store = payment_store
        self._gateway = gateway
        self._notifications = notifications

    async def reconcile(self, request: ReconciliationRequest) -> ReconciliationResult:
        """Busca o status no gateway e aplica no pagamento e no agendamento.

        Raises:
            GatewayError: falha ao consultar o gateway (nada local e gravado)
        """
        log_extra = {"component": "reconciliation", "payment_id": request.payment_id}

        intent = await self._payment_store.get_intent(request.payment_id)
        if intent is None:
            logger.info("reconciliation_noop", extra={**log_extra, "reason": "unknown_payment"})
            return ReconciliationNoop(reason="unknown_payment")

        appointment = await self._booking_store.get_appointment(intent.appointment_id)
        if appointment is None:
            logger.warning(
                "reconciliation_noop",
                extra={
                    **log_extra,
                    "reason": "appointment_missing",
                    "appointment_id": intent.appointment_id,
                },
            )
            return ReconciliationNoop(reason="appointment_missing")

        # Credencial do dono do agendamento, nunca a gravada no intent
        connection = await self._payment_store.get_connection(appointment.professional_id)
        if connection is None:
            logger.warning("reconciliation_noop", extra={**log_extra, "reason": "disconnected"})
            return ReconciliationNoop(reason="disconnected")

        payment = await self._gateway.get_payment(connection.access_token, request.payment_id)
        if payment.external_reference != appointment.id:
            logger.warning(
                "reconciliation_noop",
                extra={
                    **log_extra,
                    "reason": "reference_mismatch",
                    "appointment_id": appointment.id,
                },
            )
            record_outcome("reconciliation", "reference_mismatch")
            return ReconciliationNoop(reason="reference_mismatch")

        await self._payment_store.update_intent_status(request.payment_id, payment.status)

        if payment.status != PAYMENT_APPROVED:
            logger.info(
                "payment_reconciled",
                extra={**log_extra, "payment_status": payment.status, "result": "not_approved"},
            )
            return ReconciliationApplied(
                payment_status=payment.status,
                appointment_status=appointment.status,
                transitioned=False,
            )

        if appointment.status == AppointmentStatus.CANCELADO:
            logger.warning(
                "approved_payment_on_cancelled_appointment",
                extra={
                    **log_extra,
                    "appointment_id": appointment.id,
                    "result": "manual_refund_required",
                },
            )
            record_outcome("reconciliation", "approved_after_cancel")
            return ReconciliationApplied(
                payment_status=payment.status,
                appointment_status=appointment.status,
                transitioned=False,
            )

        machine = AppointmentStateMachine(appointment.id, appointment.status)
        result = machine.transition(
            AppointmentStatus.CONFIRMADO,
            TransitionTrigger.PAYMENT_APPROVED,
            metadata={"payment_id": request.payment_id},
        )
        if not result.success:
            logger.info(
                "payment_reconciled",
                extra={**log_extra, "result": "already_confirmed", "reason": result.error_reason},
            )
            return ReconciliationApplied(
                payment_status=payment.status,
                appointment_status=appointment.status,
                transitioned=False,
            )

        transitioned = await self._booking_store.transition_status(
            appointment.id, appointment.status, AppointmentStatus.CONFIRMADO
        )
        if not transitioned:
            current = await self._booking_store.get_appointment(appointment.id)
            logger.info(
                "payment_reconciled",
                extra={**log_extra, "result": "concurrent_update"},
            )
            return ReconciliationApplied(
                payment_status=payment.status,
                appointment_status=current.status if current else None,
                transitioned=False,
            )

        logger.info(
            "payment_reconciled",
            extra={**log_extra, "result": "confirmed", **result.transition.to_log_dict()},
        )
        record_outcome("reconciliation", "confirmed")
        confirmed = appointment.model_copy(update={"status": AppointmentStatus.CONFIRMADO})
        await self._notifications.notify_payment_received(confirmed)
        return ReconciliationApplied(
            payment_status=payment.status,
            appointment_status=AppointmentStatus.CONFIRMADO,
            transitioned=True,
        )


__all__ = [
    "DEFAULT_ACTION",
    "ReconciliationApplied",
    "ReconciliationNoop",
    "ReconciliationRequest",
    "ReconciliationResult",
    "ReconciliationService",
]
