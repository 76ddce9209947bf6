"""Fan-out de notificacoes ao profissional (dashboard realtime + push).

Best-effort: cada envio tem timeout e falhas sao apenas logadas; nunca
desfazem o agendamento ou a transicao de status que as originou.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

from app.domain.formats import format_day_month
from app.domain.notification import (
    NEW_PUBLIC_APPOINTMENT_EVENT,
    PushMessage,
    RealtimeEvent,
    dashboard_channel,
)
from config.logging import log_best_effort_failure
from fsm.states import AppointmentStatus

if TYPE_CHECKING:
    from collections.abc import Awaitable

    from app.domain.appointment import Appointment
    from app.protocols.notifier import PushSenderProtocol, RealtimePublisherProtocol
    from app.protocols.push_token_store import PushTokenStoreProtocol

logger = logging.getLogger(__name__)

TITLE_PENDING = "Novo Agendamento (Pendente)"
TITLE_CONFIRMED = "Novo Agendamento Confirmado!"
TITLE_PAYMENT_RECEIVED = "Pagamento Recebido!"


def new_booking_message(appointment: Appointment) -> PushMessage:
    """Variante do push conforme o status inicial do agendamento."""
    data = {"appointment_id": appointment.id, "type": "new_appointment"}
    if appointment.status == AppointmentStatus.AGUARDANDO_PAGAMENTO:
        return PushMessage(
            title=TITLE_PENDING,
            body=f"{appointment.client_name} iniciou um agendamento. Aguardando pagamento.",
            data=data,
        )
    return PushMessage(
        title=TITLE_CONFIRMED,
        body=(
            f"{appointment.client_name} agendou para "
            f"{format_day_month(appointment.date)} às {appointment.time}."
        ),
        data=data,
    )


def payment_received_message(appointment: Appointment) -> PushMessage:
    return PushMessage(
        title=TITLE_PAYMENT_RECEIVED,
        body=(
            f"{appointment.client_name} confirmou o agendamento para "
            f"{format_day_month(appointment.date)} às {appointment.time}."
        ),
        data={"appointment_id": appointment.id, "type": "payment_received"},
    )


class NotificationService:
    """Entrega eventos ao dashboard e push aos dispositivos do profissional."""

    def __init__(
        self,
        push_sender: PushSenderProtocol,
        realtime_publisher: RealtimePublisherProtocol,
        token_store: PushTokenStoreProtocol,
        timeout_seconds: float = 5.0,
    ) -> None:
        self._push_sender = push_sender
        self._realtime = realtime_publisher
        self._token_store = token_store
        self._timeout = timeout_seconds

    async def notify_new_booking(self, appointment: Appointment) -> None:
        event = RealtimeEvent(
            channel=dashboard_channel(appointment.professional_id),
            event=NEW_PUBLIC_APPOINTMENT_EVENT,
            payload={"appointment": appointment.to_document()},
        )
        await asyncio.gather(
            self._best_effort("realtime_publisher", self._realtime.publish(event), appointment),
            self._best_effort(
                "push_sender",
                self.push_to_professional(
                    appointment.professional_id, new_booking_message(appointment)
                ),
                appointment,
            ),
        )

    async def notify_payment_received(self, appointment: Appointment) -> None:
        await self._best_effort(
            "push_sender",
            self.push_to_professional(
                appointment.professional_id, payment_received_message(appointment)
            ),
            appointment,
        )

    async def push_to_professional(self, professional_id: str, message: PushMessage) -> int:
        """Envia para todos os dispositivos; remove tokens invalidados pelo FCM.

        Returns:
            Quantidade de envios aceitos.
        """
        tokens = await self._token_store.list_tokens(professional_id)
        if not tokens:
            logger.info(
                "push_skipped_no_tokens",
                extra={"component": "notifications", "professional_id": professional_id},
            )
            return 0

        delivered = 0
        for token in tokens:
            try:
                accepted = await self._push_sender.send(token, message)
            except Exception as exc:
                # Falha transitoria de um dispositivo nao afeta os demais
                logger.warning(
                    "push_send_failed",
                    extra={
                        "component": "notifications",
                        "professional_id": professional_id,
                        "error_type": type(exc).__name__,
                    },
                )
                continue
            if accepted:
                delivered += 1
            else:
                await self._token_store.delete(token)
                logger.info(
                    "push_token_removed",
                    extra={"component": "notifications", "professional_id": professional_id},
                )
        return delivered

    async def _best_effort(
        self,
        component: str,
        operation: Awaitable[Any],
        appointment: Appointment,
    ) -> None:
        try:
            await asyncio.wait_for(operation, timeout=self._timeout)
        except TimeoutError:
            log_best_effort_failure(
                logger,
                component,
                "timeout",
                appointment_id=appointment.id,
                professional_id=appointment.professional_id,
            )
        except Exception as exc:
            log_best_effort_failure(
                logger,
                component,
                type(exc).__name__,
                appointment_id=appointment.id,
                professional_id=appointment.professional_id,
            )


__all__ = [
    "TITLE_CONFIRMED",
    "TITLE_PAYMENT_RECEIVED",
    "TITLE_PENDING",
    "NotificationService",
    "new_booking_message",
    "payment_received_message",
]
