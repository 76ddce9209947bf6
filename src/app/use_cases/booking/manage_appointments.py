"""Acoes do profissional sobre a agenda: cancelar, confirmar e agendar interno."""

from __future__ import annotations

import logging
import uuid
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from app.domain.appointment import Appointment, AppointmentSource
from app.domain.errors import AppointmentNotFound, InvalidTransition
from app.observability import record_outcome
from fsm import AppointmentStateMachine, AppointmentStatus, TransitionTrigger

if TYPE_CHECKING:
    from collections.abc import Callable

    from app.protocols.booking_store import BookingStoreProtocol
    from app.use_cases.booking.models import SlotRequest

logger = logging.getLogger(__name__)


class ManageAppointmentsUseCase:
    """Operacoes do dashboard.

    O agendamento interno nao passa por link, cota nem pagamento e nasce
    Confirmado, mas respeita o mesmo slot claim do fluxo publico.
    """

    def __init__(
        self,
        booking_store: BookingStoreProtocol,
        clock: Callable[[], datetime] = lambda: datetime.now(UTC),
    ) -> None:
        self._store = booking_store
        self._clock = clock

    async def _load_owned(self, professional_id: str, appointment_id: str) -> Appointment:
        appointment = await self._store.get_appointment(appointment_id)
        if appointment is None or appointment.professional_id != professional_id:
            raise AppointmentNotFound()
        return appointment

    async def _apply(
        self,
        appointment: Appointment,
        target: AppointmentStatus,
        trigger: TransitionTrigger,
    ) -> Appointment:
        if appointment.status == target:
            return appointment

        machine = AppointmentStateMachine(appointment.id, appointment.status)
        result = machine.transition(target, trigger)
        if not result.success:
            logger.info(
                "appointment_transition_denied",
                extra={
                    "component": "manage_appointments",
                    "appointment_id": appointment.id,
                    "reason": result.error_reason,
                },
            )
            raise InvalidTransition()

        applied = await self._store.transition_status(appointment.id, appointment.status, target)
        if not applied:
            current = await self._store.get_appointment(appointment.id)
            if current is not None and current.status == target:
                return current
            raise InvalidTransition()

        logger.info(
            "appointment_transitioned",
            extra={"component": "manage_appointments", **result.transition.to_log_dict()},
        )
        return appointment.model_copy(update={"status": target, "updated_at": self._clock()})

    async def cancel(self, professional_id: str, appointment_id: str) -> Appointment:
        """Cancela e libera o horario. Cancelar de novo e idempotente."""
        appointment = await self._load_owned(professional_id, appointment_id)
        cancelled = await self._apply(
            appointment, AppointmentStatus.CANCELADO, TransitionTrigger.PROFESSIONAL_CANCEL
        )
        record_outcome("manage_appointments", "cancelled")
        return cancelled

    async def confirm(self, professional_id: str, appointment_id: str) -> Appointment:
        """Confirmacao manual (ex: pagamento recebido fora do Pix)."""
        appointment = await self._load_owned(professional_id, appointment_id)
        return await self._apply(
            appointment, AppointmentStatus.CONFIRMADO, TransitionTrigger.PROFESSIONAL_CONFIRM
        )

    async def book_internal(self, professional_id: str, request: SlotRequest) -> Appointment:
        """Agendamento criado pelo proprio profissional.

        Raises:
            SlotTaken: horario ja ocupado
        """
        appointment = Appointment(
            id=str(uuid.uuid4()),
            professional_id=professional_id,
            client_name=request.client.name,
            client_phone=request.client.phone,
            client_email=request.client.email,
            date=request.date,
            time=request.time,
            status=AppointmentStatus.CONFIRMADO,
            source=AppointmentSource.DASHBOARD,
            created_at=self._clock(),
        )
        saved = await self._store.commit_internal_booking(appointment)
        logger.info(
            "internal_booking_created",
            extra={
                "component": "manage_appointments",
                "appointment_id": saved.id,
                "professional_id": professional_id,
            },
        )
        record_outcome("manage_appointments", "internal_created")
        return saved


__all__ = ["ManageAppointmentsUseCase"]
