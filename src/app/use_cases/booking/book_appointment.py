"""Use case de agendamento via link publico de uso unico."""

from __future__ import annotations

import logging
import uuid
from datetime import UTC, datetime
from functools import partial
from typing import TYPE_CHECKING

from app.domain.appointment import Appointment, AppointmentSource
from app.domain.business_profile import default_business_profile
from app.domain.errors import BookingError, InvalidBookingRequest
from app.domain.payment import RequiresPayment
from app.observability import record_outcome
from app.protocols.booking_store import BookingCommit
from app.services.availability import is_slot_offered, local_today
from app.services.usage_quota import check_and_reserve
from app.use_cases.booking.models import BookingResult
from fsm.states import initial_status

if TYPE_CHECKING:
    from collections.abc import Callable

    from app.protocols.booking_store import BookingStoreProtocol
    from app.services.notifications import NotificationService
    from app.services.one_time_links import OneTimeLinkService
    from app.services.payment_gate import PaymentGate
    from app.use_cases.booking.models import BookingRequest

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class BookAppointmentUseCase:
    """Orquestra link, cota, slot e gate de pagamento em uma unidade atomica.

    Fluxo:
    1. Valida o link (link recuperavel devolve o agendamento pendente)
    2. Confere se o horario faz parte da grade do profissional
    3. Decide o status inicial pelo gate de pagamento
    4. Commit atomico: slot claim + agendamento + uso + link consumido
    5. Fan-out best-effort (dashboard + push)
    """

    def __init__(
        self,
        booking_store: BookingStoreProtocol,
        links: OneTimeLinkService,
        payment_gate: PaymentGate,
        notifications: NotificationService,
        *,
        timezone: str,
        trial_daily_limit: int,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._store = booking_store
        self._links = links
        self._payment_gate = payment_gate
        self._notifications = notifications
        self._timezone = timezone
        self._trial_daily_limit = trial_daily_limit
        self._clock = clock

    async def execute(self, request: BookingRequest) -> BookingResult:
        """Cria o agendamento.

        Raises:
            InvalidLink, UsedLink, AlreadyCompleted: estado do link
            InvalidBookingRequest: horario fora da grade
            QuotaExceeded: teto diario do trial atingido
            SlotTaken: horario ocupado no momento do commit
        """
        validation = await self._links.validate(request.token)
        if validation.recoverable and validation.appointment is not None:
            logger.info(
                "booking_resumed",
                extra={"component": "booking", "appointment_id": validation.appointment.id},
            )
            record_outcome("booking", "resumed")
            return BookingResult(
                appointment=validation.appointment,
                resumed=True,
                requires_payment=True,
                payment_id=validation.payment_id,
            )

        professional_id = validation.professional_id
        now = self._clock()
        today = local_today(self._timezone, now)

        profile = await self._store.get_business_profile(professional_id)
        profile = profile or default_business_profile(professional_id)
        if not is_slot_offered(profile, request.date, request.time, today):
            raise InvalidBookingRequest("Horário indisponível para agendamento.")

        decision = await self._payment_gate.decide_for(profile)
        requires_payment = isinstance(decision, RequiresPayment)

        appointment = Appointment(
            id=str(uuid.uuid4()),
            professional_id=professional_id,
            client_name=request.client.name,
            client_phone=request.client.phone,
            client_email=request.client.email,
            date=request.date,
            time=request.time,
            status=initial_status(requires_payment),
            source=AppointmentSource.PUBLIC_LINK,
            created_at=now,
        )
        commit = BookingCommit(
            token=request.token,
            appointment=appointment,
            reserve_quota=partial(
                check_and_reserve,
                professional_id=professional_id,
                today=today,
                limit=self._trial_daily_limit,
                now=now,
            ),
            used_at=now,
        )

        try:
            saved = await self._store.commit_booking(commit)
        except BookingError as exc:
            logger.info(
                "booking_rejected",
                extra={"component": "booking", "result": exc.kind, "professional_id": professional_id},
            )
            record_outcome("booking", exc.kind)
            raise

        logger.info(
            "booking_created",
            extra={
                "component": "booking",
                "appointment_id": saved.id,
                "professional_id": professional_id,
                "appointment_status": str(saved.status),
            },
        )
        record_outcome("booking", "created", {"appointment_status": str(saved.status)})

        await self._notifications.notify_new_booking(saved)
        return BookingResult(appointment=saved, requires_payment=requires_payment)


__all__ = ["BookAppointmentUseCase"]
