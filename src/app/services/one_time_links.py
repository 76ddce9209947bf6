"""Emissao e validacao de links de agendamento de uso unico.

O consumo (`is_used` false -> true) nao acontece aqui: e executado pelo
store dentro da mesma transacao que insere o agendamento.
"""

from __future__ import annotations

import logging
import uuid
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from app.domain.errors import AlreadyCompleted, InvalidLink, UsedLink
from app.domain.links import LinkValidation, OneTimeLink
from fsm.states import AppointmentStatus

if TYPE_CHECKING:
    from app.protocols.booking_store import BookingStoreProtocol
    from app.protocols.payment_store import PaymentStoreProtocol

logger = logging.getLogger(__name__)


class OneTimeLinkService:
    """Emite e valida links.

    Args:
        booking_store: Persistencia de links e agendamentos
        payment_store: Usado para devolver o pagamento de um link recuperavel
    """

    def __init__(
        self,
        booking_store: BookingStoreProtocol,
        payment_store: PaymentStoreProtocol,
    ) -> None:
        self._booking_store = booking_store
        self._payment_store = payment_store

    async def issue(self, professional_id: str) -> OneTimeLink:
        link = OneTimeLink(
            token=str(uuid.uuid4()),
            professional_id=professional_id,
            created_at=datetime.now(UTC),
        )
        await self._booking_store.create_link(link)
        logger.info(
            "link_issued",
            extra={"component": "one_time_links", "professional_id": professional_id},
        )
        return link

    async def validate(self, token: str) -> LinkValidation:
        """Valida o token.

        Raises:
            InvalidLink: token desconhecido
            AlreadyCompleted: link usado com agendamento Confirmado
            UsedLink: link usado em qualquer outro caso nao recuperavel
        """
        link = await self._booking_store.get_link(token) if token else None
        if link is None:
            raise InvalidLink()
        if not link.is_used:
            return LinkValidation(link=link)

        appointment = None
        if link.appointment_id:
            appointment = await self._booking_store.get_appointment(link.appointment_id)
        if appointment is None:
            raise UsedLink()

        if appointment.status == AppointmentStatus.AGUARDANDO_PAGAMENTO:
            intent = await self._payment_store.get_intent_by_appointment(appointment.id)
            return LinkValidation(
                link=link,
                recoverable=True,
                appointment=appointment,
                payment_id=intent.payment_id if intent else None,
            )
        if appointment.status == AppointmentStatus.CONFIRMADO:
            raise AlreadyCompleted()
        raise UsedLink()


__all__ = ["OneTimeLinkService"]
