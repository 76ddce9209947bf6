"""Protocolo de persistencia do fluxo de agendamento (async).

As operacoes `commit_*` e `transition_status` sao unidades atomicas:
a implementacao de producao usa transacao Firestore, a de memoria um lock.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable
    from datetime import datetime

    from app.domain.appointment import Appointment
    from app.domain.business_profile import BusinessProfile
    from app.domain.links import OneTimeLink
    from app.domain.usage import UsageProfile
    from fsm.states import AppointmentStatus


@dataclass(frozen=True, slots=True)
class BookingCommit:
    """Unidade atomica do agendamento via link.

    Dentro da transacao o store:
    1. le o link e exige `is_used == False` (senao UsedLink);
    2. le o perfil de uso e aplica `reserve_quota` (pode levantar QuotaExceeded);
    3. le o slot claim e exige ausencia (senao SlotTaken);
    4. grava slot claim, agendamento, uso incrementado e link consumido.
    """

    token: str
    appointment: Appointment
    reserve_quota: Callable[[UsageProfile | None], UsageProfile]
    used_at: datetime


class BookingStoreProtocol(ABC):
    """Contrato de persistencia de links, agendamentos, perfis e uso."""

    # Links
    @abstractmethod
    async def create_link(self, link: OneTimeLink) -> None: ...

    @abstractmethod
    async def get_link(self, token: str) -> OneTimeLink | None: ...

    # Agendamentos
    @abstractmethod
    async def get_appointment(self, appointment_id: str) -> Appointment | None: ...

    @abstractmethod
    async def list_booked_times(self, professional_id: str, date: str) -> set[str]:
        """Horarios ocupados (qualquer status nao-Cancelado) na data."""

    # Perfil de atendimento
    @abstractmethod
    async def get_business_profile(self, professional_id: str) -> BusinessProfile | None: ...

    @abstractmethod
    async def save_business_profile(self, profile: BusinessProfile) -> None: ...

    # Uso
    @abstractmethod
    async def get_usage(self, professional_id: str) -> UsageProfile | None: ...

    # Unidades atomicas
    @abstractmethod
    async def commit_booking(self, commit: BookingCommit) -> Appointment: ...

    @abstractmethod
    async def commit_internal_booking(self, appointment: Appointment) -> Appointment:
        """Cria agendamento do dashboard com a mesma garantia de slot (SlotTaken)."""

    @abstractmethod
    async def transition_status(
        self,
        appointment_id: str,
        expected: AppointmentStatus,
        target: AppointmentStatus,
    ) -> bool:
        """Compare-and-set do status.

        Retorna False se o status persistido nao for `expected`. Ao sair
        de um status que ocupa slot para Cancelado, libera o slot claim.
        """
