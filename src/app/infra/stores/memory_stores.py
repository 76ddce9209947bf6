"""Stores em memória — apenas para desenvolvimento e testes.

ATENÇÃO: Não usar em staging/production. Sem persistência entre reinícios.
Cada unidade atômica roda sob um `threading.Lock`.
"""

from __future__ import annotations

import threading
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from app.domain.appointment import slot_key
from app.domain.errors import AppointmentNotFound, InvalidLink, SlotTaken, UsedLink
from app.protocols.booking_store import BookingStoreProtocol
from app.protocols.payment_store import PaymentStoreProtocol
from app.protocols.push_token_store import PushTokenStoreProtocol
from fsm.states import OCCUPYING_STATES

if TYPE_CHECKING:
    from app.domain.appointment import Appointment
    from app.domain.business_profile import BusinessProfile
    from app.domain.links import OneTimeLink
    from app.domain.notification import PushToken
    from app.domain.payment import GatewayConnection, PaymentIntent
    from app.domain.usage import UsageProfile
    from app.protocols.booking_store import BookingCommit
    from fsm.states import AppointmentStatus


class MemoryBookingStore(BookingStoreProtocol):
    """Store de links, agendamentos, perfis e uso em memória (apenas dev/test)."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._links: dict[str, OneTimeLink] = {}
        self._appointments: dict[str, Appointment] = {}
        self._slots: dict[str, str] = {}  # slot_key -> appointment_id
        self._profiles: dict[str, BusinessProfile] = {}
        self._usage: dict[str, UsageProfile] = {}

    # Links
    async def create_link(self, link: OneTimeLink) -> None:
        with self._lock:
            self._links[link.token] = link

    async def get_link(self, token: str) -> OneTimeLink | None:
        return self._links.get(token)

    # Agendamentos
    async def get_appointment(self, appointment_id: str) -> Appointment | None:
        return self._appointments.get(appointment_id)

    async def list_booked_times(self, professional_id: str, date: str) -> set[str]:
        return {
            item.time
            for item in self._appointments.values()
            if item.professional_id == professional_id
            and item.date == date
            and item.status in OCCUPYING_STATES
        }

    # Perfil de atendimento
    async def get_business_profile(self, professional_id: str) -> BusinessProfile | None:
        return self._profiles.get(professional_id)

    async def save_business_profile(self, profile: BusinessProfile) -> None:
        with self._lock:
            self._profiles[profile.professional_id] = profile

    # Uso
    async def get_usage(self, professional_id: str) -> UsageProfile | None:
        return self._usage.get(professional_id)

    def set_usage(self, usage: UsageProfile) -> None:
        """Seed de uso para testes/dev (plano, contador, data)."""
        with self._lock:
            self._usage[usage.professional_id] = usage

    # Unidades atômicas
    def _claim_slot_locked(self, appointment: Appointment) -> None:
        key = appointment.slot_key
        if key in self._slots:
            raise SlotTaken()
        self._slots[key] = appointment.id
        self._appointments[appointment.id] = appointment

    async def commit_booking(self, commit: BookingCommit) -> Appointment:
        appointment = commit.appointment
        with self._lock:
            link = self._links.get(commit.token)
            if link is None:
                raise InvalidLink()
            if link.is_used:
                raise UsedLink()

            usage = commit.reserve_quota(self._usage.get(appointment.professional_id))

            self._claim_slot_locked(appointment)
            self._usage[appointment.professional_id] = usage
            self._links[commit.token] = link.model_copy(
                update={
                    "is_used": True,
                    "appointment_id": appointment.id,
                    "used_at": commit.used_at,
                }
            )
        return appointment

    async def commit_internal_booking(self, appointment: Appointment) -> Appointment:
        with self._lock:
            self._claim_slot_locked(appointment)
        return appointment

    async def transition_status(
        self,
        appointment_id: str,
        expected: AppointmentStatus,
        target: AppointmentStatus,
    ) -> bool:
        with self._lock:
            current = self._appointments.get(appointment_id)
            if current is None:
                raise AppointmentNotFound()
            if current.status != expected:
                return False
            self._appointments[appointment_id] = current.model_copy(
                update={"status": target, "updated_at": datetime.now(UTC)}
            )
            if target not in OCCUPYING_STATES:
                key = slot_key(current.professional_id, current.date, current.time)
                if self._slots.get(key) == appointment_id:
                    del self._slots[key]
        return True


class MemoryPaymentStore(PaymentStoreProtocol):
    """Store de pagamentos e conexões em memória (apenas dev/test)."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._intents: dict[str, PaymentIntent] = {}
        self._connections: dict[str, GatewayConnection] = {}

    async def save_intent(self, intent: PaymentIntent) -> None:
        with self._lock:
            self._intents[intent.payment_id] = intent

    async def get_intent(self, payment_id: str) -> PaymentIntent | None:
        return self._intents.get(payment_id)

    async def get_intent_by_appointment(self, appointment_id: str) -> PaymentIntent | None:
        for intent in self._intents.values():
            if intent.appointment_id == appointment_id:
                return intent
        return None

    async def update_intent_status(self, payment_id: str, status: str) -> PaymentIntent | None:
        with self._lock:
            intent = self._intents.get(payment_id)
            if intent is None:
                return None
            updated = intent.model_copy(update={"status": status, "updated_at": datetime.now(UTC)})
            self._intents[payment_id] = updated
            return updated

    async def get_connection(self, professional_id: str) -> GatewayConnection | None:
        return self._connections.get(professional_id)

    async def save_connection(self, connection: GatewayConnection) -> None:
        with self._lock:
            self._connections[connection.professional_id] = connection


class MemoryPushTokenStore(PushTokenStoreProtocol):
    """Registro de tokens de push em memória (apenas dev/test)."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._tokens: dict[str, PushToken] = {}

    async def upsert(self, token: PushToken) -> None:
        with self._lock:
            self._tokens[token.token] = token

    async def list_tokens(self, professional_id: str) -> list[str]:
        return [
            item.token
            for item in self._tokens.values()
            if item.professional_id == professional_id
        ]

    async def delete(self, token: str) -> None:
        with self._lock:
            self._tokens.pop(token, None)
