"""Firestore Booking Store — links, agendamentos, perfis e uso.

As unidades atômicas usam transação Firestore com todas as leituras antes
das escritas. O slot claim `{professional}_{date}_{time}` é o documento
que serializa reservas concorrentes do mesmo horário: a transação que
perde lê o claim já existente e recebe SlotTaken.

Firestore Python SDK não tem API async nativa; tudo roda via
asyncio.to_thread.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from google.api_core import exceptions as google_exceptions
from google.cloud import firestore
from google.cloud.firestore import FieldFilter

from app.domain.appointment import Appointment, slot_key
from app.domain.business_profile import BusinessProfile
from app.domain.errors import AppointmentNotFound, InvalidLink, SlotTaken, UsedLink
from app.domain.links import OneTimeLink
from app.domain.usage import UsageProfile
from app.protocols.booking_store import BookingStoreProtocol
from config.settings import FirestoreSettings
from fsm.states import OCCUPYING_STATES
from utils.errors import FirestoreUnavailableError

if TYPE_CHECKING:
    from collections.abc import Callable

    from google.cloud.firestore import Client as FirestoreClient

    from app.protocols.booking_store import BookingCommit
    from fsm.states import AppointmentStatus

logger = logging.getLogger(__name__)


def _slot_document(appointment: Appointment) -> dict[str, Any]:
    return {
        "professional_id": appointment.professional_id,
        "date": appointment.date,
        "time": appointment.time,
        "appointment_id": appointment.id,
        "created_at": appointment.created_at.isoformat(),
    }


class FirestoreBookingStore(BookingStoreProtocol):
    """Store de agendamento usando Firestore.

    Args:
        firestore_client: Cliente Firestore
        settings: Nomes das collections
    """

    def __init__(
        self,
        firestore_client: FirestoreClient,
        settings: FirestoreSettings | None = None,
    ) -> None:
        self._db = firestore_client
        self._settings = settings or FirestoreSettings()

    def _collection(self, name: str) -> Any:
        return self._db.collection(name)

    async def _run(self, operation: str, func: Callable[..., Any], *args: Any) -> Any:
        """Executa chamada síncrona em thread e traduz falhas do Firestore."""
        try:
            return await asyncio.to_thread(func, *args)
        except google_exceptions.GoogleAPICallError as exc:
            logger.error(
                "firestore_operation_failed",
                extra={
                    "component": "firestore_booking_store",
                    "operation": operation,
                    "error_type": type(exc).__name__,
                },
            )
            raise FirestoreUnavailableError(f"Firestore falhou em {operation}") from exc

    # Links
    async def create_link(self, link: OneTimeLink) -> None:
        await self._run("create_link", self._create_link_sync, link)

    def _create_link_sync(self, link: OneTimeLink) -> None:
        self._collection(self._settings.collection_links).document(link.token).create(
            link.to_document()
        )

    async def get_link(self, token: str) -> OneTimeLink | None:
        data = await self._run("get_link", self._get_doc_sync, self._settings.collection_links, token)
        return OneTimeLink.model_validate(data) if data is not None else None

    def _get_doc_sync(self, collection: str, doc_id: str) -> dict[str, Any] | None:
        doc = self._collection(collection).document(doc_id).get()
        if not doc.exists:
            return None
        return doc.to_dict() or {}

    # Agendamentos
    async def get_appointment(self, appointment_id: str) -> Appointment | None:
        data = await self._run(
            "get_appointment",
            self._get_doc_sync,
            self._settings.collection_appointments,
            appointment_id,
        )
        return Appointment.model_validate(data) if data is not None else None

    async def list_booked_times(self, professional_id: str, date: str) -> set[str]:
        return await self._run(
            "list_booked_times", self._list_booked_times_sync, professional_id, date
        )

    def _list_booked_times_sync(self, professional_id: str, date: str) -> set[str]:
        docs = (
            self._collection(self._settings.collection_slots)
            .where(filter=FieldFilter("professional_id", "==", professional_id))
            .where(filter=FieldFilter("date", "==", date))
            .stream()
        )
        return {str((doc.to_dict() or {}).get("time", "")) for doc in docs} - {""}

    # Perfil de atendimento
    async def get_business_profile(self, professional_id: str) -> BusinessProfile | None:
        data = await self._run(
            "get_business_profile",
            self._get_doc_sync,
            self._settings.collection_business_profiles,
            professional_id,
        )
        if data is None:
            return None
        return BusinessProfile.model_validate({**data, "professional_id": professional_id})

    async def save_business_profile(self, profile: BusinessProfile) -> None:
        await self._run("save_business_profile", self._save_business_profile_sync, profile)

    def _save_business_profile_sync(self, profile: BusinessProfile) -> None:
        self._collection(self._settings.collection_business_profiles).document(
            profile.professional_id
        ).set(profile.to_document())

    # Uso
    async def get_usage(self, professional_id: str) -> UsageProfile | None:
        data = await self._run(
            "get_usage", self._get_doc_sync, self._settings.collection_usage, professional_id
        )
        if data is None:
            return None
        return UsageProfile.model_validate({**data, "professional_id": professional_id})

    # Unidades atômicas
    async def commit_booking(self, commit: BookingCommit) -> Appointment:
        return await self._run("commit_booking", self._commit_booking_sync, commit)

    def _commit_booking_sync(self, commit: BookingCommit) -> Appointment:
        appointment = commit.appointment
        link_ref = self._collection(self._settings.collection_links).document(commit.token)
        usage_ref = self._collection(self._settings.collection_usage).document(
            appointment.professional_id
        )
        slot_ref = self._collection(self._settings.collection_slots).document(
            appointment.slot_key
        )
        appointment_ref = self._collection(self._settings.collection_appointments).document(
            appointment.id
        )

        @firestore.transactional
        def _book(transaction: firestore.Transaction) -> None:
            link_snap = link_ref.get(transaction=transaction)
            usage_snap = usage_ref.get(transaction=transaction)
            slot_snap = slot_ref.get(transaction=transaction)

            if not link_snap.exists:
                raise InvalidLink()
            if (link_snap.to_dict() or {}).get("is_used"):
                raise UsedLink()

            usage = None
            if usage_snap.exists:
                usage = UsageProfile.model_validate(
                    {**(usage_snap.to_dict() or {}), "professional_id": appointment.professional_id}
                )
            reserved = commit.reserve_quota(usage)

            if slot_snap.exists:
                raise SlotTaken()

            transaction.create(slot_ref, _slot_document(appointment))
            transaction.set(appointment_ref, appointment.to_document())
            transaction.set(usage_ref, reserved.to_document(), merge=True)
            transaction.update(
                link_ref,
                {
                    "is_used": True,
                    "appointment_id": appointment.id,
                    "used_at": commit.used_at.isoformat(),
                },
            )

        _book(self._db.transaction())
        logger.debug("booking_committed", extra={"appointment_id": appointment.id})
        return appointment

    async def commit_internal_booking(self, appointment: Appointment) -> Appointment:
        return await self._run(
            "commit_internal_booking", self._commit_internal_booking_sync, appointment
        )

    def _commit_internal_booking_sync(self, appointment: Appointment) -> Appointment:
        slot_ref = self._collection(self._settings.collection_slots).document(
            appointment.slot_key
        )
        appointment_ref = self._collection(self._settings.collection_appointments).document(
            appointment.id
        )

        @firestore.transactional
        def _book(transaction: firestore.Transaction) -> None:
            if slot_ref.get(transaction=transaction).exists:
                raise SlotTaken()
            transaction.create(slot_ref, _slot_document(appointment))
            transaction.set(appointment_ref, appointment.to_document())

        _book(self._db.transaction())
        return appointment

    async def transition_status(
        self,
        appointment_id: str,
        expected: AppointmentStatus,
        target: AppointmentStatus,
    ) -> bool:
        return await self._run(
            "transition_status", self._transition_status_sync, appointment_id, expected, target
        )

    def _transition_status_sync(
        self,
        appointment_id: str,
        expected: AppointmentStatus,
        target: AppointmentStatus,
    ) -> bool:
        appointment_ref = self._collection(self._settings.collection_appointments).document(
            appointment_id
        )

        @firestore.transactional
        def _transition(transaction: firestore.Transaction) -> bool:
            snap = appointment_ref.get(transaction=transaction)
            if not snap.exists:
                raise AppointmentNotFound()
            current = Appointment.model_validate(snap.to_dict() or {})
            if current.status != expected:
                return False

            slot_ref = None
            release_slot = target not in OCCUPYING_STATES
            if release_slot:
                slot_ref = self._collection(self._settings.collection_slots).document(
                    slot_key(current.professional_id, current.date, current.time)
                )
                slot_snap = slot_ref.get(transaction=transaction)
                owned = (slot_snap.to_dict() or {}).get("appointment_id") == appointment_id
                release_slot = slot_snap.exists and owned

            transaction.update(
                appointment_ref,
                {"status": str(target), "updated_at": datetime.now(UTC).isoformat()},
            )
            if release_slot and slot_ref is not None:
                transaction.delete(slot_ref)
            return True

        return _transition(self._db.transaction())
