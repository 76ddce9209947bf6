"""Testes dos stores em memória (unidades atômicas sob lock)."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest

from app.domain.errors import AppointmentNotFound, InvalidLink, QuotaExceeded, SlotTaken, UsedLink
from app.domain.links import OneTimeLink
from app.domain.notification import PushToken
from app.domain.payment import PaymentIntent
from app.domain.usage import UsageProfile
from app.infra.stores import MemoryBookingStore, MemoryPaymentStore, MemoryPushTokenStore
from app.protocols.booking_store import BookingCommit
from fsm.states import AppointmentStatus
from tests.fakes.builders import PROFESSIONAL_ID, make_appointment

NOW = datetime(2026, 10, 19, 15, 0, tzinfo=UTC)


def _increment(usage: UsageProfile | None) -> UsageProfile:
    current = usage or UsageProfile(professional_id=PROFESSIONAL_ID)
    return current.model_copy(update={"daily_usage": current.daily_usage + 1})


def _commit(token: str, appointment_id: str = "appt-1", reserve_quota=_increment) -> BookingCommit:
    return BookingCommit(
        token=token,
        appointment=make_appointment(appointment_id=appointment_id),
        reserve_quota=reserve_quota,
        used_at=NOW,
    )


async def _store_with_link(token: str = "tok-1") -> MemoryBookingStore:
    store = MemoryBookingStore()
    await store.create_link(OneTimeLink(token=token, professional_id=PROFESSIONAL_ID))
    return store


class TestMemoryBookingStore:
    @pytest.mark.asyncio
    async def test_commit_writes_appointment_usage_and_consumes_link(self) -> None:
        store = await _store_with_link()

        await store.commit_booking(_commit("tok-1"))

        link = await store.get_link("tok-1")
        assert link.is_used is True
        assert link.appointment_id == "appt-1"
        assert link.used_at == NOW
        assert (await store.get_appointment("appt-1")) is not None
        assert (await store.get_usage(PROFESSIONAL_ID)).daily_usage == 1
        assert await store.list_booked_times(PROFESSIONAL_ID, "2026-10-20") == {"10:00"}

    @pytest.mark.asyncio
    async def test_commit_with_unknown_link(self) -> None:
        store = MemoryBookingStore()

        with pytest.raises(InvalidLink):
            await store.commit_booking(_commit("tok-x"))

    @pytest.mark.asyncio
    async def test_commit_with_used_link(self) -> None:
        store = await _store_with_link()
        await store.commit_booking(_commit("tok-1"))

        with pytest.raises(UsedLink):
            await store.commit_booking(_commit("tok-1", appointment_id="appt-2"))

    @pytest.mark.asyncio
    async def test_quota_rejection_writes_nothing(self) -> None:
        store = await _store_with_link()

        def _reject(usage: UsageProfile | None) -> UsageProfile:
            raise QuotaExceeded()

        with pytest.raises(QuotaExceeded):
            await store.commit_booking(_commit("tok-1", reserve_quota=_reject))

        assert (await store.get_link("tok-1")).is_used is False
        assert await store.get_appointment("appt-1") is None

    @pytest.mark.asyncio
    async def test_slot_claim_is_unique(self) -> None:
        store = await _store_with_link()
        await store.create_link(OneTimeLink(token="tok-2", professional_id=PROFESSIONAL_ID))
        await store.commit_booking(_commit("tok-1"))

        with pytest.raises(SlotTaken):
            await store.commit_booking(_commit("tok-2", appointment_id="appt-2"))

        assert (await store.get_link("tok-2")).is_used is False
        assert (await store.get_usage(PROFESSIONAL_ID)).daily_usage == 1

    @pytest.mark.asyncio
    async def test_transition_is_compare_and_set(self) -> None:
        store = MemoryBookingStore()
        await store.commit_internal_booking(make_appointment())

        stale = await store.transition_status(
            "appt-1", AppointmentStatus.AGUARDANDO_PAGAMENTO, AppointmentStatus.CONFIRMADO
        )
        applied = await store.transition_status(
            "appt-1", AppointmentStatus.CONFIRMADO, AppointmentStatus.CANCELADO
        )

        assert stale is False
        assert applied is True
        assert (await store.get_appointment("appt-1")).status == AppointmentStatus.CANCELADO

    @pytest.mark.asyncio
    async def test_cancel_releases_slot_for_new_claim(self) -> None:
        store = MemoryBookingStore()
        await store.commit_internal_booking(make_appointment())
        await store.transition_status(
            "appt-1", AppointmentStatus.CONFIRMADO, AppointmentStatus.CANCELADO
        )

        await store.commit_internal_booking(make_appointment(appointment_id="appt-2"))

        assert await store.list_booked_times(PROFESSIONAL_ID, "2026-10-20") == {"10:00"}

    @pytest.mark.asyncio
    async def test_transition_of_unknown_appointment(self) -> None:
        store = MemoryBookingStore()

        with pytest.raises(AppointmentNotFound):
            await store.transition_status(
                "nope", AppointmentStatus.CONFIRMADO, AppointmentStatus.CANCELADO
            )


class TestMemoryPaymentStore:
    @pytest.mark.asyncio
    async def test_intent_lookup_and_status_update(self) -> None:
        store = MemoryPaymentStore()
        await store.save_intent(
            PaymentIntent(
                payment_id="mp-1",
                appointment_id="appt-1",
                professional_id=PROFESSIONAL_ID,
                amount=25,
            )
        )

        by_appointment = await store.get_intent_by_appointment("appt-1")
        updated = await store.update_intent_status("mp-1", "approved")

        assert by_appointment.payment_id == "mp-1"
        assert updated.status == "approved"
        assert updated.updated_at is not None
        assert await store.update_intent_status("mp-404", "approved") is None


class TestMemoryPushTokenStore:
    @pytest.mark.asyncio
    async def test_upsert_list_delete(self) -> None:
        store = MemoryPushTokenStore()
        await store.upsert(PushToken(token="device-1", professional_id=PROFESSIONAL_ID))
        await store.upsert(PushToken(token="device-2", professional_id="prof-2"))

        assert await store.list_tokens(PROFESSIONAL_ID) == ["device-1"]

        await store.delete("device-1")
        await store.delete("device-1")

        assert await store.list_tokens(PROFESSIONAL_ID) == []
