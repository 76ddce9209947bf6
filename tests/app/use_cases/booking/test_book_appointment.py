"""Testes do agendamento via link público."""

from __future__ import annotations

import asyncio

import pytest

from app.domain.business_profile import BusinessProfile
from app.domain.errors import (
    AlreadyCompleted,
    InvalidBookingRequest,
    InvalidLink,
    QuotaExceeded,
    SlotTaken,
)
from app.domain.usage import Plan, UsageProfile
from app.use_cases.booking import BookingRequest
from fsm.states import AppointmentStatus
from tests.fakes.builders import PROFESSIONAL_ID, booking_payload, build_harness


def _request(token: str, **kwargs) -> BookingRequest:
    return BookingRequest.parse(booking_payload(token, **kwargs))


async def _paid_profile(harness) -> None:
    await harness.booking_store.save_business_profile(
        BusinessProfile(professional_id=PROFESSIONAL_ID, service_price=25)
    )
    await harness.connect_gateway()


@pytest.mark.asyncio
async def test_free_booking_is_confirmed_and_consumes_link() -> None:
    harness = build_harness()
    link = await harness.links.issue(PROFESSIONAL_ID)

    result = await harness.book.execute(_request(link.token))

    assert result.resumed is False
    assert result.requires_payment is False
    assert result.appointment.status == AppointmentStatus.CONFIRMADO
    stored_link = await harness.booking_store.get_link(link.token)
    assert stored_link.is_used is True
    assert stored_link.appointment_id == result.appointment.id
    assert await harness.payment_store.get_intent_by_appointment(result.appointment.id) is None
    assert len(harness.publisher.events) == 1


@pytest.mark.asyncio
async def test_paid_booking_awaits_payment() -> None:
    harness = build_harness()
    await _paid_profile(harness)
    link = await harness.links.issue(PROFESSIONAL_ID)

    result = await harness.book.execute(_request(link.token))

    assert result.requires_payment is True
    assert result.appointment.status == AppointmentStatus.AGUARDANDO_PAGAMENTO


@pytest.mark.asyncio
async def test_price_without_connection_is_free() -> None:
    harness = build_harness()
    await harness.booking_store.save_business_profile(
        BusinessProfile(professional_id=PROFESSIONAL_ID, service_price=25)
    )
    link = await harness.links.issue(PROFESSIONAL_ID)

    result = await harness.book.execute(_request(link.token))

    assert result.appointment.status == AppointmentStatus.CONFIRMADO


@pytest.mark.asyncio
async def test_used_link_awaiting_payment_resumes_same_appointment() -> None:
    harness = build_harness()
    await _paid_profile(harness)
    link = await harness.links.issue(PROFESSIONAL_ID)
    first = await harness.book.execute(_request(link.token))
    qr = await harness.payment_gate.create_intent(
        appointment_id=first.appointment.id, amount=25, professional_id=PROFESSIONAL_ID
    )

    second = await harness.book.execute(_request(link.token, time="11:00"))

    assert second.resumed is True
    assert second.appointment.id == first.appointment.id
    assert second.payment_id == qr.id
    assert len(harness.publisher.events) == 1


@pytest.mark.asyncio
async def test_used_link_confirmed_is_already_completed() -> None:
    harness = build_harness()
    link = await harness.links.issue(PROFESSIONAL_ID)
    await harness.book.execute(_request(link.token))

    with pytest.raises(AlreadyCompleted):
        await harness.book.execute(_request(link.token))


@pytest.mark.asyncio
async def test_unknown_token_is_invalid_link() -> None:
    harness = build_harness()

    with pytest.raises(InvalidLink):
        await harness.book.execute(_request("nao-existe"))


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "date, time",
    [("2026-10-20", "09:30"), ("2026-10-20", "17:00"), ("2026-10-24", "10:00"), ("2026-10-18", "10:00")],
    ids=["off_hour", "end_exclusive", "saturday", "past"],
)
async def test_slot_outside_grid_is_rejected(date: str, time: str) -> None:
    harness = build_harness()
    link = await harness.links.issue(PROFESSIONAL_ID)

    with pytest.raises(InvalidBookingRequest):
        await harness.book.execute(_request(link.token, date=date, time=time))

    assert (await harness.booking_store.get_link(link.token)).is_used is False


@pytest.mark.asyncio
async def test_concurrent_bookings_of_same_slot_have_one_winner() -> None:
    harness = build_harness()
    first_link = await harness.links.issue(PROFESSIONAL_ID)
    second_link = await harness.links.issue(PROFESSIONAL_ID)

    results = await asyncio.gather(
        harness.book.execute(_request(first_link.token)),
        harness.book.execute(_request(second_link.token)),
        return_exceptions=True,
    )

    errors = [item for item in results if isinstance(item, Exception)]
    successes = [item for item in results if not isinstance(item, Exception)]
    assert len(successes) == 1
    assert len(errors) == 1
    assert isinstance(errors[0], SlotTaken)
    assert await harness.booking_store.list_booked_times(PROFESSIONAL_ID, "2026-10-20") == {
        "10:00"
    }


@pytest.mark.asyncio
async def test_slot_taken_leaves_link_and_quota_untouched() -> None:
    harness = build_harness()
    first_link = await harness.links.issue(PROFESSIONAL_ID)
    second_link = await harness.links.issue(PROFESSIONAL_ID)
    await harness.book.execute(_request(first_link.token))

    with pytest.raises(SlotTaken):
        await harness.book.execute(_request(second_link.token))

    assert (await harness.booking_store.get_link(second_link.token)).is_used is False
    assert (await harness.booking_store.get_usage(PROFESSIONAL_ID)).daily_usage == 1


@pytest.mark.asyncio
async def test_trial_at_daily_limit_is_quota_exceeded() -> None:
    harness = build_harness()
    harness.booking_store.set_usage(
        UsageProfile(professional_id=PROFESSIONAL_ID, daily_usage=5, last_usage_date="2026-10-19")
    )
    link = await harness.links.issue(PROFESSIONAL_ID)

    with pytest.raises(QuotaExceeded):
        await harness.book.execute(_request(link.token))

    assert (await harness.booking_store.get_link(link.token)).is_used is False
    assert await harness.booking_store.list_booked_times(PROFESSIONAL_ID, "2026-10-20") == set()


@pytest.mark.asyncio
async def test_usage_from_yesterday_resets_to_one() -> None:
    harness = build_harness()
    harness.booking_store.set_usage(
        UsageProfile(professional_id=PROFESSIONAL_ID, daily_usage=5, last_usage_date="2026-10-18")
    )
    link = await harness.links.issue(PROFESSIONAL_ID)

    await harness.book.execute(_request(link.token))

    usage = await harness.booking_store.get_usage(PROFESSIONAL_ID)
    assert usage.daily_usage == 1
    assert usage.last_usage_date == "2026-10-19"


@pytest.mark.asyncio
async def test_premium_is_not_limited() -> None:
    harness = build_harness()
    harness.booking_store.set_usage(
        UsageProfile(
            professional_id=PROFESSIONAL_ID,
            plan=Plan.PREMIUM,
            daily_usage=30,
            last_usage_date="2026-10-19",
        )
    )
    link = await harness.links.issue(PROFESSIONAL_ID)

    result = await harness.book.execute(_request(link.token))

    assert result.appointment.status == AppointmentStatus.CONFIRMADO


@pytest.mark.asyncio
async def test_notification_failure_does_not_fail_booking() -> None:
    harness = build_harness()

    async def _broken(event) -> None:
        raise RuntimeError("redis down")

    harness.publisher.publish = _broken
    link = await harness.links.issue(PROFESSIONAL_ID)

    result = await harness.book.execute(_request(link.token))

    assert result.appointment.status == AppointmentStatus.CONFIRMADO


class TestBookingRequestParse:
    def test_accepts_token_alias(self) -> None:
        payload = booking_payload("abc")
        payload["token"] = payload.pop("tokenId")

        assert BookingRequest.parse(payload).token == "abc"

    def test_missing_token(self) -> None:
        payload = booking_payload("")

        with pytest.raises(InvalidBookingRequest, match="tokenId"):
            BookingRequest.parse(payload)

    def test_invalid_phone(self) -> None:
        payload = booking_payload("abc")
        payload["phone"] = "123"

        with pytest.raises(InvalidBookingRequest, match="client.phone"):
            BookingRequest.parse(payload)

    def test_empty_email_becomes_none(self) -> None:
        payload = booking_payload("abc")
        payload["email"] = "  "

        assert BookingRequest.parse(payload).client.email is None

    def test_invalid_date_format(self) -> None:
        payload = booking_payload("abc", date="20/10/2026")

        with pytest.raises(InvalidBookingRequest, match="date"):
            BookingRequest.parse(payload)
