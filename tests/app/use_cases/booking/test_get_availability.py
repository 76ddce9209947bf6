"""Testes da consulta de horários pelo link público."""

from __future__ import annotations

import pytest

from app.domain.business_profile import BusinessProfile
from app.domain.errors import InvalidBookingRequest, InvalidLink
from app.use_cases.booking import BookingRequest
from fsm.states import AppointmentStatus
from tests.fakes.builders import PROFESSIONAL_ID, booking_payload, build_harness


@pytest.mark.asyncio
async def test_booked_times_are_excluded_until_cancelled() -> None:
    harness = build_harness()
    booking_link = await harness.links.issue(PROFESSIONAL_ID)
    result = await harness.book.execute(BookingRequest.parse(booking_payload(booking_link.token)))
    browse_link = await harness.links.issue(PROFESSIONAL_ID)

    slots = await harness.availability.execute(browse_link.token, "2026-10-20")
    assert "10:00" not in slots
    assert slots[0] == "09:00"

    await harness.booking_store.transition_status(
        result.appointment.id, AppointmentStatus.CONFIRMADO, AppointmentStatus.CANCELADO
    )

    assert "10:00" in await harness.availability.execute(browse_link.token, "2026-10-20")


@pytest.mark.asyncio
async def test_uses_saved_business_profile() -> None:
    harness = build_harness()
    await harness.booking_store.save_business_profile(
        BusinessProfile(
            professional_id=PROFESSIONAL_ID,
            working_days={6},
            start_time="08:00",
            end_time="10:00",
        )
    )
    link = await harness.links.issue(PROFESSIONAL_ID)

    assert await harness.availability.execute(link.token, "2026-10-24") == ["08:00", "09:00"]
    assert await harness.availability.execute(link.token, "2026-10-20") == []


@pytest.mark.asyncio
async def test_invalid_date_is_rejected_before_link_lookup() -> None:
    harness = build_harness()

    with pytest.raises(InvalidBookingRequest):
        await harness.availability.execute("nao-existe", "amanha")


@pytest.mark.asyncio
async def test_unknown_link_is_invalid() -> None:
    harness = build_harness()

    with pytest.raises(InvalidLink):
        await harness.availability.execute("nao-existe", "2026-10-20")
