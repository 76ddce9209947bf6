"""Testes da grade de horários disponíveis."""

from __future__ import annotations

from datetime import UTC, date, datetime

import pytest

from app.domain.business_profile import BusinessProfile, default_business_profile
from app.services.availability import available_slots, is_slot_offered, local_today

# 2026-10-19 é segunda-feira
TODAY = date(2026, 10, 19)
MONDAY = "2026-10-19"
SATURDAY = "2026-10-24"


def _profile(**overrides) -> BusinessProfile:
    return BusinessProfile(professional_id="prof-1", **overrides)


def test_default_profile_offers_hourly_grid_with_exclusive_end() -> None:
    slots = available_slots(default_business_profile("prof-1"), [], MONDAY, TODAY)

    assert slots == [
        "09:00",
        "10:00",
        "11:00",
        "12:00",
        "13:00",
        "14:00",
        "15:00",
        "16:00",
    ]


def test_booked_and_blocked_times_are_removed_in_ascending_order() -> None:
    profile = _profile(start_time="08:00", end_time="12:00", blocked_times={1: {"10:00"}})

    slots = available_slots(profile, {"09:00"}, MONDAY, TODAY)

    assert slots == ["08:00", "11:00"]


def test_blocked_times_only_apply_to_their_weekday() -> None:
    profile = _profile(working_days={1, 2}, blocked_times={2: {"09:00"}})

    assert "09:00" in available_slots(profile, [], MONDAY, TODAY)
    assert "09:00" not in available_slots(profile, [], "2026-10-20", TODAY)


@pytest.mark.parametrize(
    "profile, date_str",
    [
        (default_business_profile("prof-1"), "2026-10-18"),
        (default_business_profile("prof-1"), SATURDAY),
        (BusinessProfile(professional_id="prof-1", blocked_dates={MONDAY}), MONDAY),
    ],
    ids=["past", "non_working_day", "blocked_date"],
)
def test_closed_days_return_empty(profile: BusinessProfile, date_str: str) -> None:
    assert available_slots(profile, [], date_str, TODAY) == []


def test_start_not_on_hour_skips_partial_hour() -> None:
    profile = _profile(start_time="09:30", end_time="12:00")

    assert available_slots(profile, [], MONDAY, TODAY) == ["10:00", "11:00"]


def test_weekend_when_enabled() -> None:
    profile = _profile(working_days={6})

    assert available_slots(profile, [], SATURDAY, TODAY)[0] == "09:00"


def test_is_slot_offered_ignores_bookings() -> None:
    profile = default_business_profile("prof-1")

    assert is_slot_offered(profile, MONDAY, "09:00", TODAY) is True
    assert is_slot_offered(profile, MONDAY, "09:30", TODAY) is False
    assert is_slot_offered(profile, MONDAY, "17:00", TODAY) is False


def test_invalid_date_raises_value_error() -> None:
    with pytest.raises(ValueError):
        available_slots(default_business_profile("prof-1"), [], "19/10/2026", TODAY)


def test_local_today_uses_professional_timezone() -> None:
    # 01:30 UTC ainda é o dia anterior em São Paulo (UTC-3)
    now = datetime(2026, 10, 20, 1, 30, tzinfo=UTC)

    assert local_today("America/Sao_Paulo", now) == date(2026, 10, 19)
    assert local_today("UTC", now) == date(2026, 10, 20)
