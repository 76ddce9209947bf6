"""Testes da cota diária (plano trial/premium e rollover)."""

from __future__ import annotations

from datetime import UTC, date, datetime

import pytest

from app.domain.errors import QuotaExceeded
from app.domain.usage import Plan, UsageProfile
from app.services.usage_quota import check_and_reserve, effective_plan

NOW = datetime(2026, 10, 19, 15, 0, tzinfo=UTC)
TODAY = date(2026, 10, 19)


def _reserve(usage: UsageProfile | None, limit: int = 5) -> UsageProfile:
    return check_and_reserve(
        usage, professional_id="prof-1", today=TODAY, limit=limit, now=NOW
    )


def test_missing_profile_counts_as_trial_with_zero_usage() -> None:
    reserved = _reserve(None)

    assert reserved.professional_id == "prof-1"
    assert reserved.plan is Plan.TRIAL
    assert reserved.daily_usage == 1
    assert reserved.last_usage_date == "2026-10-19"


def test_trial_at_limit_today_is_rejected() -> None:
    usage = UsageProfile(professional_id="prof-1", daily_usage=5, last_usage_date="2026-10-19")

    with pytest.raises(QuotaExceeded):
        _reserve(usage)


def test_usage_from_yesterday_rolls_over() -> None:
    usage = UsageProfile(professional_id="prof-1", daily_usage=5, last_usage_date="2026-10-18")

    reserved = _reserve(usage)

    assert reserved.daily_usage == 1
    assert reserved.last_usage_date == "2026-10-19"


def test_premium_has_no_ceiling() -> None:
    usage = UsageProfile(
        professional_id="prof-1",
        plan=Plan.PREMIUM,
        daily_usage=40,
        last_usage_date="2026-10-19",
    )

    reserved = _reserve(usage)

    assert reserved.daily_usage == 41
    assert reserved.plan is Plan.PREMIUM


def test_expired_premium_falls_back_to_trial() -> None:
    usage = UsageProfile(
        professional_id="prof-1",
        plan=Plan.PREMIUM,
        daily_usage=5,
        last_usage_date="2026-10-19",
        premium_expires_at=datetime(2026, 10, 1, tzinfo=UTC),
    )

    with pytest.raises(QuotaExceeded):
        _reserve(usage)


def test_expired_premium_is_downgraded_when_reserving() -> None:
    usage = UsageProfile(
        professional_id="prof-1",
        plan=Plan.PREMIUM,
        premium_expires_at=datetime(2026, 10, 1),
    )

    reserved = _reserve(usage)

    assert reserved.plan is Plan.TRIAL
    assert reserved.premium_expires_at is None


def test_effective_plan_keeps_active_premium() -> None:
    usage = UsageProfile(
        professional_id="prof-1",
        plan=Plan.PREMIUM,
        premium_expires_at=datetime(2026, 12, 1, tzinfo=UTC),
    )

    assert effective_plan(usage, NOW) is Plan.PREMIUM
