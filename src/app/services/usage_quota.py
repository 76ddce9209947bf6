"""Cota diaria de agendamentos por plano.

`check_and_reserve` e puro: recebe o perfil lido dentro da transacao e
devolve o perfil a gravar, ou levanta QuotaExceeded.
"""

from __future__ import annotations

import logging
from datetime import UTC, date, datetime

from app.domain.errors import QuotaExceeded
from app.domain.usage import Plan, UsageProfile

logger = logging.getLogger(__name__)


def effective_plan(usage: UsageProfile, now: datetime) -> Plan:
    """Premium expirado volta a valer como trial."""
    expires_at = usage.premium_expires_at
    if usage.plan is Plan.PREMIUM and expires_at is not None:
        if expires_at.tzinfo is None:
            expires_at = expires_at.replace(tzinfo=UTC)
        if expires_at <= now:
            return Plan.TRIAL
    return usage.plan


def check_and_reserve(
    usage: UsageProfile | None,
    *,
    professional_id: str,
    today: date,
    limit: int,
    now: datetime,
) -> UsageProfile:
    """Aplica rollover, checa o teto do trial e incrementa o contador.

    Args:
        usage: Perfil atual (None equivale a trial com uso zero)
        today: Dia local do profissional
        limit: Teto diario do plano trial

    Raises:
        QuotaExceeded: trial com uso de hoje >= limit
    """
    current = usage or UsageProfile(professional_id=professional_id)
    today_str = today.isoformat()

    plan = effective_plan(current, now)
    expires_at = current.premium_expires_at
    if plan is not current.plan:
        logger.info(
            "premium_expired",
            extra={"component": "usage_quota", "professional_id": professional_id},
        )
        expires_at = None

    used_today = current.daily_usage if current.last_usage_date == today_str else 0

    if plan is Plan.TRIAL and used_today >= limit:
        raise QuotaExceeded()

    return current.model_copy(
        update={
            "plan": plan,
            "premium_expires_at": expires_at,
            "daily_usage": used_today + 1,
            "last_usage_date": today_str,
        }
    )


__all__ = ["check_and_reserve", "effective_plan"]
