"""Disponibilidade de horarios de um profissional em uma data.

Funcoes puras: mesmas entradas, mesma saida. `today` e o dia corrente
no calendario local do profissional (ver `local_today`).
"""

from __future__ import annotations

from datetime import UTC, date, datetime
from typing import TYPE_CHECKING
from zoneinfo import ZoneInfo

from app.domain.formats import js_weekday, parse_date, parse_time

if TYPE_CHECKING:
    from collections.abc import Iterable

    from app.domain.business_profile import BusinessProfile


def local_today(timezone: str, now: datetime | None = None) -> date:
    """Data corrente no fuso do profissional (comparacao so por data)."""
    moment = now or datetime.now(tz=UTC)
    return moment.astimezone(ZoneInfo(timezone)).date()


def _hourly_grid(profile: BusinessProfile) -> list[str]:
    """Uma entrada por hora cheia em [start_time, end_time).

    `end_time` e exclusivo: 09:00-17:00 gera 09:00 ate 16:00.
    """
    start = parse_time(profile.start_time)
    end = parse_time(profile.end_time)
    return [
        f"{hour:02d}:00"
        for hour in range(24)
        if start <= parse_time(f"{hour:02d}:00") < end
    ]


def _day_is_open(profile: BusinessProfile, day: date, today: date) -> bool:
    if day < today:
        return False
    if js_weekday(day) not in profile.working_days:
        return False
    return day.isoformat() not in profile.blocked_dates


def available_slots(
    profile: BusinessProfile,
    booked_slots: Iterable[str],
    date_str: str,
    today: date,
) -> list[str]:
    """Horarios livres em ordem crescente.

    Vazio para datas passadas, dias fora da jornada e datas bloqueadas.
    Remove horarios ja ocupados (qualquer status nao-Cancelado) e os
    bloqueados para o dia da semana.
    """
    day = parse_date(date_str)
    if not _day_is_open(profile, day, today):
        return []
    unavailable = set(booked_slots) | set(profile.blocked_times_for(js_weekday(day)))
    return [slot for slot in _hourly_grid(profile) if slot not in unavailable]


def is_slot_offered(
    profile: BusinessProfile,
    date_str: str,
    time_str: str,
    today: date,
) -> bool:
    """Se o horario faz parte da grade do dia, ignorando agendamentos."""
    return time_str in available_slots(profile, (), date_str, today)


__all__ = ["available_slots", "is_slot_offered", "local_today"]
