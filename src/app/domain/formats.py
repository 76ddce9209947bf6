"""Formatos de data/hora usados nos contratos de agendamento.

Datas trafegam como `YYYY-MM-DD` e horários como `HH:MM` (24h), sempre no
calendário local do profissional.
"""

from __future__ import annotations

import re
from datetime import date, datetime, time

DATE_FORMAT = "%Y-%m-%d"
TIME_FORMAT = "%H:%M"

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_TIME_RE = re.compile(r"^\d{2}:\d{2}$")


def parse_date(value: str) -> date:
    """Converte `YYYY-MM-DD` em date; ValueError se inválido."""
    if not isinstance(value, str) or not _DATE_RE.match(value):
        raise ValueError(f"data deve estar no formato YYYY-MM-DD: {value!r}")
    return datetime.strptime(value, DATE_FORMAT).date()


def parse_time(value: str) -> time:
    """Converte `HH:MM` em time; ValueError se inválido."""
    if not isinstance(value, str) or not _TIME_RE.match(value):
        raise ValueError(f"horário deve estar no formato HH:MM: {value!r}")
    return datetime.strptime(value, TIME_FORMAT).time()


def validate_date_str(value: str) -> str:
    parse_date(value)
    return value


def validate_time_str(value: str) -> str:
    parse_time(value)
    return value


def format_day_month(value: str) -> str:
    """`2026-10-19` -> `19/10` (texto de push)."""
    return parse_date(value).strftime("%d/%m")


def js_weekday(value: date) -> int:
    """Dia da semana com domingo=0 ... sábado=6."""
    return (value.weekday() + 1) % 7


__all__ = [
    "DATE_FORMAT",
    "TIME_FORMAT",
    "format_day_month",
    "js_weekday",
    "parse_date",
    "parse_time",
    "validate_date_str",
    "validate_time_str",
]
