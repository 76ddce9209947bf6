"""Filters de logging para injeção de contexto e proteção de PII.

Campos injetados:
- correlation_id: ID de rastreamento da requisição/webhook
- service: Nome do serviço (ex: agenda_pix)

Campos removidos:
- dados de contato do cliente final (nome, telefone, email) que
  eventualmente cheguem via `extra`.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

# Atributos de LogRecord que nunca devem sair nos logs
PII_FIELDS = frozenset(
    {
        "client_name",
        "client_phone",
        "client_email",
        "payer_email",
        "phone",
        "email",
        "access_token",
        "refresh_token",
    }
)

REDACTED = "[redacted]"


class CorrelationIdFilter(logging.Filter):
    """Injeta correlation_id e service em cada record de log.

    Args:
        service_name: Nome do serviço para identificação nos logs.
        correlation_id_getter: Função que retorna o correlation_id atual.
            Se não fornecida, usa string vazia como fallback.
    """

    def __init__(
        self,
        service_name: str,
        correlation_id_getter: Callable[[], str] | None = None,
    ) -> None:
        super().__init__()
        self._service_name = service_name
        self._get_correlation_id = correlation_id_getter or (lambda: "")

    def filter(self, record: logging.LogRecord) -> bool:
        """Adiciona correlation_id e service ao record.

        Se correlation_id já foi passado via `extra`, preserva o valor.
        """
        existing = getattr(record, "correlation_id", None)
        record.correlation_id = existing if existing else self._get_correlation_id()
        record.service = self._service_name
        return True


class PiiRedactionFilter(logging.Filter):
    """Mascara campos de PII passados por engano via `extra`.

    Não filtra records; apenas substitui o valor por REDACTED.
    """

    def __init__(self, fields: frozenset[str] = PII_FIELDS) -> None:
        super().__init__()
        self._fields = fields

    def filter(self, record: logging.LogRecord) -> bool:
        for field_name in self._fields:
            if getattr(record, field_name, None):
                setattr(record, field_name, REDACTED)
        return True
