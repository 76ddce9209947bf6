"""Configuração centralizada de logging.

Configura logging estruturado JSON com:
- Campos obrigatórios (correlation_id, service, level, logger, message)
- Máscara de PII do cliente final
- Níveis configuráveis por ambiente

Uso:
    from config.logging import configure_logging, get_logger

    # Na inicialização do serviço (app/bootstrap/)
    configure_logging(level="INFO", service_name="agenda_pix")

    # Em qualquer módulo
    logger = get_logger(__name__)
    logger.info("booking_created", extra={"appointment_status": "Confirmado"})
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from config.logging.filters import CorrelationIdFilter, PiiRedactionFilter
from config.logging.formatters import create_json_formatter

if TYPE_CHECKING:
    from collections.abc import Callable

# Níveis de log válidos
VALID_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})

# Nome padrão do serviço
DEFAULT_SERVICE_NAME = "agenda_pix"


def configure_logging(
    level: str = "INFO",
    service_name: str = DEFAULT_SERVICE_NAME,
    correlation_id_getter: Callable[[], str] | None = None,
) -> None:
    """Configura logging JSON estruturado para o serviço.

    Deve ser chamada uma vez na inicialização do serviço (app/bootstrap/).

    Args:
        level: Nível de log (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        service_name: Nome do serviço para identificação nos logs.
        correlation_id_getter: Função opcional que retorna o correlation_id
            do contexto atual (ex: de ContextVar).

    Raises:
        ValueError: Se o nível de log for inválido.
    """
    level_upper = level.upper()
    if level_upper not in VALID_LOG_LEVELS:
        raise ValueError(
            f"Nível de log inválido: {level}. "
            f"Válidos: {', '.join(sorted(VALID_LOG_LEVELS))}"
        )

    handler = logging.StreamHandler()
    handler.setLevel(level_upper)
    handler.setFormatter(create_json_formatter())
    handler.addFilter(CorrelationIdFilter(service_name, correlation_id_getter))
    handler.addFilter(PiiRedactionFilter())

    root = logging.getLogger()
    root.setLevel(level_upper)
    # Substituir handlers existentes para evitar duplicação
    root.handlers = [handler]


def get_logger(name: str) -> logging.Logger:
    """Retorna logger para o módulo especificado.

    Os filters do handler raiz injetam service e correlation_id.
    """
    return logging.getLogger(name)


def log_best_effort_failure(
    logger: logging.Logger,
    component: str,
    reason: str,
    **fields: object,
) -> None:
    """Log observável de falha em etapa best-effort (sem PII).

    Usado quando uma notificação (push/realtime) falha depois de uma
    transição de estado já persistida: a falha é registrada e o fluxo segue.

    Exemplo:
        log_best_effort_failure(logger, "push_notifier", "timeout", professional_id="p1")
    """
    extra: dict[str, object] = {
        "best_effort": True,
        "component": component,
        "reason": reason,
        **fields,
    }
    logger.warning("Best-effort step failed for %s", component, extra=extra)
