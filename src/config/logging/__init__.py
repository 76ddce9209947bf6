"""Configuração de logging estruturado.

Re-exporta funções e classes para configuração de logging JSON.

Uso:
    from config.logging import configure_logging, get_logger

    # Na inicialização (bootstrap)
    configure_logging(level="INFO", service_name="agenda_pix")

    # Em qualquer módulo
    logger = get_logger(__name__)
    logger.info("payment_reconciled", extra={"payment_status": "approved"})

Campos obrigatórios em todo log:
- correlation_id
- service
- level
- logger
- message
- asctime

Dados de contato do cliente nunca são logados.
"""

from config.logging.config import configure_logging, get_logger, log_best_effort_failure
from config.logging.filters import PII_FIELDS, CorrelationIdFilter, PiiRedactionFilter
from config.logging.formatters import (
    FIELD_RENAME_MAP,
    REQUIRED_LOG_FIELDS,
    create_json_formatter,
)

__all__ = [
    "FIELD_RENAME_MAP",
    "PII_FIELDS",
    "REQUIRED_LOG_FIELDS",
    # Filters
    "CorrelationIdFilter",
    "PiiRedactionFilter",
    # Configuração principal
    "configure_logging",
    # Formatters
    "create_json_formatter",
    "get_logger",
    "log_best_effort_failure",
]
