"""Registro de métricas via structured logging.

As métricas são emitidas como logs estruturados e agregadas depois
(BigQuery, Cloud Logging metrics etc.).

Métricas suportadas:
- Latência: tempo de chamadas externas (Mercado Pago, FCM, Redis)
- Outcome: contador de resultados de agendamento e reconciliação

Uso:
    from app.observability import record_latency, record_outcome

    start = time.perf_counter()
    payment = await gateway.get_payment(...)
    record_latency("mercadopago", "get_payment", (time.perf_counter() - start) * 1000)

    record_outcome("booking", "slot_taken")
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


def record_latency(
    component: str,
    operation: str,
    latency_ms: float,
    correlation_id: str | None = None,
) -> None:
    """Registra latência de operação.

    Args:
        component: Nome do componente (ex: "mercadopago", "fcm")
        operation: Nome da operação (ex: "create_payment", "send")
        latency_ms: Latência em milissegundos
        correlation_id: ID de correlação (o filter injeta o do contexto se None)
    """
    extra: dict[str, object] = {
        "metric_type": "latency",
        "component": component,
        "operation": operation,
        "latency_ms": round(latency_ms, 2),
    }
    if correlation_id:
        extra["correlation_id"] = correlation_id
    logger.info("metric_latency", extra=extra)


def record_outcome(
    component: str,
    result: str,
    metadata: dict[str, str | int | float] | None = None,
) -> None:
    """Registra contador de resultado por componente.

    Args:
        component: "booking", "payment_gate", "reconciliation" ...
        result: "created", "resumed", "slot_taken", "quota_exceeded", "confirmed" ...
        metadata: Campos adicionais sem PII
    """
    extra: dict[str, object] = {
        "metric_type": "outcome",
        "component": component,
        "result": result,
    }
    if metadata:
        extra.update(metadata)
    logger.info("metric_outcome", extra=extra)
