"""Endpoints de health check para Cloud Run.

- GET /health: liveness (processo de pé)
- GET /ready: readiness com checagem real de Firestore e Redis e
  sinalização de configuração do Mercado Pago e do push
"""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any, Literal

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from config.settings import get_mercadopago_settings, get_push_settings, get_store_settings

if TYPE_CHECKING:
    from collections.abc import Awaitable

logger = logging.getLogger(__name__)

router = APIRouter()

CheckStatus = Literal["ok", "degraded", "failed"]

REDIS_TIMEOUT_SECONDS = 2.0
FIRESTORE_TIMEOUT_SECONDS = 3.0


class HealthResponse(BaseModel):
    status: str
    service: str
    timestamp: str
    version: str = "1.0.0"


@dataclass(frozen=True, slots=True)
class DependencyCheck:
    """Resultado de checagem de dependência."""

    status: CheckStatus
    latency_ms: float | None = None
    error: str | None = None

    def as_dict(self) -> dict[str, Any]:
        return {"status": self.status, "latency_ms": self.latency_ms, "error": self.error}


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Liveness probe."""
    return HealthResponse(
        status="healthy",
        service="agenda-pix",
        timestamp=datetime.now(UTC).isoformat(),
    )


@router.get("/ready")
async def readiness_check(request: Request) -> JSONResponse:
    """Readiness probe.

    Só o Firestore bloqueia tráfego (quando é o backend de persistência).
    Redis, push e webhook do gateway alimentam etapas best-effort ou
    assíncronas; sem eles o agendamento continua funcionando.
    """
    state = request.app.state
    firestore_check, redis_check = await asyncio.gather(
        _check_firestore(getattr(state, "firestore_client", None), get_store_settings().backend),
        _check_redis(getattr(state, "redis_client", None)),
    )
    checks = {
        "firestore": firestore_check,
        "redis": redis_check,
        "mercadopago": _check_mercadopago_config(),
        "push": _check_push_config(),
    }

    ready = firestore_check.status != "failed"
    payload = {
        "status": "ready" if ready else "not_ready",
        "checks": {name: check.as_dict() for name, check in checks.items()},
        "timestamp": datetime.now(UTC).isoformat(),
    }
    return JSONResponse(content=payload, status_code=200 if ready else 503)


async def _probe(
    name: str,
    call: Awaitable[Any],
    *,
    timeout: float,
    on_failure: CheckStatus,
) -> tuple[DependencyCheck, Any]:
    """Executa a chamada com timeout e mede latência."""
    started_at = time.perf_counter()
    try:
        result = await asyncio.wait_for(call, timeout=timeout)
    except TimeoutError:
        return DependencyCheck(status=on_failure, error="timeout"), None
    except Exception as exc:
        logger.warning(
            "readiness_check_failed",
            extra={"dependency": name, "error_type": type(exc).__name__},
        )
        return DependencyCheck(status=on_failure, error=type(exc).__name__), None
    latency_ms = round((time.perf_counter() - started_at) * 1000, 2)
    return DependencyCheck(status="ok", latency_ms=latency_ms), result


async def _check_redis(redis_client: Any | None) -> DependencyCheck:
    if redis_client is None:
        return DependencyCheck(status="degraded", error="not_configured")
    check, _ = await _probe(
        "redis", redis_client.ping(), timeout=REDIS_TIMEOUT_SECONDS, on_failure="degraded"
    )
    return check


async def _check_firestore(firestore_client: Any | None, backend: str) -> DependencyCheck:
    if backend != "firestore":
        return DependencyCheck(status="ok", error="memory_backend")
    if firestore_client is None:
        return DependencyCheck(status="failed", error="not_configured")
    check, exists = await _probe(
        "firestore",
        asyncio.to_thread(_read_firestore_health_doc, firestore_client),
        timeout=FIRESTORE_TIMEOUT_SECONDS,
        on_failure="failed",
    )
    if check.status == "ok" and not exists:
        # Documento de health ausente: leitura funcionou, seed do startup falhou
        return DependencyCheck(status="degraded", latency_ms=check.latency_ms)
    return check


def _read_firestore_health_doc(firestore_client: Any) -> bool:
    doc = firestore_client.collection("_health").document("check").get()
    return bool(getattr(doc, "exists", False))


def _check_mercadopago_config() -> DependencyCheck:
    settings = get_mercadopago_settings()
    if not settings.webhook_url:
        return DependencyCheck(status="degraded", error="webhook_url_missing")
    return DependencyCheck(status="ok")


def _check_push_config() -> DependencyCheck:
    settings = get_push_settings()
    if not settings.enabled:
        return DependencyCheck(status="degraded", error="disabled")
    if not settings.project_id:
        return DependencyCheck(status="degraded", error="invalid_service_account")
    return DependencyCheck(status="ok")
