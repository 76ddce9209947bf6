"""Tradução de erros de domínio e de infraestrutura para respostas HTTP."""

from __future__ import annotations

import json
import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from app.domain.errors import BookingError, InvalidBookingRequest
from utils.errors import InfrastructureError

logger = logging.getLogger(__name__)

SERVICE_UNAVAILABLE_MESSAGE = "Serviço temporariamente indisponível. Tente novamente."


async def read_json_body(request: Request, *, required: bool = True) -> dict[str, Any]:
    """Lê o corpo JSON como dict.

    Raises:
        InvalidBookingRequest: corpo ausente (quando obrigatório), inválido ou não-objeto
    """
    raw = await request.body()
    if not raw:
        if required:
            raise InvalidBookingRequest("Corpo da requisição vazio.")
        return {}
    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise InvalidBookingRequest("JSON inválido.") from exc
    if not isinstance(payload, dict):
        raise InvalidBookingRequest("JSON deve ser um objeto.")
    return payload


async def booking_error_handler(request: Request, exc: BookingError) -> JSONResponse:
    logger.info(
        "request_rejected",
        extra={
            "component": "api",
            "path": request.url.path,
            "result": exc.kind,
            "status_code": exc.http_status,
        },
    )
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


async def infrastructure_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "infrastructure_unavailable",
        extra={
            "component": "api",
            "path": request.url.path,
            "error_type": type(exc).__name__,
        },
    )
    return JSONResponse(
        status_code=503,
        content={"error": SERVICE_UNAVAILABLE_MESSAGE, "kind": "unavailable"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(BookingError, booking_error_handler)
    app.add_exception_handler(InfrastructureError, infrastructure_error_handler)


__all__ = [
    "booking_error_handler",
    "infrastructure_error_handler",
    "read_json_body",
    "register_exception_handlers",
]
