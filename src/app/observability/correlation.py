"""Correlation_id por requisição (HTTP e webhook do gateway).

Usa ContextVar, então cada requisição async enxerga o próprio valor e os
filters de logging o injetam em todo record.

Uso:
    from app.observability import correlation_scope

    with correlation_scope(request.headers.get(CORRELATION_HEADER)):
        ...  # logs aqui carregam o mesmo correlation_id
"""

from __future__ import annotations

import uuid
from contextlib import contextmanager
from contextvars import ContextVar, Token
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Iterator

    from fastapi import Request, Response

CORRELATION_HEADER = "x-correlation-id"

_correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")


def get_correlation_id() -> str:
    """Retorna o correlation_id corrente ou string vazia."""
    return _correlation_id.get()


def set_correlation_id(correlation_id: str | None = None) -> Token[str]:
    """Define o correlation_id (gera uuid4 se ausente) e retorna token de reset."""
    return _correlation_id.set(correlation_id or generate_correlation_id())


def reset_correlation_id(token: Token[str]) -> None:
    _correlation_id.reset(token)


def generate_correlation_id() -> str:
    return str(uuid.uuid4())


@contextmanager
def correlation_scope(correlation_id: str | None = None) -> Iterator[str]:
    """Define correlation_id durante o bloco e restaura o anterior ao sair."""
    token = set_correlation_id(correlation_id)
    try:
        yield _correlation_id.get()
    finally:
        reset_correlation_id(token)


async def correlation_middleware(
    request: Request,
    call_next: Callable[[Request], Awaitable[Response]],
) -> Response:
    """Middleware HTTP: propaga `x-correlation-id` do request para a resposta."""
    with correlation_scope(request.headers.get(CORRELATION_HEADER)) as correlation_id:
        response = await call_next(request)
        response.headers[CORRELATION_HEADER] = correlation_id
        return response
