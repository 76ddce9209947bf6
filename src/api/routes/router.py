"""Agregador de rotas — registra todos os routers da API.

Uso:
    from api.routes import create_api_router

    app = FastAPI()
    app.include_router(create_api_router())
"""

from __future__ import annotations

from fastapi import APIRouter

from api.routes.booking.router import router as booking_router
from api.routes.health.router import router as health_router
from api.routes.mercadopago.router import router as mercadopago_router
from api.routes.payments.router import router as payments_router
from api.routes.professionals.router import router as professionals_router
from api.routes.push_tokens.router import router as push_tokens_router


def create_api_router() -> APIRouter:
    """Cria router principal com todos os sub-routers registrados."""
    api_router = APIRouter()

    # Health checks (sem prefixo para /health e /ready na raiz)
    api_router.include_router(health_router, tags=["health"])

    api_router.include_router(booking_router, prefix="/booking", tags=["booking"])
    api_router.include_router(payments_router, prefix="/payments", tags=["payments"])
    api_router.include_router(
        professionals_router,
        prefix="/professionals",
        tags=["professionals"],
    )
    api_router.include_router(mercadopago_router, prefix="/mercadopago", tags=["mercadopago"])
    api_router.include_router(push_tokens_router, prefix="/push-tokens", tags=["push"])

    return api_router
