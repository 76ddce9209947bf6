"""Factories de dependências — criação de implementações concretas.

Centraliza a escolha de backend (STORE_BACKEND) e dos adapters de
gateway e notificação a partir das settings do ambiente.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from api.connectors.mercadopago import create_mercadopago_client
from app.bootstrap.clients import create_async_redis_client, create_firestore_client
from app.infra.notifications import (
    LoggingRealtimePublisher,
    RedisRealtimePublisher,
    create_push_sender,
)
from app.infra.stores import MemoryBookingStore, MemoryPaymentStore, MemoryPushTokenStore
from app.services.notifications import NotificationService
from config.settings import (
    get_base_settings,
    get_booking_settings,
    get_firestore_settings,
    get_push_settings,
    get_store_settings,
)

if TYPE_CHECKING:
    from app.protocols import (
        BookingStoreProtocol,
        PaymentGatewayProtocol,
        PaymentStoreProtocol,
        PushTokenStoreProtocol,
        RealtimePublisherProtocol,
    )

logger = logging.getLogger(__name__)


def _warn_memory_backend(store: str) -> None:
    base = get_base_settings()
    if not base.is_development:
        logger.warning(
            "memory_store_in_non_dev",
            extra={"backend": "memory", "store": store, "environment": base.environment},
        )


# ──────────────────────────────────────────────────────────────────────────────
# Store Factories
# ──────────────────────────────────────────────────────────────────────────────


def create_booking_store() -> BookingStoreProtocol:
    """Cria store de agendamentos conforme STORE_BACKEND.

    - "memory": MemoryBookingStore (dev/test, sem atomicidade entre instâncias)
    - "firestore": FirestoreBookingStore (staging/production)
    """
    backend = get_store_settings().backend

    if backend == "firestore":
        from app.infra.stores.firestore_booking_store import FirestoreBookingStore

        store = FirestoreBookingStore(create_firestore_client(), get_firestore_settings())
        logger.info("booking_store_created", extra={"backend": "firestore"})
        return store

    _warn_memory_backend("booking")
    logger.info("booking_store_created", extra={"backend": "memory"})
    return MemoryBookingStore()


def create_payment_store() -> PaymentStoreProtocol:
    """Cria store de intents e conexões do gateway."""
    backend = get_store_settings().backend

    if backend == "firestore":
        from app.infra.stores.firestore_payment_store import FirestorePaymentStore

        store = FirestorePaymentStore(create_firestore_client(), get_firestore_settings())
        logger.info("payment_store_created", extra={"backend": "firestore"})
        return store

    _warn_memory_backend("payment")
    logger.info("payment_store_created", extra={"backend": "memory"})
    return MemoryPaymentStore()


def create_push_token_store() -> PushTokenStoreProtocol:
    """Cria store de tokens de push."""
    backend = get_store_settings().backend

    if backend == "firestore":
        from app.infra.stores.firestore_push_token_store import FirestorePushTokenStore

        store = FirestorePushTokenStore(create_firestore_client(), get_firestore_settings())
        logger.info("push_token_store_created", extra={"backend": "firestore"})
        return store

    logger.info("push_token_store_created", extra={"backend": "memory"})
    return MemoryPushTokenStore()


# ──────────────────────────────────────────────────────────────────────────────
# Adapters
# ──────────────────────────────────────────────────────────────────────────────


def create_payment_gateway() -> PaymentGatewayProtocol:
    """Cria cliente do Mercado Pago."""
    return create_mercadopago_client()


def create_realtime_publisher() -> RealtimePublisherProtocol:
    """Publisher Redis quando REDIS_URL existe; senão apenas loga."""
    if not get_base_settings().realtime_enabled:
        logger.info("realtime_publisher_created", extra={"backend": "logging"})
        return LoggingRealtimePublisher()
    logger.info("realtime_publisher_created", extra={"backend": "redis"})
    return RedisRealtimePublisher(create_async_redis_client())


def create_notification_service(
    token_store: PushTokenStoreProtocol,
) -> NotificationService:
    """Compõe push + realtime com timeout do best-effort."""
    return NotificationService(
        push_sender=create_push_sender(get_push_settings()),
        realtime_publisher=create_realtime_publisher(),
        token_store=token_store,
        timeout_seconds=get_booking_settings().notification_timeout_seconds,
    )
