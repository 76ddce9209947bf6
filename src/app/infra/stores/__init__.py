"""Stores — implementações concretas de persistência.

Módulos disponíveis:
    - firestore_booking_store: Links, agendamentos, perfis e uso (transacional)
    - firestore_payment_store: Pagamentos Pix e conexões com o gateway
    - firestore_push_token_store: Tokens de push por dispositivo
    - memory_stores: Stores em memória para desenvolvimento/testes
"""

from __future__ import annotations

from app.infra.stores.memory_stores import (
    MemoryBookingStore,
    MemoryPaymentStore,
    MemoryPushTokenStore,
)

__all__ = [
    # Memory (dev/test)
    "MemoryBookingStore",
    "MemoryPaymentStore",
    "MemoryPushTokenStore",
]
