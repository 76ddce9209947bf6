"""Agregador de settings do Agenda Pix.

Re-exporta todas as settings e funções de cada módulo.
Organização por domínio para isolamento de mudanças.
"""

from __future__ import annotations

# Base settings
from config.settings.base import (
    BaseSettings,
    Environment,
    StoreBackend,
    StoreSettings,
    get_base_settings,
    get_store_settings,
)

# Booking settings
from config.settings.booking import (
    BookingSettings,
    get_booking_settings,
)

# Infrastructure settings
from config.settings.infra import (
    FirestoreSettings,
    get_firestore_settings,
)

# Gateway settings
from config.settings.mercadopago import (
    MERCADOPAGO_API_BASE_URL,
    MercadoPagoSettings,
    get_mercadopago_settings,
)

# Push settings
from config.settings.push import (
    FCM_API_BASE_URL,
    FCM_SCOPE,
    PushSettings,
    get_push_settings,
)

__all__ = [
    # Constants
    "FCM_API_BASE_URL",
    "FCM_SCOPE",
    "MERCADOPAGO_API_BASE_URL",
    # Base
    "BaseSettings",
    "BookingSettings",
    "Environment",
    # Infrastructure
    "FirestoreSettings",
    # Gateway
    "MercadoPagoSettings",
    "PushSettings",
    "StoreBackend",
    "StoreSettings",
    "get_base_settings",
    "get_booking_settings",
    "get_firestore_settings",
    "get_mercadopago_settings",
    "get_push_settings",
    "get_store_settings",
]
