"""Protocolos e contratos do core da aplicação."""

from .booking_store import BookingCommit, BookingStoreProtocol
from .notifier import PushSenderProtocol, RealtimePublisherProtocol
from .payment_gateway import (
    GatewayPayment,
    OAuthCredentials,
    PaymentGatewayProtocol,
    PixPaymentRequest,
)
from .payment_store import PaymentStoreProtocol
from .push_token_store import PushTokenStoreProtocol

__all__ = [
    "BookingCommit",
    "BookingStoreProtocol",
    "GatewayPayment",
    "OAuthCredentials",
    "PaymentGatewayProtocol",
    "PaymentStoreProtocol",
    "PixPaymentRequest",
    "PushSenderProtocol",
    "PushTokenStoreProtocol",
    "RealtimePublisherProtocol",
]
