"""Notificações (webhook/IPN) do Mercado Pago."""

from .normalize import PAYMENT_TOPIC, extract_payment_id, normalize_notification
from .signature import SignatureValidationError, verify_signature

__all__ = [
    "PAYMENT_TOPIC",
    "SignatureValidationError",
    "extract_payment_id",
    "normalize_notification",
    "verify_signature",
]
