"""Normalização das notificações do Mercado Pago.

Formatos aceitos (todos viram ReconciliationRequest):
- query `?type=payment&data.id=123` ou `?topic=payment&id=123` (IPN)
- body `{"action": "payment.updated", "data": {"id": "123"}}` (webhook v1)
- body `{"type": "payment", "data": {"id": "123"}}`
- body `{"id": "123", "action": "payment.updated"}` (confirmação manual/polling)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from app.services.reconciliation import DEFAULT_ACTION, ReconciliationRequest

if TYPE_CHECKING:
    from collections.abc import Mapping

PAYMENT_TOPIC = "payment"


def _as_id(value: Any) -> str | None:
    if value is None or isinstance(value, bool):
        return None
    text = str(value).strip()
    return text or None


def extract_payment_id(query: Mapping[str, str], body: Mapping[str, Any] | None) -> str | None:
    """Id do pagamento: query `data.id`/`id`, depois body `data.id`/`id`."""
    payment_id = _as_id(query.get("data.id")) or _as_id(query.get("id"))
    if payment_id or not body:
        return payment_id
    data = body.get("data")
    if isinstance(data, dict):
        payment_id = _as_id(data.get("id"))
    return payment_id or _as_id(body.get("id"))


def _is_payment_notification(topic: str | None, action: str | None) -> bool:
    if topic == PAYMENT_TOPIC:
        return True
    return bool(action) and (action == PAYMENT_TOPIC or action.startswith(f"{PAYMENT_TOPIC}."))


def normalize_notification(
    query: Mapping[str, str],
    body: Mapping[str, Any] | None,
) -> ReconciliationRequest | None:
    """Converte a notificação em ReconciliationRequest.

    Returns:
        None quando não é notificação de pagamento ou não tem id
        (a rota responde 200 "Ignored").
    """
    body = body or {}
    payment_id = extract_payment_id(query, body)
    if payment_id is None:
        return None

    topic = query.get("type") or query.get("topic") or _as_id(body.get("type"))
    action = _as_id(body.get("action"))
    if not topic and not action:
        action = DEFAULT_ACTION

    if not _is_payment_notification(topic, action):
        return None
    return ReconciliationRequest(payment_id=payment_id, action=action or DEFAULT_ACTION)


__all__ = ["PAYMENT_TOPIC", "extract_payment_id", "normalize_notification"]
