"""Endpoints de pagamento Pix.

Endpoints:
- POST /payments: cria (ou reaproveita) o Pix do agendamento;
  `{"action": "retrieve"}` consulta um pagamento existente
- POST|GET /payments/webhook: notificações do Mercado Pago, "já paguei"
  manual e polling do cliente (todos viram ReconciliationRequest)
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse

from api.connectors.mercadopago.webhook import (
    SignatureValidationError,
    extract_payment_id,
    normalize_notification,
    verify_signature,
)
from api.routes.errors import read_json_body
from app.bootstrap import get_payment_gate, get_reconciliation_service
from app.domain.errors import InvalidBookingRequest
from app.services.payment_gate import PaymentGate
from app.services.reconciliation import (
    ReconciliationNoop,
    ReconciliationService,
)
from config.settings import get_mercadopago_settings

logger = logging.getLogger(__name__)

router = APIRouter()

RETRIEVE_ACTION = "retrieve"


def _required_str(payload: dict[str, Any], field: str) -> str:
    value = payload.get(field)
    if value is None or not str(value).strip():
        raise InvalidBookingRequest(f"Campo obrigatório: {field}")
    return str(value).strip()


def _amount(payload: dict[str, Any]) -> float:
    try:
        return float(payload.get("amount"))
    except (TypeError, ValueError) as exc:
        raise InvalidBookingRequest("Campo inválido: amount") from exc


@router.post("")
async def create_payment(
    request: Request,
    gate: PaymentGate = Depends(get_payment_gate),
) -> dict[str, Any]:
    payload = await read_json_body(request)
    professional_id = _required_str(payload, "professionalId")

    if payload.get("action") == RETRIEVE_ACTION:
        qr = await gate.retrieve_intent(_required_str(payload, "paymentId"), professional_id)
        return qr.model_dump()

    qr = await gate.create_intent(
        appointment_id=_required_str(payload, "appointmentId"),
        amount=_amount(payload),
        professional_id=professional_id,
        payer_email=payload.get("payerEmail") or None,
        description=payload.get("description") or None,
    )
    return qr.model_dump()


def _check_signature(request: Request, payment_id: str | None) -> None:
    """Valida x-signature quando há secret e o header veio.

    O "já paguei" manual não é assinado; a reconciliação sempre consulta
    o status real no gateway, então uma notificação forjada só causa uma
    consulta extra.
    """
    secret = get_mercadopago_settings().webhook_secret
    signature_header = request.headers.get("x-signature")
    if not secret or not signature_header:
        return
    data_id = request.query_params.get("data.id") or payment_id
    verify_signature(
        signature_header=signature_header,
        request_id=request.headers.get("x-request-id"),
        data_id=data_id,
        secret=secret,
    )


@router.api_route("/webhook", methods=["GET", "POST"])
async def payment_webhook(
    request: Request,
    reconciliation: ReconciliationService = Depends(get_reconciliation_service),
) -> Response:
    body = await read_json_body(request, required=False) if request.method == "POST" else {}
    query = dict(request.query_params)

    try:
        _check_signature(request, extract_payment_id(query, body))
    except SignatureValidationError as exc:
        logger.warning(
            "webhook_signature_invalid",
            extra={"component": "payments_webhook", "reason": str(exc)},
        )
        return JSONResponse(status_code=401, content={"error": "Assinatura inválida."})

    reconciliation_request = normalize_notification(query, body)
    if reconciliation_request is None:
        logger.info(
            "webhook_ignored",
            extra={"component": "payments_webhook", "result": "ignored"},
        )
        return Response(content="Ignored", media_type="text/plain", status_code=200)

    # GatewayError propaga: 502 faz o Mercado Pago reenviar a notificação
    result = await reconciliation.reconcile(reconciliation_request)
    if isinstance(result, ReconciliationNoop):
        return JSONResponse(content={"received": True, "result": "noop", "reason": result.reason})

    return JSONResponse(
        content={
            "received": True,
            "result": "applied",
            "payment_status": result.payment_status,
            "appointment_status": result.appointment_status,
            "transitioned": result.transitioned,
        }
    )
