"""Cliente HTTP do Mercado Pago (pagamentos Pix e OAuth).

Estende HttpClient genérico com:
- Bearer token do profissional por requisição
- X-Idempotency-Key = id do agendamento na criação de pagamento
- Tradução de falhas para GatewayError (sem tokens nos logs)
"""

from __future__ import annotations

import json
import logging
import time
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from api.connectors.mercadopago.models import (
    MpOAuthResponse,
    MpPaymentResponse,
    parse_mp_error,
)
from app.domain.errors import GatewayError
from app.infra.http import HttpClient, HttpClientConfig, HttpError
from app.observability import record_latency

if TYPE_CHECKING:
    import httpx

    from app.protocols.payment_gateway import (
        GatewayPayment,
        OAuthCredentials,
        PixPaymentRequest,
    )
    from config.settings import MercadoPagoSettings

logger = logging.getLogger(__name__)

PIX_PAYMENT_METHOD = "pix"


class MercadoPagoClient(HttpClient):
    """Implementa PaymentGatewayProtocol sobre a API REST do Mercado Pago."""

    def __init__(
        self,
        settings: MercadoPagoSettings,
        config: HttpClientConfig | None = None,
    ) -> None:
        super().__init__(
            config
            or HttpClientConfig(
                timeout_seconds=settings.request_timeout_seconds,
                max_retries=settings.max_retries,
            )
        )
        self._settings = settings

    @staticmethod
    def _auth_headers(access_token: str) -> dict[str, str]:
        if not access_token or not access_token.strip():
            raise GatewayError("Conexão com Mercado Pago sem access_token.")
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {access_token}",
        }

    async def create_pix_payment(
        self,
        access_token: str,
        request: PixPaymentRequest,
    ) -> GatewayPayment:
        headers = {
            **self._auth_headers(access_token),
            "X-Idempotency-Key": request.appointment_id,
        }
        body: dict[str, Any] = {
            "transaction_amount": request.amount,
            "description": request.description,
            "payment_method_id": PIX_PAYMENT_METHOD,
            "payer": {"email": request.payer_email},
            "external_reference": request.appointment_id,
        }
        if self._settings.webhook_url:
            body["notification_url"] = self._settings.webhook_url

        response = await self._call(
            "create_payment", "POST", self._settings.payments_endpoint, body, headers
        )
        return self._parse_payment(response, "create_payment")

    async def get_payment(self, access_token: str, payment_id: str) -> GatewayPayment:
        url = f"{self._settings.payments_endpoint}/{payment_id}"
        response = await self._call(
            "get_payment", "GET", url, None, self._auth_headers(access_token)
        )
        return self._parse_payment(response, "get_payment")

    async def exchange_oauth_code(self, code: str) -> OAuthCredentials:
        body = {
            "client_id": self._settings.client_id,
            "client_secret": self._settings.client_secret,
            "grant_type": "authorization_code",
            "code": code,
            "redirect_uri": self._settings.redirect_url,
        }
        response = await self._call(
            "oauth_token",
            "POST",
            self._settings.oauth_endpoint,
            body,
            {"Content-Type": "application/json"},
        )
        try:
            return MpOAuthResponse.model_validate(response.json()).to_credentials()
        except (json.JSONDecodeError, ValidationError) as exc:
            logger.error("mercadopago_invalid_response", extra={"operation": "oauth_token"})
            raise GatewayError() from exc

    async def _call(
        self,
        operation: str,
        method: str,
        url: str,
        body: dict[str, Any] | None,
        headers: dict[str, str],
    ) -> httpx.Response:
        start = time.perf_counter()
        try:
            response = await self.request(method, url, json=body, headers=headers)
        except HttpError as exc:
            logger.warning(
                "mercadopago_request_failed",
                extra={
                    "operation": operation,
                    "status_code": exc.status_code,
                    "is_retryable": exc.is_retryable,
                },
            )
            raise GatewayError() from exc
        finally:
            record_latency("mercadopago", operation, (time.perf_counter() - start) * 1000)

        if response.status_code >= 400:
            try:
                payload = response.json()
            except json.JSONDecodeError:
                payload = None
            error = parse_mp_error(response.status_code, payload)
            logger.warning(
                "mercadopago_api_error",
                extra={
                    "operation": operation,
                    "status_code": error.status_code,
                    "error_code": error.error,
                },
            )
            raise GatewayError()
        return response

    @staticmethod
    def _parse_payment(response: httpx.Response, operation: str) -> GatewayPayment:
        try:
            return MpPaymentResponse.model_validate(response.json()).to_gateway_payment()
        except (json.JSONDecodeError, ValidationError) as exc:
            logger.error("mercadopago_invalid_response", extra={"operation": operation})
            raise GatewayError() from exc


def create_mercadopago_client(settings: MercadoPagoSettings | None = None) -> MercadoPagoClient:
    """Factory com settings do ambiente."""
    from config.settings import get_mercadopago_settings

    return MercadoPagoClient(settings or get_mercadopago_settings())


__all__ = ["PIX_PAYMENT_METHOD", "MercadoPagoClient", "create_mercadopago_client"]
