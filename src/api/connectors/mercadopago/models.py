"""Modelos de resposta da API do Mercado Pago.

Parse tolerante: campos desconhecidos são ignorados e o id numérico do
pagamento vira string.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.protocols.payment_gateway import GatewayPayment, OAuthCredentials


class MpTransactionData(BaseModel):
    model_config = ConfigDict(extra="ignore")

    qr_code: str | None = None
    qr_code_base64: str | None = None
    ticket_url: str | None = None


class MpPointOfInteraction(BaseModel):
    model_config = ConfigDict(extra="ignore")

    transaction_data: MpTransactionData = Field(default_factory=MpTransactionData)


class MpPaymentResponse(BaseModel):
    """Recurso `/v1/payments/{id}` (campos usados pelo fluxo Pix)."""

    model_config = ConfigDict(extra="ignore")

    id: str
    status: str
    external_reference: str | None = None
    point_of_interaction: MpPointOfInteraction = Field(default_factory=MpPointOfInteraction)

    @field_validator("id", mode="before")
    @classmethod
    def _id_to_str(cls, value: Any) -> Any:
        return str(value) if isinstance(value, int) else value

    def to_gateway_payment(self) -> GatewayPayment:
        data = self.point_of_interaction.transaction_data
        return GatewayPayment(
            id=self.id,
            status=self.status,
            external_reference=self.external_reference,
            qr_code=data.qr_code,
            qr_code_base64=data.qr_code_base64,
            ticket_url=data.ticket_url,
        )


class MpOAuthResponse(BaseModel):
    """Resposta de `/oauth/token` (grant authorization_code)."""

    model_config = ConfigDict(extra="ignore")

    access_token: str
    user_id: str | None = None
    refresh_token: str | None = None
    expires_in: int | None = None
    scope: str | None = None
    token_type: str | None = None

    @field_validator("user_id", mode="before")
    @classmethod
    def _user_id_to_str(cls, value: Any) -> Any:
        return str(value) if isinstance(value, int) else value

    def to_credentials(self) -> OAuthCredentials:
        return OAuthCredentials(
            access_token=self.access_token,
            user_id=self.user_id,
            refresh_token=self.refresh_token,
            expires_in=self.expires_in,
            scope=self.scope,
            token_type=self.token_type,
        )


@dataclass(frozen=True, slots=True)
class MpApiError:
    """Erro retornado pela API (`{"message", "error", "status"}`)."""

    status_code: int
    error: str
    message: str


def parse_mp_error(status_code: int, payload: Any) -> MpApiError:
    if not isinstance(payload, dict):
        return MpApiError(status_code=status_code, error="unknown", message="")
    return MpApiError(
        status_code=status_code,
        error=str(payload.get("error") or "unknown"),
        message=str(payload.get("message") or ""),
    )


__all__ = [
    "MpApiError",
    "MpOAuthResponse",
    "MpPaymentResponse",
    "parse_mp_error",
]
