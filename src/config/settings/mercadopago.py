"""Settings específicas do Mercado Pago.

Gateway Pix usado para cobrança de agendamentos e conexão OAuth
das contas dos profissionais.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

# Constantes da API
MERCADOPAGO_API_BASE_URL: str = "https://api.mercadopago.com"


@dataclass(frozen=True)
class MercadoPagoSettings:
    """Configurações do gateway Mercado Pago.

    Attributes:
        client_id: Client ID da aplicação (OAuth)
        client_secret: Client secret da aplicação (OAuth)
        redirect_url: Redirect URI registrada no OAuth
        webhook_url: URL pública do endpoint de webhook (notification_url)
        webhook_secret: Secret para validar header x-signature (opcional)
        api_base_url: URL base da API
        request_timeout_seconds: Timeout para requisições HTTP
        max_retries: Máximo de tentativas em erros retentáveis
        default_payer_email: Email usado quando o cliente não informa
    """

    # Credenciais OAuth
    client_id: str = ""
    client_secret: str = ""
    redirect_url: str = ""

    # Webhook
    webhook_url: str = ""
    webhook_secret: str = ""

    # API
    api_base_url: str = MERCADOPAGO_API_BASE_URL

    # Timeouts e retries
    request_timeout_seconds: float = 10.0
    max_retries: int = 2

    default_payer_email: str = "cliente@email.com"

    @property
    def payments_endpoint(self) -> str:
        """URL do recurso de pagamentos."""
        return f"{self.api_base_url}/v1/payments"

    @property
    def oauth_endpoint(self) -> str:
        """URL de troca de code por token."""
        return f"{self.api_base_url}/oauth/token"

    def validate(self) -> list[str]:
        """Valida configurações do Mercado Pago.

        Returns:
            Lista de erros de validação.
        """
        errors: list[str] = []

        if not self.webhook_url:
            errors.append("MP_WEBHOOK_URL não configurado (pagamentos não serão notificados)")

        if not self.client_id or not self.client_secret:
            errors.append("MP_CLIENT_ID/MP_CLIENT_SECRET obrigatórios para conexão OAuth")

        if self.request_timeout_seconds <= 0:
            errors.append("MP_REQUEST_TIMEOUT_SECONDS deve ser > 0")

        if self.max_retries < 0:
            errors.append("MP_MAX_RETRIES deve ser >= 0")

        return errors


def _load_mercadopago_from_env() -> MercadoPagoSettings:
    """Carrega MercadoPagoSettings de variáveis de ambiente."""
    return MercadoPagoSettings(
        client_id=os.getenv("MP_CLIENT_ID", ""),
        client_secret=os.getenv("MP_CLIENT_SECRET", ""),
        redirect_url=os.getenv("MP_REDIRECT_URL", ""),
        webhook_url=os.getenv("MP_WEBHOOK_URL", ""),
        webhook_secret=os.getenv("MP_WEBHOOK_SECRET", ""),
        api_base_url=os.getenv("MP_API_BASE_URL", MERCADOPAGO_API_BASE_URL),
        request_timeout_seconds=float(os.getenv("MP_REQUEST_TIMEOUT_SECONDS", "10.0")),
        max_retries=int(os.getenv("MP_MAX_RETRIES", "2")),
        default_payer_email=os.getenv("MP_DEFAULT_PAYER_EMAIL", "cliente@email.com"),
    )


@lru_cache(maxsize=1)
def get_mercadopago_settings() -> MercadoPagoSettings:
    """Retorna instância cacheada de MercadoPagoSettings."""
    return _load_mercadopago_from_env()
