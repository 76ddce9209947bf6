"""Settings de push notification (Firebase Cloud Messaging HTTP v1)."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from functools import lru_cache

FCM_SCOPE: str = "https://www.googleapis.com/auth/firebase.messaging"
FCM_API_BASE_URL: str = "https://fcm.googleapis.com/v1"


@dataclass(frozen=True)
class PushSettings:
    """Configurações de push notification.

    Attributes:
        service_account_json: JSON da service account (FCM_SERVICE_ACCOUNT_KEY)
        enabled: Feature flag do envio real
        request_timeout_seconds: Timeout de cada envio
    """

    service_account_json: str = ""
    enabled: bool = False
    request_timeout_seconds: float = 5.0

    @property
    def project_id(self) -> str:
        """project_id extraído da service account (vazio se inválida)."""
        if not self.service_account_json:
            return ""
        try:
            info = json.loads(self.service_account_json)
        except json.JSONDecodeError:
            return ""
        return str(info.get("project_id", "")) if isinstance(info, dict) else ""

    def validate(self) -> list[str]:
        """Valida configurações de push.

        Returns:
            Lista de erros de validação.
        """
        errors: list[str] = []
        if not self.enabled:
            return errors

        if not self.service_account_json:
            errors.append("PUSH_ENABLED=true requer FCM_SERVICE_ACCOUNT_KEY")
        elif not self.project_id:
            errors.append("FCM_SERVICE_ACCOUNT_KEY inválido (project_id ausente)")

        if self.request_timeout_seconds <= 0:
            errors.append("PUSH_REQUEST_TIMEOUT_SECONDS deve ser > 0")

        return errors


def _load_push_from_env() -> PushSettings:
    """Carrega PushSettings de variáveis de ambiente."""
    return PushSettings(
        service_account_json=os.getenv("FCM_SERVICE_ACCOUNT_KEY", ""),
        enabled=os.getenv("PUSH_ENABLED", "false").lower() in ("true", "1", "yes"),
        request_timeout_seconds=float(os.getenv("PUSH_REQUEST_TIMEOUT_SECONDS", "5.0")),
    )


@lru_cache(maxsize=1)
def get_push_settings() -> PushSettings:
    """Retorna instância cacheada de PushSettings."""
    return _load_push_from_env()
