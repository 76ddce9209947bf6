"""Push via Firebase Cloud Messaging HTTP v1.

Token OAuth obtido da service account (escopo firebase.messaging) e
renovado em thread quando expira; envio via HttpClient (httpx).
"""

from __future__ import annotations

import asyncio
import json
import logging
import time
from typing import TYPE_CHECKING, Any

from google.auth.transport.requests import Request as GoogleAuthRequest
from google.oauth2 import service_account

from app.infra.http import HttpClient, HttpClientConfig, HttpError
from app.observability import record_latency
from config.settings import FCM_API_BASE_URL, FCM_SCOPE

if TYPE_CHECKING:
    from app.domain.notification import PushMessage
    from config.settings import PushSettings

logger = logging.getLogger(__name__)

_COMPONENT = "fcm_push_sender"

# Códigos FCM que indicam token que não deve mais ser usado
_INVALID_TOKEN_CODES = frozenset({"UNREGISTERED", "INVALID_ARGUMENT", "NOT_FOUND"})


def build_fcm_message(token: str, message: PushMessage) -> dict[str, Any]:
    return {
        "message": {
            "token": token,
            "notification": {"title": message.title, "body": message.body},
            "data": dict(message.data),
        }
    }


def _fcm_error_code(payload: Any) -> str:
    if not isinstance(payload, dict):
        return ""
    error = payload.get("error")
    if not isinstance(error, dict):
        return ""
    for detail in error.get("details") or []:
        if isinstance(detail, dict) and detail.get("errorCode"):
            return str(detail["errorCode"])
    return str(error.get("status") or "")


class FcmPushSender:
    """Implementa PushSenderProtocol com FCM HTTP v1."""

    def __init__(
        self,
        *,
        credentials_json: str,
        project_id: str,
        http_client: HttpClient | None = None,
        timeout_seconds: float = 5.0,
    ) -> None:
        self._credentials = service_account.Credentials.from_service_account_info(
            json.loads(credentials_json),
            scopes=[FCM_SCOPE],
        )
        self._endpoint = f"{FCM_API_BASE_URL}/projects/{project_id}/messages:send"
        self._http = http_client or HttpClient(
            HttpClientConfig(timeout_seconds=timeout_seconds, max_retries=1)
        )
        self._refresh_lock = asyncio.Lock()

    async def _access_token(self) -> str:
        async with self._refresh_lock:
            if not self._credentials.valid:
                await asyncio.to_thread(self._credentials.refresh, GoogleAuthRequest())
            return str(self._credentials.token)

    async def send(self, token: str, message: PushMessage) -> bool:
        headers = {
            "Authorization": f"Bearer {await self._access_token()}",
            "Content-Type": "application/json",
        }
        start = time.perf_counter()
        try:
            response = await self._http.post(
                self._endpoint, json=build_fcm_message(token, message), headers=headers
            )
        finally:
            record_latency("fcm", "send", (time.perf_counter() - start) * 1000)

        if response.status_code < 400:
            return True

        try:
            payload = response.json()
        except json.JSONDecodeError:
            payload = None
        code = _fcm_error_code(payload)
        if response.status_code in (400, 404) and code in _INVALID_TOKEN_CODES:
            logger.info(
                "fcm_token_invalid",
                extra={"component": _COMPONENT, "status_code": response.status_code, "error_code": code},
            )
            return False
        raise HttpError("fcm_send_failed", status_code=response.status_code)


class LoggingPushSender:
    """Fallback quando push está desabilitado: apenas registra o envio."""

    async def send(self, token: str, message: PushMessage) -> bool:
        logger.info("push_disabled_skip", extra={"component": "push_sender", "title": message.title})
        return True


def create_push_sender(settings: PushSettings) -> FcmPushSender | LoggingPushSender:
    if not settings.enabled or not settings.service_account_json:
        return LoggingPushSender()
    return FcmPushSender(
        credentials_json=settings.service_account_json,
        project_id=settings.project_id,
        timeout_seconds=settings.request_timeout_seconds,
    )


__all__ = ["FcmPushSender", "LoggingPushSender", "build_fcm_message", "create_push_sender"]
