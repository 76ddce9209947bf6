"""Testes do envio FCM HTTP v1 (credenciais e transporte mockados)."""

from __future__ import annotations

import json
from unittest.mock import MagicMock

import httpx
import pytest

from app.domain.notification import PushMessage
from app.infra.http import HttpClient, HttpClientConfig, HttpError
from app.infra.notifications import FcmPushSender, LoggingPushSender, create_push_sender
from app.infra.notifications.fcm_push_sender import build_fcm_message
from config.settings import PushSettings

SERVICE_ACCOUNT = json.dumps({"project_id": "agenda-test", "client_email": "x@y"})
MESSAGE = PushMessage(title="Novo agendamento", body="20/10 às 10:00", data={"appointment_id": "a1"})


@pytest.fixture
def credentials(monkeypatch: pytest.MonkeyPatch) -> MagicMock:
    creds = MagicMock(valid=True, token="ya29.token")
    monkeypatch.setattr(
        "google.oauth2.service_account.Credentials.from_service_account_info",
        lambda info, scopes: creds,
    )
    return creds


def _sender(handler) -> FcmPushSender:
    http = HttpClient(HttpClientConfig(max_retries=0, transport=httpx.MockTransport(handler)))
    return FcmPushSender(credentials_json=SERVICE_ACCOUNT, project_id="agenda-test", http_client=http)


def test_build_fcm_message() -> None:
    assert build_fcm_message("device-1", MESSAGE) == {
        "message": {
            "token": "device-1",
            "notification": {"title": "Novo agendamento", "body": "20/10 às 10:00"},
            "data": {"appointment_id": "a1"},
        }
    }


@pytest.mark.asyncio
async def test_send_posts_to_project_endpoint(credentials: MagicMock) -> None:
    captured: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        captured.append(request)
        return httpx.Response(200, json={"name": "projects/agenda-test/messages/1"})

    assert await _sender(handler).send("device-1", MESSAGE) is True
    assert captured[0].url.path == "/v1/projects/agenda-test/messages:send"
    assert captured[0].headers["Authorization"] == "Bearer ya29.token"
    credentials.refresh.assert_not_called()


@pytest.mark.asyncio
async def test_expired_credentials_are_refreshed(credentials: MagicMock) -> None:
    credentials.valid = False

    await _sender(lambda request: httpx.Response(200, json={})).send("device-1", MESSAGE)

    credentials.refresh.assert_called_once()


@pytest.mark.asyncio
async def test_unregistered_token_returns_false(credentials: MagicMock) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            404,
            json={
                "error": {
                    "status": "NOT_FOUND",
                    "details": [{"errorCode": "UNREGISTERED"}],
                }
            },
        )

    assert await _sender(handler).send("device-1", MESSAGE) is False


@pytest.mark.asyncio
async def test_other_errors_raise(credentials: MagicMock) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(403, json={"error": {"status": "PERMISSION_DENIED"}})

    with pytest.raises(HttpError):
        await _sender(handler).send("device-1", MESSAGE)


def test_create_push_sender_falls_back_to_logging_when_disabled() -> None:
    sender = create_push_sender(PushSettings(service_account_json=SERVICE_ACCOUNT, enabled=False))

    assert isinstance(sender, LoggingPushSender)


@pytest.mark.asyncio
async def test_logging_sender_always_succeeds() -> None:
    assert await LoggingPushSender().send("device-1", MESSAGE) is True
