"""Testes HTTP das rotas do dashboard, conexão OAuth e tokens de push."""

from __future__ import annotations

import pytest
import pytest_asyncio

from fsm.states import AppointmentStatus
from tests.fakes.app_client import build_test_client
from tests.fakes.builders import PROFESSIONAL_ID, build_harness, make_appointment

SLOT = {
    "name": "Maria Souza",
    "phone": "11987654321",
    "date": "2026-10-24",
    "time": "20:00",
}


@pytest.fixture
def harness():
    return build_harness()


@pytest.fixture
def client(harness):
    return build_test_client(harness)


def test_issue_link(client) -> None:
    response = client.post(f"/professionals/{PROFESSIONAL_ID}/links")

    assert response.status_code == 201
    assert response.json()["professional_id"] == PROFESSIONAL_ID
    assert response.json()["token"]


def test_save_business_profile(client) -> None:
    response = client.put(
        f"/professionals/{PROFESSIONAL_ID}/business-profile",
        json={"working_days": [1, 3], "start_time": "08:00", "end_time": "12:00", "service_price": 40},
    )

    assert response.status_code == 200
    assert response.json()["working_days"] == [1, 3]
    assert response.json()["service_price"] == 40


def test_business_profile_with_inverted_hours_is_rejected(client) -> None:
    response = client.put(
        f"/professionals/{PROFESSIONAL_ID}/business-profile",
        json={"start_time": "18:00", "end_time": "08:00"},
    )

    assert response.status_code == 422


def test_internal_booking_ignores_grid(client) -> None:
    response = client.post(f"/professionals/{PROFESSIONAL_ID}/appointments", json=SLOT)

    assert response.status_code == 201
    assert response.json()["appointment"]["status"] == "Confirmado"
    assert response.json()["appointment"]["source"] == "dashboard"


@pytest_asyncio.fixture
async def with_pending(harness):
    await harness.booking_store.commit_internal_booking(
        make_appointment(status=AppointmentStatus.AGUARDANDO_PAGAMENTO)
    )
    return harness


@pytest.mark.asyncio
async def test_confirm_and_cancel(with_pending) -> None:
    client = build_test_client(with_pending)
    base = f"/professionals/{PROFESSIONAL_ID}/appointments/appt-1"

    confirmed = client.post(f"{base}/confirm")
    cancelled = client.post(f"{base}/cancel")
    again = client.post(f"{base}/cancel")
    reopened = client.post(f"{base}/confirm")

    assert confirmed.json()["appointment"]["status"] == "Confirmado"
    assert cancelled.json()["appointment"]["status"] == "Cancelado"
    assert again.status_code == 200
    assert again.json()["appointment"]["status"] == "Cancelado"
    assert reopened.status_code == 409
    assert reopened.json()["kind"] == "invalid_transition"


def test_cancel_unknown_appointment_is_404(client) -> None:
    response = client.post(f"/professionals/{PROFESSIONAL_ID}/appointments/nope/cancel")

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_connect_gateway_by_redirect(harness) -> None:
    client = build_test_client(harness)

    response = client.get("/mercadopago/connect", params={"code": "TG-1", "state": PROFESSIONAL_ID})

    assert response.json() == {"success": True, "professional_id": PROFESSIONAL_ID}
    connection = await harness.payment_store.get_connection(PROFESSIONAL_ID)
    assert connection.access_token == "token-TG-1"


def test_connect_gateway_by_post_body(client) -> None:
    response = client.post("/mercadopago/connect", json={"code": "TG-2", "state": "prof-2"})

    assert response.json()["professional_id"] == "prof-2"


def test_connect_gateway_rejected_code_is_502(client) -> None:
    response = client.post("/mercadopago/connect", json={"code": "invalid", "state": PROFESSIONAL_ID})

    assert response.status_code == 502


def test_connect_gateway_without_code_is_422(client) -> None:
    response = client.get("/mercadopago/connect")

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_register_push_token(harness) -> None:
    client = build_test_client(harness)

    response = client.post(
        "/push-tokens", json={"token": "device-1", "professionalId": PROFESSIONAL_ID}
    )

    assert response.json() == {"success": True}
    assert await harness.token_store.list_tokens(PROFESSIONAL_ID) == ["device-1"]


def test_register_push_token_requires_fields(client) -> None:
    response = client.post("/push-tokens", json={"token": ""})

    assert response.status_code == 422
