"""Testes HTTP das rotas de pagamento Pix e do webhook."""

from __future__ import annotations

import hashlib
import hmac

import pytest
import pytest_asyncio

from app.domain.business_profile import BusinessProfile
from app.infra.stores import MemoryBookingStore
from fsm.states import AppointmentStatus
from tests.fakes.app_client import build_test_client
from tests.fakes.builders import PROFESSIONAL_ID, build_harness, make_appointment


@pytest_asyncio.fixture
async def paid_setup():
    harness = build_harness()
    await harness.connect_gateway()
    await harness.booking_store.save_business_profile(
        BusinessProfile(professional_id=PROFESSIONAL_ID, service_price=80)
    )
    await harness.booking_store.commit_internal_booking(
        make_appointment(status=AppointmentStatus.AGUARDANDO_PAGAMENTO)
    )
    return harness, build_test_client(harness)


def _create_payment(client) -> dict:
    response = client.post(
        "/payments",
        json={"professionalId": PROFESSIONAL_ID, "appointmentId": "appt-1", "amount": 80},
    )
    assert response.status_code == 200
    return response.json()


@pytest.mark.asyncio
async def test_create_payment_returns_qr(paid_setup) -> None:
    harness, client = paid_setup

    qr = _create_payment(client)

    assert qr["id"] == "mp-1"
    assert qr["status"] == "pending"
    assert qr["qr_code"].startswith("pix-copia-e-cola")
    assert harness.gateway.created[0].payer_email == "cliente@agenda.test"


@pytest.mark.asyncio
async def test_create_payment_is_idempotent_per_appointment(paid_setup) -> None:
    harness, client = paid_setup

    first = _create_payment(client)
    second = _create_payment(client)

    assert first["id"] == second["id"]
    assert len(harness.gateway.created) == 1


@pytest.mark.asyncio
async def test_retrieve_action(paid_setup) -> None:
    _, client = paid_setup
    created = _create_payment(client)

    response = client.post(
        "/payments",
        json={"professionalId": PROFESSIONAL_ID, "action": "retrieve", "paymentId": created["id"]},
    )

    assert response.json()["id"] == created["id"]


def test_create_payment_without_professional_is_422() -> None:
    client = build_test_client(build_harness())

    response = client.post("/payments", json={"appointmentId": "appt-1", "amount": 80})

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_disconnected_professional_is_400() -> None:
    harness = build_harness()
    await harness.booking_store.save_business_profile(
        BusinessProfile(professional_id=PROFESSIONAL_ID, service_price=80)
    )
    await harness.booking_store.commit_internal_booking(
        make_appointment(status=AppointmentStatus.AGUARDANDO_PAGAMENTO)
    )
    client = build_test_client(harness)

    response = client.post(
        "/payments",
        json={"professionalId": PROFESSIONAL_ID, "appointmentId": "appt-1", "amount": 80},
    )

    assert response.status_code == 400
    assert response.json()["kind"] == "disconnected"


@pytest.mark.asyncio
async def test_payment_for_foreign_appointment_is_404(paid_setup) -> None:
    harness, client = paid_setup
    await harness.connect_gateway("outro-prof")

    response = client.post(
        "/payments",
        json={"professionalId": "outro-prof", "appointmentId": "appt-1", "amount": 0.01},
    )

    assert response.status_code == 404
    assert response.json()["kind"] == "appointment_not_found"
    assert harness.gateway.created == []


@pytest.mark.asyncio
async def test_payment_for_confirmed_appointment_is_409(paid_setup) -> None:
    harness, client = paid_setup
    await harness.booking_store.transition_status(
        "appt-1", AppointmentStatus.AGUARDANDO_PAGAMENTO, AppointmentStatus.CONFIRMADO
    )

    response = client.post(
        "/payments",
        json={"professionalId": PROFESSIONAL_ID, "appointmentId": "appt-1", "amount": 80},
    )

    assert response.status_code == 409
    assert response.json()["kind"] == "payment_not_required"


@pytest.mark.asyncio
async def test_payment_amount_below_price_is_422(paid_setup) -> None:
    harness, client = paid_setup

    response = client.post(
        "/payments",
        json={"professionalId": PROFESSIONAL_ID, "appointmentId": "appt-1", "amount": 0.01},
    )

    assert response.status_code == 422
    assert harness.gateway.created == []


@pytest.mark.asyncio
async def test_webhook_confirms_approved_payment(paid_setup) -> None:
    harness, client = paid_setup
    payment_id = _create_payment(client)["id"]
    harness.gateway.approve(payment_id)

    response = client.post(
        "/payments/webhook", json={"action": "payment.updated", "data": {"id": payment_id}}
    )

    assert response.status_code == 200
    assert response.json() == {
        "received": True,
        "result": "applied",
        "payment_status": "approved",
        "appointment_status": "Confirmado",
        "transitioned": True,
    }
    store: MemoryBookingStore = harness.booking_store
    assert (await store.get_appointment("appt-1")).status == AppointmentStatus.CONFIRMADO


@pytest.mark.asyncio
async def test_webhook_ipn_get_with_pending_payment(paid_setup) -> None:
    _, client = paid_setup
    payment_id = _create_payment(client)["id"]

    response = client.get("/payments/webhook", params={"topic": "payment", "id": payment_id})

    assert response.json()["payment_status"] == "pending"
    assert response.json()["transitioned"] is False


def test_webhook_unknown_payment_is_noop() -> None:
    client = build_test_client(build_harness())

    response = client.post("/payments/webhook", json={"data": {"id": "mp-999"}, "type": "payment"})

    assert response.status_code == 200
    assert response.json() == {"received": True, "result": "noop", "reason": "unknown_payment"}


def test_webhook_other_topic_is_ignored() -> None:
    client = build_test_client(build_harness())

    response = client.post("/payments/webhook", json={"type": "plan", "data": {"id": "1"}})

    assert response.status_code == 200
    assert response.text == "Ignored"


@pytest.mark.asyncio
async def test_webhook_gateway_failure_is_502(paid_setup) -> None:
    harness, client = paid_setup
    payment_id = _create_payment(client)["id"]
    harness.gateway.fail_next_get = True

    response = client.post("/payments/webhook", json={"data": {"id": payment_id}})

    assert response.status_code == 502
    assert response.json()["kind"] == "gateway_error"


def test_webhook_rejects_invalid_signature(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MP_WEBHOOK_SECRET", "whsec")
    client = build_test_client(build_harness())

    response = client.post(
        "/payments/webhook?data.id=123&type=payment",
        json={"data": {"id": "123"}},
        headers={"x-signature": "ts=1,v1=deadbeef", "x-request-id": "req-1"},
    )

    assert response.status_code == 401


def test_webhook_accepts_valid_signature(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MP_WEBHOOK_SECRET", "whsec")
    client = build_test_client(build_harness())
    manifest = "id:123;request-id:req-1;ts:1;"
    digest = hmac.new(b"whsec", manifest.encode(), hashlib.sha256).hexdigest()

    response = client.post(
        "/payments/webhook?data.id=123&type=payment",
        json={"data": {"id": "123"}},
        headers={"x-signature": f"ts=1,v1={digest}", "x-request-id": "req-1"},
    )

    assert response.status_code == 200
    assert response.json()["reason"] == "unknown_payment"
