"""Testes dos use cases de configuração do profissional."""

from __future__ import annotations

import pytest

from app.domain.errors import GatewayError, InvalidBookingRequest
from app.infra.stores import MemoryBookingStore, MemoryPaymentStore, MemoryPushTokenStore
from app.use_cases.professional import (
    ConnectGatewayUseCase,
    RegisterPushTokenUseCase,
    SaveBusinessProfileUseCase,
)
from tests.fakes.fake_payment_gateway import FakePaymentGateway


class TestSaveBusinessProfile:
    @pytest.mark.asyncio
    async def test_saves_profile_with_string_weekday_keys(self) -> None:
        store = MemoryBookingStore()
        use_case = SaveBusinessProfileUseCase(store)

        profile = await use_case.execute(
            "prof-1",
            {
                "working_days": [1, 3, 5],
                "start_time": "08:00",
                "end_time": "12:00",
                "blocked_times": {"1": ["10:00"]},
                "blocked_dates": ["2026-12-25"],
                "service_price": 40,
            },
        )

        assert profile.blocked_times_for(1) == frozenset({"10:00"})
        assert profile.requires_payment is True
        assert await store.get_business_profile("prof-1") == profile

    @pytest.mark.asyncio
    async def test_null_fields_fall_back_to_defaults(self) -> None:
        use_case = SaveBusinessProfileUseCase(MemoryBookingStore())

        profile = await use_case.execute("prof-1", {"start_time": None, "service_price": None})

        assert profile.start_time == "09:00"
        assert profile.service_price == 0

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "payload",
        [
            {"start_time": "18:00", "end_time": "09:00"},
            {"start_time": "9h"},
            {"working_days": [7]},
            {"service_price": -1},
        ],
        ids=["start_after_end", "bad_time", "bad_weekday", "negative_price"],
    )
    async def test_rejects_invalid_profile(self, payload: dict) -> None:
        use_case = SaveBusinessProfileUseCase(MemoryBookingStore())

        with pytest.raises(InvalidBookingRequest):
            await use_case.execute("prof-1", payload)


class TestConnectGateway:
    @pytest.mark.asyncio
    async def test_stores_connection_for_state(self) -> None:
        store = MemoryPaymentStore()
        use_case = ConnectGatewayUseCase(store, FakePaymentGateway())

        connection = await use_case.execute("code-1", "prof-1")

        assert connection.professional_id == "prof-1"
        stored = await store.get_connection("prof-1")
        assert stored.access_token == "token-code-1"
        assert stored.mp_user_id == "mp-user-1"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("code, state", [(None, "prof-1"), ("code-1", None), ("", "")])
    async def test_requires_code_and_state(self, code, state) -> None:
        use_case = ConnectGatewayUseCase(MemoryPaymentStore(), FakePaymentGateway())

        with pytest.raises(InvalidBookingRequest):
            await use_case.execute(code, state)

    @pytest.mark.asyncio
    async def test_gateway_refusal_is_not_stored(self) -> None:
        store = MemoryPaymentStore()
        use_case = ConnectGatewayUseCase(store, FakePaymentGateway())

        with pytest.raises(GatewayError):
            await use_case.execute("invalid", "prof-1")

        assert await store.get_connection("prof-1") is None


class TestRegisterPushToken:
    @pytest.mark.asyncio
    async def test_token_is_reassigned_to_last_professional(self) -> None:
        store = MemoryPushTokenStore()
        use_case = RegisterPushTokenUseCase(store)

        await use_case.execute("device-1", "prof-1")
        await use_case.execute("device-1", "prof-2")

        assert await store.list_tokens("prof-1") == []
        assert await store.list_tokens("prof-2") == ["device-1"]

    @pytest.mark.asyncio
    async def test_requires_token(self) -> None:
        use_case = RegisterPushTokenUseCase(MemoryPushTokenStore())

        with pytest.raises(InvalidBookingRequest):
            await use_case.execute(None, "prof-1")
