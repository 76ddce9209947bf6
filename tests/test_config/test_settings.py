"""Testes de carga e validação das settings por domínio."""

from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from config.settings import (
    BaseSettings,
    BookingSettings,
    FirestoreSettings,
    MercadoPagoSettings,
    PushSettings,
    StoreSettings,
    get_base_settings,
    get_booking_settings,
    get_mercadopago_settings,
    get_push_settings,
    get_store_settings,
)


class TestBaseSettings:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [("prod", "production"), ("STAGE", "staging"), ("qualquer", "development")],
    )
    def test_environment_aliases(
        self, monkeypatch: pytest.MonkeyPatch, raw: str, expected: str
    ) -> None:
        monkeypatch.setenv("ENVIRONMENT", raw)

        assert get_base_settings().environment == expected

    def test_redis_required_outside_development(self) -> None:
        errors = BaseSettings(environment="production").validate()

        assert any("REDIS_URL" in error for error in errors)
        assert BaseSettings(environment="production", redis_url="redis://r:6379").validate() == []

    def test_development_runs_without_realtime(self) -> None:
        settings = BaseSettings()

        assert settings.validate() == []
        assert settings.is_strict is False
        assert settings.realtime_enabled is False
        assert BaseSettings(environment="staging").is_strict is True


class TestStoreSettings:
    def test_default_backend_is_memory(self) -> None:
        assert get_store_settings().backend == "memory"

    def test_memory_forbidden_in_production(self) -> None:
        base = BaseSettings(environment="production", redis_url="redis://r")

        assert StoreSettings(backend="memory").validate(base)
        assert StoreSettings(backend="firestore").validate(
            BaseSettings(environment="production", redis_url="redis://r", gcp_project="p")
        ) == []

    def test_unknown_backend_falls_back_to_memory(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("STORE_BACKEND", "postgres")

        assert get_store_settings().backend == "memory"

    def test_firestore_needs_project(self) -> None:
        assert FirestoreSettings().validate("")
        assert FirestoreSettings().validate("gcp-project") == []


class TestBookingSettings:
    def test_env_loading(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TRIAL_DAILY_LIMIT", "3")
        monkeypatch.setenv("BOOKING_TIMEZONE", "America/Manaus")

        settings = get_booking_settings()

        assert settings.trial_daily_limit == 3
        assert settings.timezone == "America/Manaus"
        assert settings.validate_runtime() == []

    def test_invalid_timezone(self) -> None:
        assert BookingSettings(timezone="Marte/Olympus").validate_runtime()

    def test_limit_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            BookingSettings(trial_daily_limit=0)


class TestMercadoPagoSettings:
    def test_endpoints(self) -> None:
        settings = MercadoPagoSettings(api_base_url="https://mp.test")

        assert settings.payments_endpoint == "https://mp.test/v1/payments"
        assert settings.oauth_endpoint == "https://mp.test/oauth/token"

    def test_env_loading(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MP_WEBHOOK_SECRET", "whsec")
        monkeypatch.setenv("MP_MAX_RETRIES", "4")

        settings = get_mercadopago_settings()

        assert settings.webhook_secret == "whsec"
        assert settings.max_retries == 4

    def test_validation(self) -> None:
        assert len(MercadoPagoSettings().validate()) == 2
        complete = MercadoPagoSettings(
            client_id="id", client_secret="secret", webhook_url="https://a/payments/webhook"
        )
        assert complete.validate() == []


class TestPushSettings:
    def test_project_id_from_service_account(self) -> None:
        settings = PushSettings(service_account_json=json.dumps({"project_id": "agenda"}))

        assert settings.project_id == "agenda"
        assert PushSettings(service_account_json="{not json").project_id == ""

    def test_disabled_push_needs_nothing(self) -> None:
        assert PushSettings().validate() == []

    def test_enabled_push_needs_key(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PUSH_ENABLED", "true")

        errors = get_push_settings().validate()

        assert errors == ["PUSH_ENABLED=true requer FCM_SERVICE_ACCOUNT_KEY"]
