"""Bootstrap da aplicação — inicialização e wiring.

Este módulo é o composition root: configura logging, inicializa
dependências e conecta implementações concretas aos protocolos.

Uso:
    from app.bootstrap import initialize_app, get_book_appointment_use_case

    # Na inicialização do serviço
    initialize_app()

    # Obter use cases
    use_case = get_book_appointment_use_case()
"""

from __future__ import annotations

import logging
import os
from functools import lru_cache

from app.observability import get_correlation_id
from config.logging import configure_logging
from config.settings import (
    get_base_settings,
    get_booking_settings,
    get_firestore_settings,
    get_mercadopago_settings,
    get_push_settings,
    get_store_settings,
)

# Nome do serviço para logs e métricas
SERVICE_NAME = "agenda_pix"

# Nível de log padrão (pode ser sobrescrito por env)
DEFAULT_LOG_LEVEL = "INFO"

logger = logging.getLogger(__name__)


def initialize_app() -> None:
    """Inicializa a aplicação com todas as configurações necessárias.

    Deve ser chamada uma vez no início do serviço.
    """
    log_level = os.getenv("LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()

    configure_logging(
        level=log_level,
        service_name=SERVICE_NAME,
        correlation_id_getter=get_correlation_id,
    )


def initialize_test_app() -> None:
    """Inicializa a aplicação para testes (logging em DEBUG)."""
    configure_logging(
        level="DEBUG",
        service_name=f"{SERVICE_NAME}_test",
        correlation_id_getter=get_correlation_id,
    )


def validate_runtime_settings() -> None:
    """Valida settings obrigatórias no startup.

    Em `staging`/`production` falha rápido para impedir boot inválido.
    Em `development`/`test` mantém alerta sem bloquear execução local.
    """
    base = get_base_settings()
    environment = base.environment
    strict_mode = base.is_strict
    errors: list[str] = []

    errors.extend(f"base: {error}" for error in base.validate())
    errors.extend(f"store: {error}" for error in get_store_settings().validate(base))

    if get_store_settings().backend == "firestore":
        firestore_errors = get_firestore_settings().validate(base.gcp_project)
        errors.extend(f"firestore: {error}" for error in firestore_errors)

    errors.extend(f"mercadopago: {error}" for error in get_mercadopago_settings().validate())
    errors.extend(f"push: {error}" for error in get_push_settings().validate())
    errors.extend(f"booking: {error}" for error in get_booking_settings().validate_runtime())

    if not errors:
        logger.info(
            "settings_validated",
            extra={"component": "bootstrap", "result": "ok", "environment": environment},
        )
        return

    logger.warning(
        "settings_validation_failed",
        extra={
            "component": "bootstrap",
            "result": "failed",
            "environment": environment,
            "error_count": len(errors),
            "errors": errors,
        },
    )
    if strict_mode:
        details = "\n".join(f"- {error}" for error in errors)
        raise RuntimeError(f"Configuração inválida para {environment}:\n{details}")


# ──────────────────────────────────────────────────────────────────────────────
# Store Getters (lazy initialization com cache)
# ──────────────────────────────────────────────────────────────────────────────


@lru_cache(maxsize=1)
def get_booking_store():
    """Obtém store de agendamentos (singleton).

    Returns:
        BookingStoreProtocol configurado conforme STORE_BACKEND
    """
    from app.bootstrap.dependencies import create_booking_store
    return create_booking_store()


@lru_cache(maxsize=1)
def get_payment_store():
    """Obtém store de pagamentos e conexões (singleton)."""
    from app.bootstrap.dependencies import create_payment_store
    return create_payment_store()


@lru_cache(maxsize=1)
def get_push_token_store():
    """Obtém store de tokens de push (singleton)."""
    from app.bootstrap.dependencies import create_push_token_store
    return create_push_token_store()


# ──────────────────────────────────────────────────────────────────────────────
# Adapters e serviços
# ──────────────────────────────────────────────────────────────────────────────


@lru_cache(maxsize=1)
def get_payment_gateway():
    """Obtém cliente do Mercado Pago (singleton)."""
    from app.bootstrap.dependencies import create_payment_gateway
    return create_payment_gateway()


@lru_cache(maxsize=1)
def get_notification_service():
    """Obtém serviço de notificações (push + realtime)."""
    from app.bootstrap.dependencies import create_notification_service
    return create_notification_service(get_push_token_store())


@lru_cache(maxsize=1)
def get_link_service():
    from app.services.one_time_links import OneTimeLinkService
    return OneTimeLinkService(get_booking_store(), get_payment_store())


@lru_cache(maxsize=1)
def get_payment_gate():
    from app.services.payment_gate import PaymentGate
    return PaymentGate(
        get_booking_store(),
        get_payment_store(),
        get_payment_gateway(),
        default_payer_email=get_mercadopago_settings().default_payer_email,
    )


@lru_cache(maxsize=1)
def get_reconciliation_service():
    from app.services.reconciliation import ReconciliationService
    return ReconciliationService(
        get_booking_store(),
        get_payment_store(),
        get_payment_gateway(),
        get_notification_service(),
    )


# ──────────────────────────────────────────────────────────────────────────────
# Use cases
# ──────────────────────────────────────────────────────────────────────────────


@lru_cache(maxsize=1)
def get_book_appointment_use_case():
    from app.use_cases.booking import BookAppointmentUseCase

    settings = get_booking_settings()
    return BookAppointmentUseCase(
        get_booking_store(),
        get_link_service(),
        get_payment_gate(),
        get_notification_service(),
        timezone=settings.timezone,
        trial_daily_limit=settings.trial_daily_limit,
    )


@lru_cache(maxsize=1)
def get_availability_use_case():
    from app.use_cases.booking import GetAvailabilityUseCase
    return GetAvailabilityUseCase(
        get_booking_store(),
        get_link_service(),
        timezone=get_booking_settings().timezone,
    )


@lru_cache(maxsize=1)
def get_manage_appointments_use_case():
    from app.use_cases.booking import ManageAppointmentsUseCase
    return ManageAppointmentsUseCase(get_booking_store())


@lru_cache(maxsize=1)
def get_save_business_profile_use_case():
    from app.use_cases.professional import SaveBusinessProfileUseCase
    return SaveBusinessProfileUseCase(get_booking_store())


@lru_cache(maxsize=1)
def get_connect_gateway_use_case():
    from app.use_cases.professional import ConnectGatewayUseCase
    return ConnectGatewayUseCase(get_payment_store(), get_payment_gateway())


@lru_cache(maxsize=1)
def get_register_push_token_use_case():
    from app.use_cases.professional import RegisterPushTokenUseCase
    return RegisterPushTokenUseCase(get_push_token_store())


_CACHED_GETTERS = (
    get_booking_store,
    get_payment_store,
    get_push_token_store,
    get_payment_gateway,
    get_notification_service,
    get_link_service,
    get_payment_gate,
    get_reconciliation_service,
    get_book_appointment_use_case,
    get_availability_use_case,
    get_manage_appointments_use_case,
    get_save_business_profile_use_case,
    get_connect_gateway_use_case,
    get_register_push_token_use_case,
)


def reset_dependencies() -> None:
    """Limpa os singletons (testes e troca de env em runtime)."""
    for getter in _CACHED_GETTERS:
        getter.cache_clear()
