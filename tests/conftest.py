"""Configuração do pytest para o projeto Agenda Pix."""

import sys
from pathlib import Path

import pytest

# Adiciona src/ e a raiz ao PYTHONPATH para imports absolutos (app.*, tests.fakes.*)
root_path = Path(__file__).parent.parent
for path in (root_path / "src", root_path):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    """Settings e singletons cacheados não vazam entre testes."""
    from app.bootstrap import reset_dependencies
    from config.settings import (
        get_base_settings,
        get_booking_settings,
        get_firestore_settings,
        get_mercadopago_settings,
        get_push_settings,
        get_store_settings,
    )

    getters = (
        get_base_settings,
        get_booking_settings,
        get_firestore_settings,
        get_mercadopago_settings,
        get_push_settings,
        get_store_settings,
    )
    for getter in getters:
        getter.cache_clear()
    reset_dependencies()
    yield
    for getter in getters:
        getter.cache_clear()
    reset_dependencies()


@pytest.fixture(scope="session", autouse=True)
def _test_logging():
    from app.bootstrap import initialize_test_app

    initialize_test_app()
