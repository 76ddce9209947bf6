"""Settings do Firestore.

Nomes de collections usadas pelo store transacional de agendamentos.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache


@dataclass(frozen=True)
class FirestoreSettings:
    """Configurações do Firestore.

    Attributes:
        project_id: ID do projeto GCP (usa GCP_PROJECT se não definido)
        collection_appointments: Agendamentos
        collection_slots: Reservas de horário (uma por professional/data/hora)
        collection_links: Links de uso único
        collection_usage: Perfis de uso diário (plano trial/premium)
        collection_business_profiles: Configuração de agenda e preço
        collection_payments: Intenções de pagamento Pix
        collection_connections: Conexões OAuth com Mercado Pago
        collection_push_tokens: Tokens de push por dispositivo
    """

    project_id: str = ""
    collection_appointments: str = "appointments"
    collection_slots: str = "appointment_slots"
    collection_links: str = "one_time_links"
    collection_usage: str = "profiles"
    collection_business_profiles: str = "business_profiles"
    collection_payments: str = "payments"
    collection_connections: str = "mp_connections"
    collection_push_tokens: str = "notification_tokens"

    def validate(self, gcp_project: str) -> list[str]:
        """Valida configurações do Firestore.

        Args:
            gcp_project: Projeto GCP padrão para fallback.

        Returns:
            Lista de erros de validação.
        """
        errors: list[str] = []
        effective_project = self.project_id or gcp_project

        if not effective_project:
            errors.append(
                "FIRESTORE_PROJECT_ID ou GCP_PROJECT deve estar configurado"
            )

        return errors


def _load_firestore_from_env() -> FirestoreSettings:
    """Carrega FirestoreSettings de variáveis de ambiente."""
    return FirestoreSettings(
        project_id=os.getenv("FIRESTORE_PROJECT_ID", ""),
        collection_appointments=os.getenv("FIRESTORE_COLLECTION_APPOINTMENTS", "appointments"),
        collection_slots=os.getenv("FIRESTORE_COLLECTION_SLOTS", "appointment_slots"),
        collection_links=os.getenv("FIRESTORE_COLLECTION_LINKS", "one_time_links"),
        collection_usage=os.getenv("FIRESTORE_COLLECTION_USAGE", "profiles"),
        collection_business_profiles=os.getenv(
            "FIRESTORE_COLLECTION_BUSINESS_PROFILES", "business_profiles"
        ),
        collection_payments=os.getenv("FIRESTORE_COLLECTION_PAYMENTS", "payments"),
        collection_connections=os.getenv("FIRESTORE_COLLECTION_CONNECTIONS", "mp_connections"),
        collection_push_tokens=os.getenv(
            "FIRESTORE_COLLECTION_PUSH_TOKENS", "notification_tokens"
        ),
    )


@lru_cache(maxsize=1)
def get_firestore_settings() -> FirestoreSettings:
    """Retorna instância cacheada de FirestoreSettings."""
    return _load_firestore_from_env()
