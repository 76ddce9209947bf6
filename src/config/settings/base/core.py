"""Settings base do Agenda Pix.

Ambiente, identificação do serviço e as duas URLs de infraestrutura
compartilhadas (projeto GCP do Firestore e Redis do dashboard).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Literal

Environment = Literal["development", "staging", "production"]

# Ambientes em que configuração inválida impede o boot
STRICT_ENVIRONMENTS: frozenset[str] = frozenset({"staging", "production"})

_ENVIRONMENT_ALIASES: dict[str, Environment] = {
    "production": "production",
    "prod": "production",
    "staging": "staging",
    "stage": "staging",
}

_TRUTHY = frozenset({"true", "1", "yes"})


@dataclass(frozen=True)
class BaseSettings:
    """Ambiente de execução e infraestrutura comum.

    `redis_url` vazio desliga o canal realtime (fallback para log), o que
    só é aceito em development.
    """

    environment: Environment = "development"
    service_name: str = "agenda-pix"
    debug: bool = False
    gcp_project: str = ""
    redis_url: str = ""

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    @property
    def is_strict(self) -> bool:
        return self.environment in STRICT_ENVIRONMENTS

    @property
    def realtime_enabled(self) -> bool:
        return bool(self.redis_url)

    def validate(self) -> list[str]:
        errors: list[str] = []
        if self.environment not in ("development", *STRICT_ENVIRONMENTS):
            errors.append(f"ENVIRONMENT inválido: {self.environment}")
        if not self.service_name:
            errors.append("SERVICE_NAME não pode ser vazio")
        if self.is_strict and not self.realtime_enabled:
            errors.append("REDIS_URL obrigatório fora de development (dashboard realtime)")
        return errors


def parse_environment(raw: str) -> Environment:
    """Normaliza ENVIRONMENT; valores desconhecidos caem em development."""
    return _ENVIRONMENT_ALIASES.get(raw.strip().lower(), "development")


@lru_cache(maxsize=1)
def get_base_settings() -> BaseSettings:
    return BaseSettings(
        environment=parse_environment(os.getenv("ENVIRONMENT", "development")),
        service_name=os.getenv("SERVICE_NAME", "agenda-pix"),
        debug=os.getenv("DEBUG", "").strip().lower() in _TRUTHY,
        gcp_project=os.getenv("GCP_PROJECT") or os.getenv("GOOGLE_CLOUD_PROJECT", ""),
        redis_url=os.getenv("REDIS_URL", ""),
    )
