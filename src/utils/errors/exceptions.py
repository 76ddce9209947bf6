"""Exceções para falhas recuperáveis de infraestrutura.

Não carregam mensagem para o cliente final: as rotas as traduzem em 503
e os use cases nunca as convertem em erro de domínio.
"""

from __future__ import annotations


class InfrastructureError(RuntimeError):
    """Base para falhas de infraestrutura transitórias."""


class RedisConnectionError(InfrastructureError):
    """Falha de conexão/timeout ao publicar no Redis."""


class FirestoreUnavailableError(InfrastructureError):
    """Falha de indisponibilidade ao acessar Firestore."""


class PersistenceError(InfrastructureError):
    """Escrita não confirmada pelo store (ex: transação abortada após retries)."""
