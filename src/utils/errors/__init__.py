"""Exceções utilitárias compartilhadas."""

from .exceptions import (
    FirestoreUnavailableError,
    InfrastructureError,
    PersistenceError,
    RedisConnectionError,
)

__all__ = [
    "FirestoreUnavailableError",
    "InfrastructureError",
    "PersistenceError",
    "RedisConnectionError",
]
