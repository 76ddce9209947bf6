"""Protocolo do registro de tokens de push."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from app.domain.notification import PushToken


class PushTokenStoreProtocol(ABC):
    @abstractmethod
    async def upsert(self, token: PushToken) -> None:
        """Upsert por token: o dispositivo passa a pertencer ao ultimo profissional."""

    @abstractmethod
    async def list_tokens(self, professional_id: str) -> list[str]: ...

    @abstractmethod
    async def delete(self, token: str) -> None: ...
