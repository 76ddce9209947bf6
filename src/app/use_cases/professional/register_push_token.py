"""Use case de registro de token de push do dispositivo."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pydantic import ValidationError

from app.domain.errors import InvalidBookingRequest
from app.domain.notification import PushToken

if TYPE_CHECKING:
    from app.protocols.push_token_store import PushTokenStoreProtocol

logger = logging.getLogger(__name__)


class RegisterPushTokenUseCase:
    def __init__(self, token_store: PushTokenStoreProtocol) -> None:
        self._store = token_store

    async def execute(self, token: str | None, professional_id: str | None) -> PushToken:
        try:
            push_token = PushToken(token=token, professional_id=professional_id)
        except ValidationError as exc:
            raise InvalidBookingRequest("Token e usuário são obrigatórios.") from exc

        await self._store.upsert(push_token)
        logger.info(
            "push_token_registered",
            extra={"component": "push_tokens", "professional_id": professional_id},
        )
        return push_token


__all__ = ["RegisterPushTokenUseCase"]
