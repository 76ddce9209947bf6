"""Use case de configuracao do perfil de atendimento."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from app.domain.business_profile import BusinessProfile
from app.domain.errors import InvalidBookingRequest
from app.domain.formats import parse_time

if TYPE_CHECKING:
    from app.protocols.booking_store import BookingStoreProtocol

logger = logging.getLogger(__name__)


class SaveBusinessProfileUseCase:
    """Valida e grava o perfil; exige start_time < end_time ao salvar."""

    def __init__(self, booking_store: BookingStoreProtocol) -> None:
        self._store = booking_store

    async def execute(self, professional_id: str, payload: dict[str, Any]) -> BusinessProfile:
        try:
            profile = BusinessProfile.model_validate(
                {**payload, "professional_id": professional_id}
            )
        except ValidationError as exc:
            raise InvalidBookingRequest("Configuração de atendimento inválida.") from exc

        if parse_time(profile.start_time) >= parse_time(profile.end_time):
            raise InvalidBookingRequest("Horário inicial deve ser anterior ao final.")

        await self._store.save_business_profile(profile)
        logger.info(
            "business_profile_saved",
            extra={
                "component": "business_profile",
                "professional_id": professional_id,
                "requires_payment": profile.requires_payment,
            },
        )
        return profile


__all__ = ["SaveBusinessProfileUseCase"]
