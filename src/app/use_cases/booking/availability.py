"""Use case de consulta de horarios livres para um link."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from app.domain.business_profile import default_business_profile
from app.domain.errors import InvalidBookingRequest
from app.domain.formats import validate_date_str
from app.services.availability import available_slots, local_today

if TYPE_CHECKING:
    from collections.abc import Callable

    from app.protocols.booking_store import BookingStoreProtocol
    from app.services.one_time_links import OneTimeLinkService


class GetAvailabilityUseCase:
    """Resolve o profissional pelo link e devolve a grade livre da data."""

    def __init__(
        self,
        booking_store: BookingStoreProtocol,
        links: OneTimeLinkService,
        *,
        timezone: str,
        clock: Callable[[], datetime] = lambda: datetime.now(UTC),
    ) -> None:
        self._store = booking_store
        self._links = links
        self._timezone = timezone
        self._clock = clock

    async def execute(self, token: str, date: str) -> list[str]:
        try:
            validate_date_str(date)
        except ValueError as exc:
            raise InvalidBookingRequest("Campo inválido: date") from exc

        validation = await self._links.validate(token)
        professional_id = validation.professional_id
        profile = await self._store.get_business_profile(professional_id)
        profile = profile or default_business_profile(professional_id)
        booked = await self._store.list_booked_times(professional_id, date)
        return available_slots(profile, booked, date, local_today(self._timezone, self._clock()))


__all__ = ["GetAvailabilityUseCase"]
