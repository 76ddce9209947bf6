"""Endpoints públicos do cliente final (link de agendamento).

Endpoints:
- GET /booking/links/{token}: valida o link e devolve o profissional
- GET /booking/links/{token}/availability?date=YYYY-MM-DD: horários livres
- POST /booking: cria o agendamento
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, Query, Request

from api.routes.errors import read_json_body
from app.bootstrap import (
    get_availability_use_case,
    get_book_appointment_use_case,
    get_link_service,
)
from app.services.one_time_links import OneTimeLinkService
from app.use_cases.booking import (
    BookAppointmentUseCase,
    BookingRequest,
    GetAvailabilityUseCase,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/links/{token}")
async def validate_link(
    token: str,
    links: OneTimeLinkService = Depends(get_link_service),
) -> dict[str, Any]:
    """Link recuperável devolve o agendamento pendente e o pagamento."""
    validation = await links.validate(token)
    appointment = validation.appointment
    return {
        "valid": True,
        "professional_id": validation.professional_id,
        "recoverable": validation.recoverable,
        "appointment": appointment.to_document() if appointment else None,
        "payment_id": validation.payment_id,
    }


@router.get("/links/{token}/availability")
async def availability(
    token: str,
    date: str = Query(...),
    use_case: GetAvailabilityUseCase = Depends(get_availability_use_case),
) -> dict[str, Any]:
    slots = await use_case.execute(token, date)
    return {"date": date, "slots": slots}


@router.post("")
async def book(
    request: Request,
    use_case: BookAppointmentUseCase = Depends(get_book_appointment_use_case),
) -> dict[str, Any]:
    payload = await read_json_body(request)
    result = await use_case.execute(BookingRequest.parse(payload))
    return result.to_response()
