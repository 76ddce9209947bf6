"""Endpoints do dashboard do profissional.

Autenticação fica na borda (gateway/API Gateway); aqui o profissional
é identificado pelo path.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Request, status

from api.routes.errors import read_json_body
from app.bootstrap import (
    get_link_service,
    get_manage_appointments_use_case,
    get_save_business_profile_use_case,
)
from app.services.one_time_links import OneTimeLinkService
from app.use_cases.booking import ManageAppointmentsUseCase, SlotRequest
from app.use_cases.professional import SaveBusinessProfileUseCase

router = APIRouter()


@router.post("/{professional_id}/links", status_code=status.HTTP_201_CREATED)
async def issue_link(
    professional_id: str,
    links: OneTimeLinkService = Depends(get_link_service),
) -> dict[str, Any]:
    link = await links.issue(professional_id)
    return {"token": link.token, "professional_id": link.professional_id}


@router.put("/{professional_id}/business-profile")
async def save_business_profile(
    professional_id: str,
    request: Request,
    use_case: SaveBusinessProfileUseCase = Depends(get_save_business_profile_use_case),
) -> dict[str, Any]:
    payload = await read_json_body(request)
    profile = await use_case.execute(professional_id, payload)
    return profile.to_document()


@router.post("/{professional_id}/appointments", status_code=status.HTTP_201_CREATED)
async def book_internal(
    professional_id: str,
    request: Request,
    use_case: ManageAppointmentsUseCase = Depends(get_manage_appointments_use_case),
) -> dict[str, Any]:
    payload = await read_json_body(request)
    appointment = await use_case.book_internal(professional_id, SlotRequest.parse(payload))
    return {"success": True, "appointment": appointment.to_document()}


@router.post("/{professional_id}/appointments/{appointment_id}/cancel")
async def cancel_appointment(
    professional_id: str,
    appointment_id: str,
    use_case: ManageAppointmentsUseCase = Depends(get_manage_appointments_use_case),
) -> dict[str, Any]:
    appointment = await use_case.cancel(professional_id, appointment_id)
    return {"success": True, "appointment": appointment.to_document()}


@router.post("/{professional_id}/appointments/{appointment_id}/confirm")
async def confirm_appointment(
    professional_id: str,
    appointment_id: str,
    use_case: ManageAppointmentsUseCase = Depends(get_manage_appointments_use_case),
) -> dict[str, Any]:
    appointment = await use_case.confirm(professional_id, appointment_id)
    return {"success": True, "appointment": appointment.to_document()}
