"""Registro de tokens de push (FCM) do dispositivo do profissional."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Request

from api.routes.errors import read_json_body
from app.bootstrap import get_register_push_token_use_case
from app.use_cases.professional import RegisterPushTokenUseCase

router = APIRouter()


@router.post("")
async def register_push_token(
    request: Request,
    use_case: RegisterPushTokenUseCase = Depends(get_register_push_token_use_case),
) -> dict[str, Any]:
    payload = await read_json_body(request)
    await use_case.execute(payload.get("token"), payload.get("professionalId"))
    return {"success": True}
