"""Conexão OAuth do profissional com o Mercado Pago.

O redirect do Mercado Pago chega por GET com `code` e `state` na query;
o frontend também pode repassar os mesmos campos por POST.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Request

from api.routes.errors import read_json_body
from app.bootstrap import get_connect_gateway_use_case
from app.use_cases.professional import ConnectGatewayUseCase

router = APIRouter()


@router.api_route("/connect", methods=["GET", "POST"])
async def connect(
    request: Request,
    use_case: ConnectGatewayUseCase = Depends(get_connect_gateway_use_case),
) -> dict[str, Any]:
    code = request.query_params.get("code")
    state = request.query_params.get("state")
    if not code and request.method == "POST":
        body = await read_json_body(request, required=False)
        code, state = body.get("code"), body.get("state")

    connection = await use_case.execute(code, state)
    return {"success": True, "professional_id": connection.professional_id}
