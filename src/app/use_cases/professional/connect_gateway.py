"""Use case de conexao OAuth do profissional com o Mercado Pago."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from app.domain.errors import InvalidBookingRequest
from app.domain.payment import GatewayConnection

if TYPE_CHECKING:
    from app.protocols.payment_gateway import PaymentGatewayProtocol
    from app.protocols.payment_store import PaymentStoreProtocol

logger = logging.getLogger(__name__)


class ConnectGatewayUseCase:
    """Troca o `code` do OAuth por tokens e grava a conexao.

    O `state` do OAuth carrega o id do profissional que iniciou o fluxo.
    """

    def __init__(
        self,
        payment_store: PaymentStoreProtocol,
        gateway: PaymentGatewayProtocol,
    ) -> None:
        self._store = payment_store
        self._gateway = gateway

    async def execute(self, code: str | None, state: str | None) -> GatewayConnection:
        """
        Raises:
            InvalidBookingRequest: code/state ausentes
            GatewayError: gateway recusou a troca do code
        """
        if not code or not state:
            raise InvalidBookingRequest("Parâmetros code e state são obrigatórios.")

        credentials = await self._gateway.exchange_oauth_code(code)
        connection = GatewayConnection(
            professional_id=state,
            mp_user_id=credentials.user_id,
            access_token=credentials.access_token,
            refresh_token=credentials.refresh_token,
            expires_in=credentials.expires_in,
            scope=credentials.scope,
            token_type=credentials.token_type,
            connected_at=datetime.now(UTC),
        )
        await self._store.save_connection(connection)
        logger.info(
            "gateway_connected",
            extra={"component": "connect_gateway", "professional_id": state},
        )
        return connection


__all__ = ["ConnectGatewayUseCase"]
