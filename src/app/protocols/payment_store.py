"""Protocolo de persistencia de pagamentos e conexoes com o gateway."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from app.domain.payment import GatewayConnection, PaymentIntent


class PaymentStoreProtocol(ABC):
    @abstractmethod
    async def save_intent(self, intent: PaymentIntent) -> None: ...

    @abstractmethod
    async def get_intent(self, payment_id: str) -> PaymentIntent | None: ...

    @abstractmethod
    async def get_intent_by_appointment(self, appointment_id: str) -> PaymentIntent | None: ...

    @abstractmethod
    async def update_intent_status(self, payment_id: str, status: str) -> PaymentIntent | None:
        """Espelha o status do gateway; None se o intent nao existe."""

    @abstractmethod
    async def get_connection(self, professional_id: str) -> GatewayConnection | None: ...

    @abstractmethod
    async def save_connection(self, connection: GatewayConnection) -> None:
        """Upsert por professional_id."""
