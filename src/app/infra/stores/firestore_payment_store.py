"""Firestore Payment Store — pagamentos Pix e conexões com o gateway."""

from __future__ import annotations

import asyncio
import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from google.api_core import exceptions as google_exceptions
from google.cloud.firestore import FieldFilter

from app.domain.payment import GatewayConnection, PaymentIntent
from app.protocols.payment_store import PaymentStoreProtocol
from config.settings import FirestoreSettings
from utils.errors import FirestoreUnavailableError

if TYPE_CHECKING:
    from collections.abc import Callable

    from google.cloud.firestore import Client as FirestoreClient

logger = logging.getLogger(__name__)


class FirestorePaymentStore(PaymentStoreProtocol):
    """Store de pagamentos usando Firestore.

    Documento de pagamento indexado pelo id do gateway; conexão indexada
    pelo id do profissional.
    """

    def __init__(
        self,
        firestore_client: FirestoreClient,
        settings: FirestoreSettings | None = None,
    ) -> None:
        self._db = firestore_client
        self._settings = settings or FirestoreSettings()

    async def _run(self, operation: str, func: Callable[..., Any], *args: Any) -> Any:
        try:
            return await asyncio.to_thread(func, *args)
        except google_exceptions.GoogleAPICallError as exc:
            logger.error(
                "firestore_operation_failed",
                extra={
                    "component": "firestore_payment_store",
                    "operation": operation,
                    "error_type": type(exc).__name__,
                },
            )
            raise FirestoreUnavailableError(f"Firestore falhou em {operation}") from exc

    def _payments(self) -> Any:
        return self._db.collection(self._settings.collection_payments)

    def _connections(self) -> Any:
        return self._db.collection(self._settings.collection_connections)

    async def save_intent(self, intent: PaymentIntent) -> None:
        await self._run("save_intent", self._save_intent_sync, intent)

    def _save_intent_sync(self, intent: PaymentIntent) -> None:
        self._payments().document(intent.payment_id).set(intent.to_document())

    async def get_intent(self, payment_id: str) -> PaymentIntent | None:
        return await self._run("get_intent", self._get_intent_sync, payment_id)

    def _get_intent_sync(self, payment_id: str) -> PaymentIntent | None:
        doc = self._payments().document(payment_id).get()
        if not doc.exists:
            return None
        return PaymentIntent.model_validate(doc.to_dict() or {})

    async def get_intent_by_appointment(self, appointment_id: str) -> PaymentIntent | None:
        return await self._run(
            "get_intent_by_appointment", self._get_intent_by_appointment_sync, appointment_id
        )

    def _get_intent_by_appointment_sync(self, appointment_id: str) -> PaymentIntent | None:
        docs = (
            self._payments()
            .where(filter=FieldFilter("appointment_id", "==", appointment_id))
            .limit(1)
            .stream()
        )
        for doc in docs:
            return PaymentIntent.model_validate(doc.to_dict() or {})
        return None

    async def update_intent_status(self, payment_id: str, status: str) -> PaymentIntent | None:
        return await self._run(
            "update_intent_status", self._update_intent_status_sync, payment_id, status
        )

    def _update_intent_status_sync(self, payment_id: str, status: str) -> PaymentIntent | None:
        ref = self._payments().document(payment_id)
        try:
            ref.update({"status": status, "updated_at": datetime.now(UTC).isoformat()})
        except google_exceptions.NotFound:
            return None
        doc = ref.get()
        return PaymentIntent.model_validate(doc.to_dict() or {}) if doc.exists else None

    async def get_connection(self, professional_id: str) -> GatewayConnection | None:
        return await self._run("get_connection", self._get_connection_sync, professional_id)

    def _get_connection_sync(self, professional_id: str) -> GatewayConnection | None:
        doc = self._connections().document(professional_id).get()
        if not doc.exists:
            return None
        data = doc.to_dict() or {}
        if not data.get("access_token"):
            return None
        return GatewayConnection.model_validate({**data, "professional_id": professional_id})

    async def save_connection(self, connection: GatewayConnection) -> None:
        await self._run("save_connection", self._save_connection_sync, connection)

    def _save_connection_sync(self, connection: GatewayConnection) -> None:
        self._connections().document(connection.professional_id).set(
            connection.to_document(), merge=True
        )
