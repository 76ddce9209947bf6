"""Firestore Push Token Store — tokens FCM por dispositivo."""

from __future__ import annotations

import asyncio
import hashlib
import logging
from typing import TYPE_CHECKING

from google.api_core import exceptions as google_exceptions
from google.cloud.firestore import FieldFilter

from app.protocols.push_token_store import PushTokenStoreProtocol
from config.settings import FirestoreSettings
from utils.errors import FirestoreUnavailableError

if TYPE_CHECKING:
    from google.cloud.firestore import Client as FirestoreClient

    from app.domain.notification import PushToken

logger = logging.getLogger(__name__)


def _token_doc_id(token: str) -> str:
    """Tokens FCM podem conter `/`; o id do documento usa o hash."""
    return hashlib.sha256(token.encode()).hexdigest()


class FirestorePushTokenStore(PushTokenStoreProtocol):
    def __init__(
        self,
        firestore_client: FirestoreClient,
        settings: FirestoreSettings | None = None,
    ) -> None:
        self._db = firestore_client
        self._settings = settings or FirestoreSettings()

    def _tokens(self):  # noqa: ANN202
        return self._db.collection(self._settings.collection_push_tokens)

    async def upsert(self, token: PushToken) -> None:
        try:
            await asyncio.to_thread(
                self._tokens().document(_token_doc_id(token.token)).set, token.to_document()
            )
        except google_exceptions.GoogleAPICallError as exc:
            logger.error(
                "push_token_upsert_failed",
                extra={"component": "firestore_push_token_store", "error_type": type(exc).__name__},
            )
            raise FirestoreUnavailableError("Firestore falhou ao registrar token") from exc

    async def list_tokens(self, professional_id: str) -> list[str]:
        return await asyncio.to_thread(self._list_tokens_sync, professional_id)

    def _list_tokens_sync(self, professional_id: str) -> list[str]:
        docs = (
            self._tokens()
            .where(filter=FieldFilter("professional_id", "==", professional_id))
            .stream()
        )
        return [str((doc.to_dict() or {}).get("token")) for doc in docs]

    async def delete(self, token: str) -> None:
        await asyncio.to_thread(self._tokens().document(_token_doc_id(token)).delete)
