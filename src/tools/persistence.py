"""
In-memory appointment document store.

In production, this would be a hosted document database (Firestore) with
security rules limiting each user to their own collection under
``artifacts/{app_id}/users/{user_id}/agendamentos``.
"""

import logging
import secrets
import string
from datetime import datetime, timezone
from typing import Optional, Protocol, TypedDict

from src.schemas.booking_schema import Appointment
from src.schemas.session_schema import SessionContext
from src.workflow.errors import PersistenceError

logger = logging.getLogger(__name__)

COLLECTION_NAME = "agendamentos"
RECORD_ID_LENGTH = 20
_ID_ALPHABET = string.ascii_letters + string.digits


class StoredDocument(TypedDict):
    """A single stored appointment document."""

    id: str
    data: str
    created_at: str


class PersistencePort(Protocol):
    """Appends an appointment for the session and returns its record id."""

    async def append(
        self, session: Optional[SessionContext], appointment: Appointment
    ) -> str: ...


def collection_path(session: SessionContext) -> str:
    """Document path of the per-user appointment collection."""
    return f"artifacts/{session.app_id}/users/{session.session_id}/{COLLECTION_NAME}"


def _new_record_id() -> str:
    return "".join(secrets.choice(_ID_ALPHABET) for _ in range(RECORD_ID_LENGTH))


class InMemoryAppointmentStore:
    """Append-only store keyed by collection path."""

    def __init__(self) -> None:
        self._collections: dict[str, list[StoredDocument]] = {}
        self.append_calls = 0

    async def append(
        self, session: Optional[SessionContext], appointment: Appointment
    ) -> str:
        self.append_calls += 1
        if session is None or not session.is_authenticated:
            raise PersistenceError(
                "Armazenamento não inicializado ou usuário não autenticado."
            )

        record_id = _new_record_id()
        document: StoredDocument = {
            "id": record_id,
            "data": appointment.serialize(),
            "created_at": datetime.now(timezone.utc).isoformat(),
        }
        path = collection_path(session)
        self._collections.setdefault(path, []).append(document)
        logger.info("Document written with ID: %s", record_id)
        return record_id

    def list_documents(self, session: SessionContext) -> list[StoredDocument]:
        """Documents in the session's collection, oldest first."""
        return list(self._collections.get(collection_path(session), []))

    def reset(self) -> None:
        """Clear all collections. Used by test fixtures for isolation."""
        self._collections.clear()
        self.append_calls = 0
