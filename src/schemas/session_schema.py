"""Authenticated session context shared with the workflow."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class SessionContext:
    """
    Identity resolved by the bootstrap collaborator.

    Created once at startup and passed explicitly to the booking service
    and the persistence port. Replaced only on re-authentication.
    """
    app_id: str
    session_id: Optional[str] = None
    anonymous: bool = True

    @property
    def is_authenticated(self) -> bool:
        return bool(self.session_id)
