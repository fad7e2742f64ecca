"""
Mock identity bootstrap.

In production, this would wrap the hosted identity provider: a custom
token handed over by the embedding page, or an anonymous sign-in when none
is present. The workflow only ever reads the resolved session id.
"""

import hashlib
import logging
import uuid
from typing import Callable, Optional

from src.config import settings
from src.schemas.session_schema import SessionContext

logger = logging.getLogger(__name__)

AuthListener = Callable[[Optional[SessionContext]], None]


class IdentityBootstrap:
    """Signs the current process in and publishes auth state changes.

    The auth-state stream has a single subscriber.
    """

    def __init__(
        self, app_id: Optional[str] = None, initial_auth_token: Optional[str] = None
    ) -> None:
        self.app_id = app_id or settings.app_id
        self._initial_token = (
            initial_auth_token if initial_auth_token is not None
            else settings.initial_auth_token
        )
        self._session: Optional[SessionContext] = None
        self._listener: Optional[AuthListener] = None

    @property
    def session(self) -> Optional[SessionContext]:
        return self._session

    def on_auth_state_changed(self, listener: AuthListener) -> None:
        """Register the auth-state subscriber; it is called with the current state."""
        if self._listener is not None:
            raise RuntimeError("Auth state already has a subscriber")
        self._listener = listener
        listener(self._session)

    async def start(self) -> SessionContext:
        """Sign in once and return the session; later calls reuse it."""
        if self._session is not None:
            return self._session
        logger.info("No user signed in. Signing in...")
        if self._initial_token:
            return await self.sign_in_with_custom_token(self._initial_token)
        return await self.sign_in_anonymously()

    async def sign_in_anonymously(self) -> SessionContext:
        return self._set_session(uuid.uuid4().hex[:28], anonymous=True)

    async def sign_in_with_custom_token(self, token: str) -> SessionContext:
        """Re-authenticate with a custom token; the uid is stable per token."""
        if not token or not token.strip():
            raise ValueError("Custom auth token must not be empty")
        uid = hashlib.sha256(token.encode()).hexdigest()[:28]
        return self._set_session(uid, anonymous=False)

    def _set_session(self, uid: str, anonymous: bool) -> SessionContext:
        self._session = SessionContext(app_id=self.app_id, session_id=uid, anonymous=anonymous)
        logger.info("User signed in: %s", uid)
        if self._listener is not None:
            self._listener(self._session)
        return self._session
