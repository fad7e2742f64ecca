"""
Per-session log tagging.

The booking service binds the signed-in session when the identity bootstrap
resolves it. From then on every record that reaches the console handler
carries ``session_id``, so the quote and booking attempts of one user can be
picked out of a shared log:

    2026-10-19 09:12:03 [src.workflow.booking_service] [u-8f2c] INFO: Quote ready: ...

Records emitted before any session is bound show ``-``.
"""

import logging
from contextvars import ContextVar, Token
from typing import Optional, TextIO

from src.schemas.session_schema import SessionContext

UNBOUND = "-"
SESSION_LOG_FORMAT = "%(asctime)s [%(name)s] [%(session_id)s] %(levelname)s: %(message)s"
SESSION_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_session_id: ContextVar[str] = ContextVar("session_id", default=UNBOUND)


def bind_session(session: Optional[SessionContext]) -> Token:
    """Tag subsequent records in this context with the session's id.

    Returns the token to pass to :func:`unbind_session`.
    """
    session_id = session.session_id if session is not None else None
    return _session_id.set(session_id or UNBOUND)


def unbind_session(token: Token) -> None:
    _session_id.reset(token)


def current_session_id() -> str:
    return _session_id.get()


class SessionIdFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.session_id = _session_id.get()  # type: ignore[attr-defined]
        return True


def session_log_handler(stream: Optional[TextIO] = None) -> logging.Handler:
    """Console handler that stamps and prints the bound session id."""
    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter(SESSION_LOG_FORMAT, SESSION_DATE_FORMAT))
    handler.addFilter(SessionIdFilter())
    return handler


def get_session_logger(name: str) -> logging.Logger:
    """Logger whose records carry ``session_id`` for any handler downstream."""
    logger = logging.getLogger(name)
    if not any(isinstance(f, SessionIdFilter) for f in logger.filters):
        logger.addFilter(SessionIdFilter())
    return logger
