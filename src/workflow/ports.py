"""
Presentation port used by the booking service.

The service never touches presentation state directly; a front-end (the
console demo, a web page bridge, a test recorder) implements this protocol
and is injected at construction.
"""

import logging
from typing import Protocol

logger = logging.getLogger(__name__)


class OutputRenderer(Protocol):
    """Everything the booking workflow shows to the user."""

    def set_busy(self, action: str, busy: bool) -> None:
        """Disable (``busy=True``) or re-enable the control for ``action``."""

    def show_validation_error(self, field_name: str, message: str) -> None: ...

    def show_notice(self, message: str) -> None:
        """Blocking notice the user has to dismiss."""

    def show_quote(self, distance_display: str, price_display: str) -> None: ...

    def hide_quote(self) -> None: ...

    def show_success(self, message: str) -> None: ...

    def open_link(self, url: str) -> None: ...


class LoggingRenderer:
    """Renderer that only logs. Used when no front-end is attached."""

    def set_busy(self, action: str, busy: bool) -> None:
        logger.debug("%s busy=%s", action, busy)

    def show_validation_error(self, field_name: str, message: str) -> None:
        logger.info("Validation error on %s: %s", field_name or "form", message)

    def show_notice(self, message: str) -> None:
        logger.info("Notice: %s", message)

    def show_quote(self, distance_display: str, price_display: str) -> None:
        logger.info("Quote shown: %s, %s", distance_display, price_display)

    def hide_quote(self) -> None:
        logger.debug("Quote hidden")

    def show_success(self, message: str) -> None:
        logger.info("Success: %s", message)

    def open_link(self, url: str) -> None:
        logger.info("Opening link: %s", url)
