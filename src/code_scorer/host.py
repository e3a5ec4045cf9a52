"""Display and error sinks.

The status bar item owns the single piece of visible state: its text. The
error notifier is fire-and-forget and reports through logging.
"""

from __future__ import annotations

import logging
from typing import Optional, Protocol

from .core.scoring import STATUS_PLACEHOLDER

logger = logging.getLogger(__name__)


class DisplaySink(Protocol):
    def set_text(self, text: str) -> None: ...


class ErrorSink(Protocol):
    def show_error_message(self, message: str) -> None: ...


class StatusBarItem:
    """A persistent status indicator holding the current display text."""

    def __init__(self, text: str = STATUS_PLACEHOLDER):
        self.text = text
        self.visible = False
        self.disposed = False

    def show(self) -> None:
        self.visible = True
        logger.info("Status: %s", self.text)

    def set_text(self, text: str) -> None:
        if self.disposed:
            logger.debug("Dropping status update after dispose: %s", text)
            return
        self.text = text
        if self.visible:
            logger.info("Status: %s", text)

    def dispose(self) -> None:
        self.visible = False
        self.disposed = True


class ErrorNotifier:
    """Error notifications. Remembers the most recent message."""

    def __init__(self):
        self.last_message: Optional[str] = None

    def show_error_message(self, message: str) -> None:
        self.last_message = message
        logger.error(message)
