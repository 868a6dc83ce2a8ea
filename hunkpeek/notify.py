"""Single notification channel for user-facing messages."""

from __future__ import annotations

from collections.abc import Callable
import logging
import time

logger = logging.getLogger(__name__)

STATUS_MESSAGE_SECONDS = 1.2
MAX_MESSAGE_HISTORY = 64


class Notifier:
    """Keep the latest transient status message and forward it to a sink."""

    def __init__(self, sink: Callable[[str], None] | None = None) -> None:
        self.sink = sink
        self.message = ""
        self.message_until = 0.0
        self.history: list[str] = []

    def notify(self, message: str) -> None:
        self.message = message
        self.message_until = time.monotonic() + STATUS_MESSAGE_SECONDS
        self.history.append(message)
        del self.history[:-MAX_MESSAGE_HISTORY]
        logger.info("%s", message)
        if self.sink is not None:
            self.sink(message)

    def clear(self) -> None:
        self.message = ""
        self.message_until = 0.0

    def current(self) -> str:
        """Return the status message while it has not expired."""
        if self.message and time.monotonic() < self.message_until:
            return self.message
        return ""
