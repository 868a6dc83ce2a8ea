"""Single-active hunk display session.

At most one session is open at a time. Closing restores the caller's
originating view and position first, then tears the renderer down exactly
once; repeated or re-entrant closes are no-ops.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
import logging
from pathlib import Path
import threading

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OriginInfo:
    """Where the caller was when a hunk was shown."""

    view: object
    path: Path
    line: int


def _no_focus_restore(_origin: OriginInfo) -> None:
    return None


class SessionState:
    def __init__(self, restore_focus: Callable[[OriginInfo], None] = _no_focus_restore) -> None:
        self.restore_focus = restore_focus
        self._lock = threading.RLock()
        self._origin: OriginInfo | None = None
        self._teardown: Callable[[], None] | None = None

    @property
    def is_open(self) -> bool:
        with self._lock:
            return self._origin is not None

    @property
    def origin(self) -> OriginInfo | None:
        with self._lock:
            return self._origin

    def open(self, origin: OriginInfo, teardown: Callable[[], None]) -> bool:
        """Record a newly displayed hunk; refuses while another session is open."""
        with self._lock:
            if self._origin is not None:
                logger.warning("session already open at %s:%d; close it first", self._origin.path, self._origin.line)
                return False
            self._origin = origin
            self._teardown = teardown
            logger.debug("session opened at %s:%d", origin.path, origin.line)
            return True

    def close(self) -> bool:
        """Close the open session, returning whether anything was closed.

        State is cleared under the lock; focus restore and teardown run after
        it is released, so a teardown may wait on threads that call ``close``.
        """
        with self._lock:
            origin = self._origin
            teardown = self._teardown
            if origin is None:
                return False
            self._origin = None
            self._teardown = None

        self.restore_focus(origin)
        if teardown is not None:
            teardown()
        logger.debug("session closed at %s:%d", origin.path, origin.line)
        return True
