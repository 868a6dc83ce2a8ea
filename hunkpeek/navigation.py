"""Previous/next hunk navigation.

Moving is always hide-then-show: the open session is closed before the
caller's cursor moves and the show pipeline runs again, so two renderers are
never open at once. The has_previous and has_next checks never move the caller.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
import logging
from pathlib import Path

from .cursor import FileCursor
from .diff.source import DiffSource
from .errors import HunkPeekError, NoAdjacentHunk, NotTracked
from .session import OriginInfo, SessionState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NavigationEngine:
    """Dependency bundle for stepping between adjacent hunks."""

    session: SessionState
    source: DiffSource
    caller: FileCursor
    is_tracked: Callable[[Path], bool]
    show: Callable[[], bool]
    notify: Callable[[str], None]
    reference_revision: str = "HEAD"

    def _has_adjacent(self, context: OriginInfo | None, direction: int) -> bool:
        context = context if context is not None else self.caller.position()
        if not self.is_tracked(context.path):
            return False
        with self.source.preserved_cursor():
            self.source.compute_diff(context.path, self.reference_revision, context.line)
            return self.source.has_adjacent_hunk(direction)

    def has_previous(self, context: OriginInfo | None = None) -> bool:
        return self._has_adjacent(context, -1)

    def has_next(self, context: OriginInfo | None = None) -> bool:
        return self._has_adjacent(context, 1)

    def go(self, direction: int) -> bool:
        """Close, move to the adjacent hunk, and show it.

        Without an adjacent hunk the session is left exactly as it was and a
        "no previous/next change" message is emitted.
        """
        try:
            context = self.caller.position()
            if not self.is_tracked(context.path):
                raise NotTracked()
            self.source.compute_diff(context.path, self.reference_revision, context.line)
            if not self.source.has_adjacent_hunk(direction):
                raise NoAdjacentHunk(direction)
            self.session.close()
            line = self.source.move_to_adjacent_hunk(direction)
            logger.debug("moving %s from line %d to line %d", context.path, context.line, line)
            self.caller.move_to(line)
        except HunkPeekError as exc:
            self.notify(str(exc))
            return False
        return self.show()

    def go_previous(self) -> bool:
        return self.go(-1)

    def go_next(self) -> bool:
        return self.go(1)
