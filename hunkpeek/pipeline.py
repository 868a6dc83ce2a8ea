"""Show pipeline and hunk actions.

``HunkPeek`` composes the collaborators: caller position, tracked-file
check, diff source, locator, extractor, renderer, and session. Public entry
points report failures through the notifier and return whether anything
changed; they never raise, including when a renderer fails.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field, replace
import logging
from pathlib import Path
from typing import TextIO

from .clipboard import copy_text_to_clipboard
from .cursor import FileCursor
from .diff.extract import HunkExtractor
from .diff.locate import locate_hunk
from .diff.model import ExtractedHunk, RevertLocation
from .diff.source import DiffSource, GitDiffSource, git_is_tracked
from .errors import HunkPeekError, NoChanges, NoRendererConfigured, NotTracked, RenderFailed, RevertRefused
from .navigation import NavigationEngine
from .notify import Notifier
from .renderers import RawDiffRenderer, Renderer, resolve_renderer
from .revert import revert_hunk_in_file
from .session import SessionState

logger = logging.getLogger(__name__)


@dataclass
class HunkPeek:
    caller: FileCursor
    source: DiffSource
    renderer: Renderer | None
    is_tracked: Callable[[Path], bool] = git_is_tracked
    revert_action: Callable[[str, RevertLocation], None] = revert_hunk_in_file
    copy_to_clipboard: Callable[[str], bool] = copy_text_to_clipboard
    notifier: Notifier = field(default_factory=Notifier)
    extractor: HunkExtractor = field(default_factory=HunkExtractor)
    reference_revision: str = "HEAD"
    fallback_stream: TextIO | None = None
    session: SessionState = field(init=False)
    navigation: NavigationEngine = field(init=False)
    current_hunk: ExtractedHunk | None = field(init=False, default=None)

    def __post_init__(self) -> None:
        self.session = SessionState(restore_focus=self.caller.restore)
        self.navigation = NavigationEngine(
            session=self.session,
            source=self.source,
            caller=self.caller,
            is_tracked=self.is_tracked,
            show=self.show,
            notify=self.notifier.notify,
            reference_revision=self.reference_revision,
        )

    @property
    def original_text(self) -> str:
        return self.extractor.original_text

    def show(self) -> bool:
        """Display the hunk at the caller's cursor, replacing any open session."""
        try:
            self._show()
        except HunkPeekError as exc:
            self.notifier.notify(str(exc))
            return False
        return True

    def _show(self) -> None:
        origin = self.caller.position()
        if not self.is_tracked(origin.path):
            raise NotTracked()
        if self.session.close():
            origin = self.caller.position()

        diff_text = self.source.compute_diff(origin.path, self.reference_revision, origin.line)
        if not self.source.hunks:
            raise NoChanges()
        if not self.source.cursor_in_change:
            # Off any change: snap to the previous hunk, or the next at file start.
            direction = -1 if self.source.has_adjacent_hunk(-1) else 1
            line = self.source.move_to_adjacent_hunk(direction)
            logger.debug("line %d is outside any hunk; snapping to line %d", origin.line, line)
            self.caller.move_to(line)
            origin = self.caller.position()

        cursor = self.source.cursor
        boundary = locate_hunk(diff_text, cursor)
        hunk = self.extractor.extract(diff_text, boundary, cursor)
        if hunk.is_empty:
            raise NoChanges()
        hunk = replace(hunk, source_path=origin.path)

        renderer = self.renderer
        if renderer is None:
            logger.warning("no renderer configured; showing raw diff at line %d", origin.line)
            self.notifier.notify(str(NoRendererConfigured()))
            renderer = RawDiffRenderer(diff_text, cursor, self.fallback_stream)

        try:
            teardown = renderer(hunk, self.session.close)
        except Exception:
            logger.exception("renderer failed for %s:%d", origin.path, origin.line)
            self.current_hunk = None
            raise RenderFailed() from None
        self.session.open(origin, teardown)
        self.current_hunk = hunk

    def hide(self) -> bool:
        return self.session.close()

    def go_previous(self) -> bool:
        return self.navigation.go_previous()

    def go_next(self) -> bool:
        return self.navigation.go_next()

    def copy_original_text(self) -> bool:
        text = self.extractor.original_text
        if not text:
            self.notifier.notify("nothing to copy")
            return False
        if not self.copy_to_clipboard(text):
            self.notifier.notify("clipboard unavailable")
            return False
        self.notifier.notify("copied original text")
        return True

    def revert(self) -> bool:
        """Close the session and write the shown hunk's original text back."""
        hunk = self.current_hunk
        origin = self.session.origin
        try:
            if hunk is None or origin is None:
                raise RevertRefused("no hunk shown")
            if hunk.location is None:
                raise RevertRefused("cannot revert hunk without line numbers")
            if hunk.has_context:
                raise RevertRefused("cannot revert hunk with context lines")
        except HunkPeekError as exc:
            self.notifier.notify(str(exc))
            return False

        original_text = self.extractor.original_text
        self.session.close()
        self.current_hunk = None
        try:
            self.revert_action(original_text, RevertLocation(path=origin.path, hunk=hunk.location))
        except OSError:
            logger.exception("revert failed for %s", origin.path)
            self.notifier.notify("revert failed")
            return False
        self.notifier.notify("reverted hunk")
        return True


def build_hunk_peek(
    caller: FileCursor,
    settings,
    colorize: bool = True,
    stream: TextIO | None = None,
    notifier: Notifier | None = None,
) -> HunkPeek:
    """Assemble a git-backed ``HunkPeek`` from loaded ``HunkPeekSettings``."""
    source = GitDiffSource(
        context_lines=settings.context_lines,
        timeout_seconds=settings.git_timeout_seconds,
        header_pattern=settings.hunk_header_pattern,
    )
    renderer = resolve_renderer(settings.renderer, style=settings.style, colorize=colorize, stream=stream)
    return HunkPeek(
        caller=caller,
        source=source,
        renderer=renderer,
        is_tracked=lambda path: git_is_tracked(path, settings.git_timeout_seconds),
        notifier=notifier if notifier is not None else Notifier(),
        reference_revision=settings.reference_revision,
        fallback_stream=stream,
    )
