"""Shared row building for hunk renderers."""

from __future__ import annotations

from collections.abc import Callable
import shutil

from ..ansi import sanitize_terminal_text
from ..diff.model import DiffLineKind, ExtractedHunk
from ..highlight import DEFAULT_STYLE, colorize_lines, format_hunk_line

CURSOR_MARKER = "\033[1;38;5;229m>\033[0m "
CURSOR_MARKER_PLAIN = "> "
NO_MARKER = "  "


def terminal_size() -> tuple[int, int]:
    term = shutil.get_terminal_size((80, 24))
    return max(1, term.columns), max(1, term.lines)


def hunk_display_rows(
    hunk: ExtractedHunk,
    style: str = DEFAULT_STYLE,
    colorize: bool = True,
) -> list[str]:
    """Return one styled row per hunk line, marking the highlighted line."""
    bodies = [sanitize_terminal_text(line.body) for line in hunk.lines]
    code_rows = [idx for idx, line in enumerate(hunk.lines) if line.kind != DiffLineKind.HUNK_HEADER]
    display = list(bodies)
    if colorize and hunk.source_path is not None and code_rows:
        colored = colorize_lines([bodies[idx] for idx in code_rows], hunk.source_path, style)
        for idx, text in zip(code_rows, colored):
            display[idx] = text

    rows: list[str] = []
    for idx, line in enumerate(hunk.lines):
        if idx == hunk.highlight_index:
            prefix = CURSOR_MARKER if colorize else CURSOR_MARKER_PLAIN
        else:
            prefix = NO_MARKER
        rows.append(prefix + format_hunk_line(line, display[idx], colorize))
    return rows


def once(callback: Callable[[], None]) -> Callable[[], None]:
    """Wrap ``callback`` so only its first invocation runs."""
    called = False

    def _run_once() -> None:
        nonlocal called
        if called:
            return
        called = True
        callback()

    return _run_once
