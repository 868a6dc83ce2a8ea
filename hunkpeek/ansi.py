"""ANSI-aware text measurement and terminal-safety helpers.

Renderers clip styled hunk lines to panel width; escape sequences are kept
verbatim and do not count toward width.
"""

from __future__ import annotations

from collections.abc import Iterator
import re
import unicodedata

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")
TAB_STOP = 8

# C0 controls except tab, plus DEL and C1 controls.
_CONTROL_RE = re.compile(r"[\x00-\x08\x0a-\x1f\x7f-\x9f]")


def cell_width(ch: str, col: int) -> int:
    """Columns one character occupies when drawn at visual column ``col``."""
    if ch == "\t":
        return TAB_STOP - (col % TAB_STOP)
    if unicodedata.combining(ch):
        return 0
    return 2 if unicodedata.east_asian_width(ch) in {"W", "F"} else 1


def _segments(text: str) -> Iterator[tuple[str, bool]]:
    """Split ``text`` into ``(chunk, is_escape)`` pieces in order."""
    pos = 0
    for match in ANSI_ESCAPE_RE.finditer(text):
        if match.start() > pos:
            yield text[pos : match.start()], False
        yield match.group(0), True
        pos = match.end()
    if pos < len(text):
        yield text[pos:], False


def display_width(text: str) -> int:
    """Return rendered column width of ``text`` ignoring escape sequences."""
    col = 0
    for chunk, is_escape in _segments(text):
        if is_escape:
            continue
        for ch in chunk:
            col += cell_width(ch, col)
    return col


def clip_ansi_line(text: str, max_cols: int) -> str:
    """Trim a styled line to at most ``max_cols`` display columns.

    Escapes before the cut are kept; tabs become spaces so the clipped row
    lines up with terminal cells.
    """
    out: list[str] = []
    col = 0
    for chunk, is_escape in _segments(text):
        if col >= max_cols:
            break
        if is_escape:
            out.append(chunk)
            continue
        for ch in chunk:
            width = cell_width(ch, col)
            if col >= max_cols or col + width > max_cols:
                return "".join(out)
            out.append(" " * width if ch == "\t" else ch)
            col += width
    return "".join(out)


def sanitize_terminal_text(source: str) -> str:
    """Escape control bytes that would move the cursor or ring the bell.

    Tabs pass through; a trailing carriage return from a CRLF line is dropped
    and any other control character is shown as ``\\xNN``.
    """
    if source.endswith("\r"):
        source = source[:-1]
    return _CONTROL_RE.sub(lambda match: f"\\x{ord(match.group(0)):02x}", source)
