"""Floating renderer: draw the hunk in a framed panel over the screen.

The panel is positioned with absolute cursor moves, saving and restoring the
caller's cursor around each draw, and is blanked out again on teardown.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
import sys
from typing import TextIO

from ..ansi import clip_ansi_line, display_width, sanitize_terminal_text
from ..diff.model import ExtractedHunk
from ..highlight import DEFAULT_STYLE
from .lines import hunk_display_rows, once, terminal_size

FRAME_SGR = "38;5;45"
TITLE_SGR = "1;38;5;45"
FOOTER_TEXT = "n/p next/prev  y copy  r revert  q close"


@dataclass(frozen=True)
class PanelGeometry:
    x: int
    y: int
    width: int
    height: int

    @property
    def inner_width(self) -> int:
        return max(1, self.width - 2)

    @property
    def inner_height(self) -> int:
        return max(1, self.height - 2)


def panel_geometry(row_count: int, screen_width: int, screen_height: int) -> PanelGeometry:
    """Center a panel sized for ``row_count`` body rows plus the footer."""
    width = min(100, max(20, screen_width - 8))
    width = min(width, screen_width)
    height = min(row_count + 4, max(5, screen_height - 2))
    height = min(height, screen_height)
    x = max(0, (screen_width - width) // 2)
    y = max(0, (screen_height - height) // 2)
    return PanelGeometry(x=x, y=y, width=width, height=height)


def _visible_window(rows: list[str], highlight_index: int, capacity: int) -> tuple[int, list[str]]:
    """Return the slice of rows that fits ``capacity`` and keeps the highlight visible."""
    if len(rows) <= capacity:
        return 0, rows
    start = max(0, min(highlight_index - capacity // 3, len(rows) - capacity))
    return start, rows[start : start + capacity]


@dataclass
class FloatingRenderer:
    """Draw a framed panel; the caller's key loop dismisses it, not the panel."""

    stream: TextIO | None = None
    style: str = DEFAULT_STYLE
    colorize: bool = True
    screen_size: tuple[int, int] | None = None

    def __call__(self, hunk: ExtractedHunk, dismiss: Callable[[], None]) -> Callable[[], None]:
        stream = self.stream if self.stream is not None else sys.stdout
        screen_width, screen_height = self.screen_size or terminal_size()

        rows = hunk_display_rows(hunk, self.style, self.colorize)
        geometry = panel_geometry(len(rows), screen_width, screen_height)
        body_capacity = max(1, geometry.inner_height - 1)
        _, visible = _visible_window(rows, hunk.highlight_index, body_capacity)

        title = sanitize_terminal_text(hunk.header or "hunk")
        title = clip_ansi_line(title, max(1, geometry.inner_width - 4))
        frame = f"\033[{FRAME_SGR}m" if self.colorize else ""
        reset = "\033[0m" if self.colorize else ""

        out: list[str] = ["\x1b7"]
        out.append(f"\033[{geometry.y + 1};{geometry.x + 1}H{frame}╭{'─' * geometry.inner_width}╮{reset}")
        for i in range(geometry.inner_height):
            out.append(f"\033[{geometry.y + 2 + i};{geometry.x + 1}H{frame}│{reset}")
            out.append(" " * geometry.inner_width)
            out.append(f"{frame}│{reset}")
        out.append(f"\033[{geometry.y + geometry.height};{geometry.x + 1}H{frame}╰{'─' * geometry.inner_width}╯{reset}")

        title_x = geometry.x + max(2, (geometry.width - display_width(title)) // 2)
        title_style = f"\033[{TITLE_SGR}m" if self.colorize else ""
        out.append(f"\033[{geometry.y + 1};{title_x + 1}H{title_style}{title}{reset}")

        for i, row in enumerate(visible):
            out.append(f"\033[{geometry.y + 2 + i};{geometry.x + 2}H")
            out.append(clip_ansi_line(row, geometry.inner_width - 1))
            out.append("\033[0m" if "\033" in row else "")

        footer = clip_ansi_line(FOOTER_TEXT, geometry.inner_width - 2)
        footer_style = "\033[2;38;5;250m" if self.colorize else ""
        out.append(f"\033[{geometry.y + geometry.height - 1};{geometry.x + 3}H{footer_style}{footer}{reset}")
        out.append("\x1b8")
        stream.write("".join(out))
        stream.flush()

        def _blank() -> None:
            cleared: list[str] = ["\x1b7"]
            for i in range(geometry.height):
                cleared.append(f"\033[{geometry.y + 1 + i};{geometry.x + 1}H{' ' * geometry.width}")
            cleared.append("\x1b8")
            stream.write("".join(cleared))
            stream.flush()

        return once(_blank)
