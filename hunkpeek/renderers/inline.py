"""Inline renderer: print the hunk in the terminal flow below the caller."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
import sys
from typing import TextIO

from ..ansi import clip_ansi_line, sanitize_terminal_text
from ..diff.model import ExtractedHunk
from ..highlight import DEFAULT_STYLE, HEADER_SGR
from .lines import hunk_display_rows, once, terminal_size


@dataclass
class InlineRenderer:
    """Write hunk rows to ``stream`` and erase them again on teardown.

    Erasing relies on cursor movement, so it only happens on a TTY. Printed
    rows have no UI of their own, so ``dismiss`` is never called here.
    """

    stream: TextIO | None = None
    style: str = DEFAULT_STYLE
    colorize: bool = True
    max_cols: int | None = None

    def __call__(self, hunk: ExtractedHunk, dismiss: Callable[[], None]) -> Callable[[], None]:
        stream = self.stream if self.stream is not None else sys.stdout
        width = self.max_cols if self.max_cols is not None else terminal_size()[0]

        rows: list[str] = []
        if hunk.header is not None:
            header = sanitize_terminal_text(hunk.header)
            rows.append(f"\033[{HEADER_SGR}m{header}\033[0m" if self.colorize else header)
        rows.extend(hunk_display_rows(hunk, self.style, self.colorize))

        out: list[str] = []
        for row in rows:
            out.append(clip_ansi_line(row, width))
            if "\033" in row:
                out.append("\033[0m")
            out.append("\n")
        stream.write("".join(out))
        stream.flush()

        row_count = len(rows)

        def _erase() -> None:
            isatty = getattr(stream, "isatty", None)
            if row_count and callable(isatty) and isatty():
                stream.write(f"\033[{row_count}F\033[J")
                stream.flush()

        return once(_erase)
