"""Fallback renderer: show the whole diff with the cursor line marked.

Used when no renderer is configured; the caller lands on the cursor's line
inside the raw diff instead of an isolated hunk.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
import sys
from typing import TextIO

from ..ansi import sanitize_terminal_text
from ..diff.model import DiffText, ExtractedHunk
from .lines import CURSOR_MARKER_PLAIN, NO_MARKER


@dataclass
class RawDiffRenderer:
    diff_text: DiffText
    cursor: int
    stream: TextIO | None = None

    def __call__(self, hunk: ExtractedHunk, dismiss: Callable[[], None]) -> Callable[[], None]:
        stream = self.stream if self.stream is not None else sys.stdout
        out: list[str] = []
        for idx, line in enumerate(self.diff_text.lines):
            prefix = CURSOR_MARKER_PLAIN if idx == self.cursor else NO_MARKER
            out.append(f"{prefix}{sanitize_terminal_text(line.text)}\n")
        stream.write("".join(out))
        stream.flush()
        return _noop


def _noop() -> None:
    return None
