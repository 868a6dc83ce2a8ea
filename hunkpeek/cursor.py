"""Caller-side view position the pipeline reads, moves, and restores."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .session import OriginInfo


@dataclass
class FileCursor:
    """One-line cursor in a working file, identified by ``view``."""

    path: Path
    line: int = 1
    view: str = "main"

    def position(self) -> OriginInfo:
        return OriginInfo(view=self.view, path=self.path, line=self.line)

    def move_to(self, line: int) -> None:
        self.line = max(1, line)

    def restore(self, origin: OriginInfo) -> None:
        """Return focus to ``origin``, switching files when it differs."""
        self.view = str(origin.view)
        self.path = origin.path
        self.line = max(1, origin.line)
