"""Immutable data types for classified unified-diff text.

``DiffText`` tags every line once, up front, so hunk location and extraction
operate on indices instead of re-scanning raw text.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
import re

DEFAULT_HUNK_HEADER_PATTERN = r"^@@.*@@"

_HUNK_RE = re.compile(r"^@@ -(\d+)(?:,(\d+))? \+(\d+)(?:,(\d+))? @@")


def split_lines(text: str) -> list[str]:
    """Split on ``\\n`` only; a single trailing newline ends the last line.

    Form feeds, carriage returns, and Unicode line separators stay inside
    their line.
    """
    if not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines


SOURCE_ENCODINGS = ("utf-8", "latin-1")


def decode_source(data: bytes) -> tuple[str, str]:
    """Decode file or git bytes, returning the text and the encoding used.

    UTF-8 is tried first; latin-1 maps every byte, so re-encoding with the
    returned encoding reproduces the input exactly.
    """
    for encoding in SOURCE_ENCODINGS:
        try:
            return data.decode(encoding), encoding
        except UnicodeDecodeError:
            continue
    raise AssertionError("latin-1 decodes any byte string")


class DiffLineKind(Enum):
    """Line classification derived from the first character of a diff line."""

    CONTEXT = "context"
    ADDED = "added"
    REMOVED = "removed"
    HUNK_HEADER = "hunk_header"


@dataclass(frozen=True)
class DiffLine:
    kind: DiffLineKind
    text: str

    @property
    def body(self) -> str:
        """Line text without its leading marker character."""
        if self.kind in {DiffLineKind.ADDED, DiffLineKind.REMOVED}:
            return self.text[1:]
        if self.kind == DiffLineKind.CONTEXT and self.text.startswith(" "):
            return self.text[1:]
        return self.text


def classify_diff_line(line: str, header_re: re.Pattern[str]) -> DiffLineKind:
    """Classify one raw diff line; header matching wins over marker prefixes."""
    if header_re.search(line):
        return DiffLineKind.HUNK_HEADER
    if line.startswith("+"):
        return DiffLineKind.ADDED
    if line.startswith("-"):
        return DiffLineKind.REMOVED
    return DiffLineKind.CONTEXT


@dataclass(frozen=True)
class DiffText:
    """Ordered, classified diff lines produced once per show request."""

    lines: tuple[DiffLine, ...] = ()

    @classmethod
    def from_text(cls, text: str, header_pattern: str = DEFAULT_HUNK_HEADER_PATTERN) -> DiffText:
        header_re = re.compile(header_pattern)
        return cls(
            tuple(DiffLine(classify_diff_line(raw, header_re), raw) for raw in split_lines(text))
        )

    def __len__(self) -> int:
        return len(self.lines)

    def __getitem__(self, index: int) -> DiffLine:
        return self.lines[index]

    def is_header(self, index: int) -> bool:
        return 0 <= index < len(self.lines) and self.lines[index].kind == DiffLineKind.HUNK_HEADER

    def header_indices(self) -> list[int]:
        return [idx for idx, line in enumerate(self.lines) if line.kind == DiffLineKind.HUNK_HEADER]

    def to_text(self) -> str:
        return "\n".join(line.text for line in self.lines)


@dataclass(frozen=True)
class HunkBoundary:
    """Half-open ``[start, end)`` index range of one hunk body in a ``DiffText``."""

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start < 0 or self.start > self.end:
            raise ValueError(f"invalid hunk boundary [{self.start}, {self.end})")

    @property
    def is_empty(self) -> bool:
        return self.start == self.end

    def __len__(self) -> int:
        return self.end - self.start

    def __contains__(self, index: object) -> bool:
        return isinstance(index, int) and self.start <= index < self.end


@dataclass(frozen=True)
class HunkLocation:
    """Numeric ranges parsed from a git-style ``@@ -a,b +c,d @@`` header."""

    old_start: int
    old_count: int
    new_start: int
    new_count: int

    @classmethod
    def parse(cls, header: str) -> HunkLocation | None:
        """Parse header ranges, returning ``None`` for non-numeric headers.

        Omitted counts default to ``1`` as git writes them.
        """
        match = _HUNK_RE.match(header)
        if match is None:
            return None
        return cls(
            old_start=int(match.group(1)),
            old_count=int(match.group(2) or "1"),
            new_start=int(match.group(3)),
            new_count=int(match.group(4) or "1"),
        )

    @property
    def is_pure_deletion(self) -> bool:
        return self.new_count == 0

    @property
    def anchor_line(self) -> int:
        """Working-file line where this hunk is shown and navigated to."""
        if self.is_pure_deletion:
            return max(1, self.new_start)
        return self.new_start

    @property
    def last_line(self) -> int:
        if self.is_pure_deletion:
            return self.anchor_line
        return self.new_start + self.new_count - 1

    def contains(self, line: int) -> bool:
        return self.anchor_line <= line <= self.last_line


@dataclass(frozen=True)
class RevertLocation:
    """Working file plus the hunk ranges a revert should rewrite."""

    path: Path
    hunk: HunkLocation


@dataclass(frozen=True)
class ExtractedHunk:
    """Materialized hunk lines plus the display index of the caller's cursor."""

    lines: tuple[DiffLine, ...]
    highlight_index: int
    boundary: HunkBoundary
    header: str | None = None
    location: HunkLocation | None = None
    source_path: Path | None = None

    @property
    def is_empty(self) -> bool:
        return not self.lines

    @property
    def has_context(self) -> bool:
        return any(line.kind == DiffLineKind.CONTEXT for line in self.lines)

    @property
    def removed_lines(self) -> list[str]:
        return [line.body for line in self.lines if line.kind == DiffLineKind.REMOVED]

    @property
    def added_lines(self) -> list[str]:
        return [line.body for line in self.lines if line.kind == DiffLineKind.ADDED]
