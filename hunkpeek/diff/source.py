"""Diff sources: produce classified diff text and keep a hunk-aware cursor.

``DiffSource`` owns the line-to-hunk mapping and adjacency logic; subclasses
only supply raw unified-diff text. ``GitDiffSource`` shells out to git.
"""

from __future__ import annotations

import contextlib
import logging
import os
from pathlib import Path
import re
import subprocess

from ..errors import NoAdjacentHunk
from .model import DEFAULT_HUNK_HEADER_PATTERN, DiffLineKind, DiffText, HunkLocation, decode_source, split_lines

logger = logging.getLogger(__name__)

GIT_TIMEOUT_SECONDS = 2.0


class DiffSource:
    """Base diff source tracking a cursor inside the most recent diff.

    After ``compute_diff`` the ``cursor`` attribute is the 0-based ``DiffText``
    index matching the requested working-file line, and ``cursor_in_change``
    tells whether that line belongs to any hunk at all.
    """

    def __init__(self, header_pattern: str = DEFAULT_HUNK_HEADER_PATTERN) -> None:
        self.header_pattern = header_pattern
        self.diff_text = DiffText()
        self.hunks: list[tuple[int, HunkLocation]] = []
        self.line = 1
        self.cursor = 0
        self.cursor_in_change = False
        self._current_hunk: int | None = None

    def fetch_diff(self, path: Path, revision: str) -> str:
        raise NotImplementedError

    @property
    def hunk_locations(self) -> list[HunkLocation]:
        return [location for _header_idx, location in self.hunks]

    def compute_diff(self, path: Path, revision: str, line: int) -> DiffText:
        """Fetch and classify the diff for ``path`` and position the cursor at ``line``."""
        self.load(self.fetch_diff(path, revision), line)
        return self.diff_text

    def load(self, raw_diff: str, line: int) -> None:
        self.diff_text = DiffText.from_text(raw_diff, self.header_pattern)
        self.hunks = []
        for header_idx in self.diff_text.header_indices():
            location = HunkLocation.parse(self.diff_text[header_idx].text)
            if location is not None:
                self.hunks.append((header_idx, location))
        if self.diff_text.header_indices() and not self.hunks:
            logger.warning(
                "hunk headers matching %r carry no git line ranges; treating file as unchanged",
                self.header_pattern,
            )
        self.position_at(line)

    def position_at(self, line: int) -> None:
        self.line = max(1, line)
        self.cursor = 0
        self.cursor_in_change = False
        self._current_hunk = None
        for ordinal, (_header_idx, location) in enumerate(self.hunks):
            if location.contains(self.line):
                self._enter_hunk(ordinal, self.line)
                return

    def _enter_hunk(self, ordinal: int, line: int) -> None:
        self._current_hunk = ordinal
        self.line = line
        self.cursor = self._body_index_for_line(ordinal, line)
        self.cursor_in_change = True

    def _body_index_for_line(self, ordinal: int, line: int) -> int:
        """Map a working-file line to the diff index of its body line."""
        header_idx, location = self.hunks[ordinal]
        total = len(self.diff_text)
        new_line = location.new_start
        idx = header_idx + 1
        while idx < total and not self.diff_text.is_header(idx):
            kind = self.diff_text[idx].kind
            if kind != DiffLineKind.REMOVED:
                if new_line == line:
                    return idx
                new_line += 1
            idx += 1
        # Pure deletions have no new-side line; show from the first body line.
        return min(header_idx + 1, total - 1)

    def _adjacent_ordinal(self, direction: int) -> int | None:
        if direction == 0 or not self.hunks:
            return None
        if self._current_hunk is not None:
            target = self._current_hunk + (1 if direction > 0 else -1)
            return target if 0 <= target < len(self.hunks) else None
        if direction < 0:
            before = [
                ordinal
                for ordinal, (_header_idx, location) in enumerate(self.hunks)
                if location.last_line < self.line
            ]
            return before[-1] if before else None
        for ordinal, (_header_idx, location) in enumerate(self.hunks):
            if location.anchor_line > self.line:
                return ordinal
        return None

    def has_adjacent_hunk(self, direction: int) -> bool:
        return self._adjacent_ordinal(direction) is not None

    def move_to_adjacent_hunk(self, direction: int) -> int:
        """Move the cursor onto the adjacent hunk and return its anchor line."""
        ordinal = self._adjacent_ordinal(direction)
        if ordinal is None:
            raise NoAdjacentHunk(direction)
        anchor = self.hunks[ordinal][1].anchor_line
        self._enter_hunk(ordinal, anchor)
        return anchor

    @contextlib.contextmanager
    def preserved_cursor(self):
        """Restore diff, cursor, and hunk state after a speculative lookup."""
        saved = (
            self.diff_text,
            self.hunks,
            self.line,
            self.cursor,
            self.cursor_in_change,
            self._current_hunk,
        )
        try:
            yield self
        finally:
            (
                self.diff_text,
                self.hunks,
                self.line,
                self.cursor,
                self.cursor_in_change,
                self._current_hunk,
            ) = saved


def _run_git(
    cwd: Path,
    args: list[str],
    timeout_seconds: float,
) -> subprocess.CompletedProcess[bytes] | None:
    """Execute a git subcommand with timeout and tolerant failure handling.

    Output stays as bytes so carriage returns inside diff lines survive.
    """
    try:
        return subprocess.run(
            ["git", "-C", str(cwd), *args],
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            check=False,
            timeout=timeout_seconds,
        )
    except (OSError, subprocess.SubprocessError) as exc:
        logger.warning("git %s failed: %s", " ".join(args[:1]), exc)
        return None


def resolve_repo_root(path: Path, timeout_seconds: float = GIT_TIMEOUT_SECONDS) -> Path | None:
    """Return the repository top-level directory containing ``path``."""
    directory = path if path.is_dir() else path.parent
    proc = _run_git(directory, ["rev-parse", "--show-toplevel"], timeout_seconds)
    if proc is None or proc.returncode != 0:
        return None
    top = os.fsdecode(proc.stdout).strip()
    return Path(top).resolve() if top else None


def _relative_to_repo(path: Path, timeout_seconds: float) -> tuple[Path, Path] | None:
    target = path.resolve()
    repo_root = resolve_repo_root(target, timeout_seconds)
    if repo_root is None or not target.is_relative_to(repo_root):
        return None
    return repo_root, target.relative_to(repo_root)


def git_is_tracked(path: Path, timeout_seconds: float = GIT_TIMEOUT_SECONDS) -> bool:
    """Return whether git tracks ``path`` in its index."""
    resolved = _relative_to_repo(path, timeout_seconds)
    if resolved is None:
        return False
    repo_root, rel_path = resolved
    proc = _run_git(
        repo_root,
        ["ls-files", "--error-unmatch", "--", str(rel_path)],
        timeout_seconds,
    )
    return proc is not None and proc.returncode == 0


def strip_diff_preamble(diff_text: str, header_pattern: str = DEFAULT_HUNK_HEADER_PATTERN) -> str:
    """Drop file headers before the first hunk and no-newline markers."""
    header_re = re.compile(header_pattern)
    kept: list[str] = []
    seen_header = False
    for raw_line in split_lines(diff_text):
        if not seen_header:
            if not header_re.search(raw_line):
                continue
            seen_header = True
        if raw_line.startswith("\\"):
            continue
        kept.append(raw_line)
    return "\n".join(kept)


class GitDiffSource(DiffSource):
    """Diff source backed by ``git diff <revision> -- <path>``."""

    def __init__(
        self,
        context_lines: int = 0,
        timeout_seconds: float = GIT_TIMEOUT_SECONDS,
        header_pattern: str = DEFAULT_HUNK_HEADER_PATTERN,
    ) -> None:
        super().__init__(header_pattern)
        self.context_lines = max(0, context_lines)
        self.timeout_seconds = timeout_seconds

    def fetch_diff(self, path: Path, revision: str) -> str:
        resolved = _relative_to_repo(path, self.timeout_seconds)
        if resolved is None:
            return ""
        repo_root, rel_path = resolved
        proc = _run_git(
            repo_root,
            ["diff", "--no-color", f"-U{self.context_lines}", revision, "--", str(rel_path)],
            self.timeout_seconds,
        )
        if proc is None or proc.returncode != 0:
            logger.warning("git diff against %s failed for %s", revision, rel_path)
            return ""
        diff_text, _encoding = decode_source(proc.stdout)
        return strip_diff_preamble(diff_text, self.header_pattern)
