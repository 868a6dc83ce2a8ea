"""Find the hunk enclosing a cursor position in classified diff text."""

from __future__ import annotations

import logging

from .model import DiffText, HunkBoundary

logger = logging.getLogger(__name__)


def locate_hunk(diff_text: DiffText, cursor: int) -> HunkBoundary:
    """Return the ``[start, end)`` body range of the hunk around ``cursor``.

    ``cursor`` is a 0-based index into ``diff_text`` and is clamped into range.
    A cursor sitting on a header belongs to the hunk that header introduces.
    Missing headers never fail: without a preceding header the range starts at
    0, and without a following one it runs to the end of the text.
    """
    total = len(diff_text)
    if total == 0:
        return HunkBoundary(0, 0)

    position = max(0, min(cursor, total - 1))
    if diff_text.is_header(position):
        position += 1

    header_idx = min(position, total - 1)
    while header_idx >= 0 and not diff_text.is_header(header_idx):
        header_idx -= 1
    if header_idx < 0:
        logger.debug("no hunk header before index %d; using start of text", position)
    start = header_idx + 1

    end = start
    while end < total and not diff_text.is_header(end):
        end += 1
    return HunkBoundary(start, end)


def hunk_header_before(diff_text: DiffText, boundary: HunkBoundary) -> str | None:
    """Return the header text introducing ``boundary``, if there is one."""
    header_idx = boundary.start - 1
    if diff_text.is_header(header_idx):
        return diff_text[header_idx].text
    return None
