"""Write a hunk's original lines back into the working file."""

from __future__ import annotations

import logging
from pathlib import Path

from .diff.model import RevertLocation, decode_source, split_lines

logger = logging.getLogger(__name__)


def revert_lines(current: list[str], original_text: str, location: RevertLocation) -> list[str]:
    """Return ``current`` with the hunk's new-side lines replaced by the original.

    Pure deletions (``new_count == 0``) insert after line ``new_start``; the
    original text of a pure addition is empty and removes the added lines.
    """
    hunk = location.hunk
    original = original_text.split("\n") if hunk.old_count else []
    if hunk.new_count == 0:
        insert_at = max(0, min(hunk.new_start, len(current)))
        return current[:insert_at] + original + current[insert_at:]
    start = max(0, min(hunk.new_start - 1, len(current)))
    end = max(start, min(start + hunk.new_count, len(current)))
    return current[:start] + original + current[end:]


def revert_hunk_in_file(original_text: str, location: RevertLocation) -> None:
    """Rewrite ``location.path`` so the hunk reads as it did before the change.

    Lines are split on ``\\n`` alone and the file is written back in the
    encoding it was read with, so bytes outside the hunk are left as they were.
    """
    path: Path = location.path
    source, encoding = decode_source(path.read_bytes())
    trailing_newline = source.endswith("\n")
    updated = revert_lines(split_lines(source), original_text, location)
    text = "\n".join(updated)
    if updated and trailing_newline:
        text += "\n"
    path.write_bytes(text.encode(encoding, errors="replace"))
    logger.info("reverted hunk at %s:%d (%s)", path, location.hunk.new_start, encoding)
