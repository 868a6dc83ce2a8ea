"""Narrow classified diff text to one hunk and recover its pre-change text."""

from __future__ import annotations

from .locate import hunk_header_before
from .model import DiffLineKind, DiffText, ExtractedHunk, HunkBoundary, HunkLocation


def original_text_for(lines) -> str:
    """Join removed lines with their single leading marker stripped."""
    return "\n".join(line.text[1:] for line in lines if line.kind == DiffLineKind.REMOVED)


class HunkExtractor:
    """Slice hunks out of diff text, remembering the latest original text.

    ``original_text`` always reflects the most recent extraction only, so a
    later "copy original" action sees exactly the hunk last shown.
    """

    def __init__(self) -> None:
        self.original_text = ""

    def extract(self, diff_text: DiffText, boundary: HunkBoundary, cursor: int) -> ExtractedHunk:
        end = min(boundary.end, len(diff_text))
        start = min(boundary.start, end)
        lines = diff_text.lines[start:end]
        if lines:
            highlight_index = max(0, min(cursor - start, len(lines) - 1))
        else:
            highlight_index = 0

        header = hunk_header_before(diff_text, boundary)
        self.original_text = original_text_for(lines)
        return ExtractedHunk(
            lines=lines,
            highlight_index=highlight_index,
            boundary=boundary,
            header=header,
            location=HunkLocation.parse(header) if header is not None else None,
        )


_DEFAULT_EXTRACTOR = HunkExtractor()


def extract_hunk(diff_text: DiffText, boundary: HunkBoundary, cursor: int) -> ExtractedHunk:
    """Extract using the process-wide default extractor."""
    return _DEFAULT_EXTRACTOR.extract(diff_text, boundary, cursor)


def last_original_text() -> str:
    """Return original text stored by the most recent ``extract_hunk`` call."""
    return _DEFAULT_EXTRACTOR.original_text
