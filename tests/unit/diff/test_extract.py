"""Tests for hunk extraction and original-text recovery.

Verifies highlight clamping, header/location capture, and that the stored
original text is replaced rather than accumulated across extractions.
"""

from __future__ import annotations

import unittest

from hunkpeek.diff import extract as extract_module
from hunkpeek.diff.extract import HunkExtractor, extract_hunk, last_original_text
from hunkpeek.diff.locate import locate_hunk
from hunkpeek.diff.model import DiffLineKind, DiffText, HunkBoundary, HunkLocation

TWO_HUNKS = "\n".join(
    [
        "@@ -1,2 +1,2 @@",
        "-removed one",
        "-removed two",
        "+added",
        " context",
        "@@ -9 +9,3 @@",
        "+x",
        "-y",
        " z",
    ]
)


class HunkExtractorTests(unittest.TestCase):
    def test_example_hunk_highlight_and_original_text(self) -> None:
        diff_text = DiffText.from_text(TWO_HUNKS)
        extractor = HunkExtractor()

        boundary = locate_hunk(diff_text, 2)
        hunk = extractor.extract(diff_text, boundary, 2)

        self.assertEqual(boundary, HunkBoundary(1, 5))
        self.assertEqual(hunk.highlight_index, 1)
        self.assertEqual(
            [line.kind for line in hunk.lines],
            [DiffLineKind.REMOVED, DiffLineKind.REMOVED, DiffLineKind.ADDED, DiffLineKind.CONTEXT],
        )
        self.assertEqual(extractor.original_text, "removed one\nremoved two")
        self.assertEqual(hunk.header, "@@ -1,2 +1,2 @@")
        self.assertEqual(hunk.location, HunkLocation(1, 2, 1, 2))

    def test_highlight_index_is_clamped_to_hunk(self) -> None:
        diff_text = DiffText.from_text(TWO_HUNKS)
        extractor = HunkExtractor()
        boundary = HunkBoundary(6, 9)

        self.assertEqual(extractor.extract(diff_text, boundary, 0).highlight_index, 0)
        self.assertEqual(extractor.extract(diff_text, boundary, 6).highlight_index, 0)
        self.assertEqual(extractor.extract(diff_text, boundary, 8).highlight_index, 2)
        self.assertEqual(extractor.extract(diff_text, boundary, 40).highlight_index, 2)

    def test_original_text_is_replaced_by_next_extraction(self) -> None:
        diff_text = DiffText.from_text(TWO_HUNKS)
        extractor = HunkExtractor()

        extractor.extract(diff_text, HunkBoundary(1, 5), 1)
        extractor.extract(diff_text, HunkBoundary(6, 9), 6)

        self.assertEqual(extractor.original_text, "y")

    def test_hunk_without_removed_lines_has_empty_original_text(self) -> None:
        diff_text = DiffText.from_text("@@ -3,0 +4 @@\n+new")
        extractor = HunkExtractor()
        extractor.original_text = "stale"

        extractor.extract(diff_text, HunkBoundary(1, 2), 1)

        self.assertEqual(extractor.original_text, "")

    def test_only_one_marker_character_is_stripped(self) -> None:
        diff_text = DiffText.from_text("@@ -1 +1 @@\n--flag\n+-flag")
        extractor = HunkExtractor()
        extractor.extract(diff_text, HunkBoundary(1, 3), 1)
        self.assertEqual(extractor.original_text, "-flag")

    def test_form_feed_is_kept_in_original_text(self) -> None:
        diff_text = DiffText.from_text("@@ -1 +1 @@\n-a\x0cb\n+c")
        extractor = HunkExtractor()
        extractor.extract(diff_text, HunkBoundary(1, 3), 1)
        self.assertEqual(extractor.original_text, "a\x0cb")

    def test_empty_boundary_yields_empty_hunk(self) -> None:
        diff_text = DiffText.from_text("@@ -1 +1 @@")
        hunk = HunkExtractor().extract(diff_text, HunkBoundary(1, 1), 0)
        self.assertTrue(hunk.is_empty)
        self.assertEqual(hunk.highlight_index, 0)

    def test_module_level_extract_updates_shared_original_text(self) -> None:
        previous = extract_module._DEFAULT_EXTRACTOR.original_text
        try:
            diff_text = DiffText.from_text(TWO_HUNKS)
            extract_hunk(diff_text, HunkBoundary(1, 5), 3)
            self.assertEqual(last_original_text(), "removed one\nremoved two")
        finally:
            extract_module._DEFAULT_EXTRACTOR.original_text = previous


if __name__ == "__main__":
    unittest.main()
