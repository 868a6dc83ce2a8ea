"""Tests for diff line classification and hunk header parsing.

Covers marker-based kinds, configurable header patterns, and the
git range arithmetic used for anchoring and containment.
"""

from __future__ import annotations

import unittest

from hunkpeek.diff.model import DiffLineKind, DiffText, ExtractedHunk, HunkBoundary, HunkLocation, split_lines


class DiffTextClassificationTests(unittest.TestCase):
    def test_lines_are_classified_by_first_character(self) -> None:
        diff_text = DiffText.from_text("@@ -1,2 +1,2 @@\n-old\n+new\n same\n")

        self.assertEqual(
            [line.kind for line in diff_text.lines],
            [
                DiffLineKind.HUNK_HEADER,
                DiffLineKind.REMOVED,
                DiffLineKind.ADDED,
                DiffLineKind.CONTEXT,
            ],
        )
        self.assertEqual(diff_text.header_indices(), [0])

    def test_body_strips_exactly_one_marker(self) -> None:
        diff_text = DiffText.from_text("--x\n++y\n  z")

        self.assertEqual([line.body for line in diff_text.lines], ["-x", "+y", " z"])

    def test_custom_header_pattern_changes_boundaries(self) -> None:
        raw = "== section ==\n+added\n@@ -1 +1 @@\n-removed"

        default = DiffText.from_text(raw)
        custom = DiffText.from_text(raw, header_pattern=r"^== .* ==$")

        self.assertEqual(default.header_indices(), [2])
        self.assertEqual(custom.header_indices(), [0])
        self.assertEqual(custom[2].kind, DiffLineKind.CONTEXT)

    def test_form_feed_stays_inside_its_line(self) -> None:
        diff_text = DiffText.from_text("@@ -1 +1 @@\n-a\x0cb\n+c")

        self.assertEqual(
            [line.kind for line in diff_text.lines],
            [DiffLineKind.HUNK_HEADER, DiffLineKind.REMOVED, DiffLineKind.ADDED],
        )
        self.assertEqual(diff_text[1].text, "-a\x0cb")

    def test_split_lines_breaks_on_newline_only(self) -> None:
        self.assertEqual(split_lines(""), [])
        self.assertEqual(split_lines("a\n"), ["a"])
        self.assertEqual(split_lines("a\n\n"), ["a", ""])
        self.assertEqual(split_lines("a\r\nb c\x1ed"), ["a\r", "b c\x1ed"])

    def test_to_text_round_trips_lines(self) -> None:
        raw = "@@ -1 +1 @@\n-a\n+b"
        self.assertEqual(DiffText.from_text(raw).to_text(), raw)

    def test_is_header_is_false_out_of_range(self) -> None:
        diff_text = DiffText.from_text("@@ -1 +1 @@")
        self.assertFalse(diff_text.is_header(-1))
        self.assertFalse(diff_text.is_header(1))


class HunkBoundaryTests(unittest.TestCase):
    def test_rejects_inverted_ranges(self) -> None:
        with self.assertRaises(ValueError):
            HunkBoundary(4, 2)
        with self.assertRaises(ValueError):
            HunkBoundary(-1, 2)

    def test_membership_is_half_open(self) -> None:
        boundary = HunkBoundary(1, 3)
        self.assertNotIn(0, boundary)
        self.assertIn(1, boundary)
        self.assertIn(2, boundary)
        self.assertNotIn(3, boundary)
        self.assertEqual(len(boundary), 2)
        self.assertTrue(HunkBoundary(2, 2).is_empty)


class HunkLocationTests(unittest.TestCase):
    def test_parse_defaults_missing_counts_to_one(self) -> None:
        self.assertEqual(HunkLocation.parse("@@ -5 +7 @@ def f():"), HunkLocation(5, 1, 7, 1))
        self.assertEqual(HunkLocation.parse("@@ -5,0 +6,3 @@"), HunkLocation(5, 0, 6, 3))

    def test_parse_returns_none_for_non_numeric_header(self) -> None:
        self.assertIsNone(HunkLocation.parse("@@ something @@"))

    def test_modified_range_contains_its_new_lines(self) -> None:
        location = HunkLocation(10, 2, 10, 3)
        self.assertEqual(location.anchor_line, 10)
        self.assertEqual(location.last_line, 12)
        self.assertTrue(location.contains(12))
        self.assertFalse(location.contains(13))
        self.assertFalse(location.contains(9))

    def test_pure_deletion_anchors_on_preceding_line(self) -> None:
        deletion = HunkLocation(7, 2, 6, 0)
        self.assertTrue(deletion.is_pure_deletion)
        self.assertEqual(deletion.anchor_line, 6)
        self.assertTrue(deletion.contains(6))
        self.assertFalse(deletion.contains(7))

    def test_deletion_at_file_start_anchors_on_line_one(self) -> None:
        self.assertEqual(HunkLocation(1, 3, 0, 0).anchor_line, 1)


class ExtractedHunkTests(unittest.TestCase):
    def test_removed_and_added_lines_and_context_flag(self) -> None:
        diff_text = DiffText.from_text("-a\n+b\n c")
        hunk = ExtractedHunk(lines=diff_text.lines, highlight_index=0, boundary=HunkBoundary(0, 3))

        self.assertEqual(hunk.removed_lines, ["a"])
        self.assertEqual(hunk.added_lines, ["b"])
        self.assertTrue(hunk.has_context)
        self.assertFalse(hunk.is_empty)


if __name__ == "__main__":
    unittest.main()
