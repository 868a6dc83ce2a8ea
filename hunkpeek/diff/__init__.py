"""Unified-diff model, hunk location, extraction, and diff sources."""

from __future__ import annotations

from .extract import HunkExtractor, extract_hunk, last_original_text, original_text_for
from .locate import hunk_header_before, locate_hunk
from .model import (
    DEFAULT_HUNK_HEADER_PATTERN,
    DiffLine,
    DiffLineKind,
    DiffText,
    ExtractedHunk,
    HunkBoundary,
    HunkLocation,
    RevertLocation,
)
from .source import DiffSource, GitDiffSource, git_is_tracked, resolve_repo_root, strip_diff_preamble

__all__ = [
    "DEFAULT_HUNK_HEADER_PATTERN",
    "DiffLine",
    "DiffLineKind",
    "DiffSource",
    "DiffText",
    "ExtractedHunk",
    "GitDiffSource",
    "HunkBoundary",
    "HunkExtractor",
    "HunkLocation",
    "RevertLocation",
    "extract_hunk",
    "git_is_tracked",
    "hunk_header_before",
    "last_original_text",
    "locate_hunk",
    "original_text_for",
    "resolve_repo_root",
    "strip_diff_preamble",
]
