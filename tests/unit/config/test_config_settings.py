"""Tests for config persistence and input sanitization.

Validates each settings key and that malformed config data is safely
normalized to defaults on load.
"""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path
from unittest import mock

from hunkpeek import config
from hunkpeek.diff.model import DEFAULT_HUNK_HEADER_PATTERN
from hunkpeek.highlight import DEFAULT_STYLE


class ConfigBehaviorTests(unittest.TestCase):
    def test_missing_file_yields_default_settings(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "missing" / "config.json"
            with mock.patch("hunkpeek.config.CONFIG_PATH", config_path):
                self.assertEqual(config.load_config(), {})
                self.assertEqual(config.load_settings(), config.HunkPeekSettings())

    def test_renderer_name_round_trip(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "nested" / "config.json"
            with mock.patch("hunkpeek.config.CONFIG_PATH", config_path):
                config.save_renderer_name("  floating  ")
                self.assertEqual(config.load_renderer_name(), "floating")
                config.save_renderer_name("   ")
                self.assertEqual(config.load_config(), {"renderer": "floating"})

    def test_null_renderer_disables_rendering(self) -> None:
        self.assertIsNone(config.load_renderer_name({"renderer": None}))
        self.assertEqual(config.load_renderer_name({}), config.DEFAULT_RENDERER)
        self.assertEqual(config.load_renderer_name({"renderer": 3}), config.DEFAULT_RENDERER)

    def test_malformed_json_is_ignored(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            config_path.write_text("{not json", encoding="utf-8")
            with mock.patch("hunkpeek.config.CONFIG_PATH", config_path):
                self.assertEqual(config.load_config(), {})
            config_path.write_text("[1, 2]", encoding="utf-8")
            with mock.patch("hunkpeek.config.CONFIG_PATH", config_path):
                self.assertEqual(config.load_config(), {})

    def test_settings_load_every_key_from_one_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            with mock.patch("hunkpeek.config.CONFIG_PATH", config_path):
                config.save_config(
                    {
                        "renderer": "floating",
                        "reference_revision": "main",
                        "context_lines": 3,
                        "hunk_header_pattern": "^##",
                        "style": "default",
                        "git_timeout_seconds": 5,
                    }
                )
                settings = config.load_settings()

        self.assertEqual(
            settings,
            config.HunkPeekSettings(
                renderer="floating",
                reference_revision="main",
                context_lines=3,
                hunk_header_pattern="^##",
                style="default",
                git_timeout_seconds=5.0,
            ),
        )

    def test_invalid_values_fall_back_to_defaults(self) -> None:
        data = {
            "reference_revision": "   ",
            "context_lines": -2,
            "style": 7,
            "git_timeout_seconds": True,
        }
        self.assertEqual(config.load_reference_revision(data), config.DEFAULT_REFERENCE_REVISION)
        self.assertEqual(config.load_context_lines(data), config.DEFAULT_CONTEXT_LINES)
        self.assertEqual(config.load_context_lines({"context_lines": True}), config.DEFAULT_CONTEXT_LINES)
        self.assertEqual(config.load_context_lines({"context_lines": 1.5}), config.DEFAULT_CONTEXT_LINES)
        self.assertEqual(config.load_style(data), DEFAULT_STYLE)
        self.assertEqual(config.load_git_timeout_seconds(data), config.DEFAULT_GIT_TIMEOUT_SECONDS)
        self.assertEqual(config.load_git_timeout_seconds({"git_timeout_seconds": 0}), config.DEFAULT_GIT_TIMEOUT_SECONDS)

    def test_uncompilable_header_pattern_is_rejected(self) -> None:
        with self.assertLogs("hunkpeek.config", level="WARNING"):
            pattern = config.load_hunk_header_pattern({"hunk_header_pattern": "(unclosed"})
        self.assertEqual(pattern, DEFAULT_HUNK_HEADER_PATTERN)

    def test_unwritable_config_is_logged(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            blocker = Path(tmp) / "file"
            blocker.write_text("", encoding="utf-8")
            with mock.patch("hunkpeek.config.CONFIG_PATH", blocker / "config.json"):
                with self.assertLogs("hunkpeek.config", level="WARNING"):
                    config.save_config({"renderer": "inline"})


if __name__ == "__main__":
    unittest.main()
