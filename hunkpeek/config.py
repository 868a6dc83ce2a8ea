"""Persistent JSON config helpers.

Stores renderer choice, reference revision, diff context, header pattern,
highlight style, and git timeout. All access is defensive: malformed or
missing config falls back to defaults.
"""

from __future__ import annotations

from dataclasses import dataclass
import json
import logging
from pathlib import Path
import re

from platformdirs import user_config_dir

from .diff.model import DEFAULT_HUNK_HEADER_PATTERN
from .highlight import DEFAULT_STYLE

logger = logging.getLogger(__name__)

APP_NAME = "hunkpeek"
CONFIG_FILENAME = "config.json"
DEFAULT_CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
CONFIG_PATH = DEFAULT_CONFIG_PATH

DEFAULT_RENDERER = "inline"
DEFAULT_REFERENCE_REVISION = "HEAD"
DEFAULT_CONTEXT_LINES = 0
DEFAULT_GIT_TIMEOUT_SECONDS = 2.0


@dataclass(frozen=True)
class HunkPeekSettings:
    renderer: str | None = DEFAULT_RENDERER
    reference_revision: str = DEFAULT_REFERENCE_REVISION
    context_lines: int = DEFAULT_CONTEXT_LINES
    hunk_header_pattern: str = DEFAULT_HUNK_HEADER_PATTERN
    style: str = DEFAULT_STYLE
    git_timeout_seconds: float = DEFAULT_GIT_TIMEOUT_SECONDS


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Filesystem errors are logged and otherwise ignored.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except OSError as exc:
        logger.warning("cannot write config %s: %s", CONFIG_PATH, exc)


def _load_nonempty_string(data: dict[str, object], key: str) -> str | None:
    value = data.get(key)
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def load_renderer_name(data: dict[str, object] | None = None) -> str | None:
    """Load renderer name; ``null`` in the file explicitly disables rendering."""
    data = load_config() if data is None else data
    if "renderer" in data and data["renderer"] is None:
        return None
    return _load_nonempty_string(data, "renderer") or DEFAULT_RENDERER


def save_renderer_name(name: str) -> None:
    stripped = str(name).strip()
    if not stripped:
        return
    config = load_config()
    config["renderer"] = stripped
    save_config(config)


def load_reference_revision(data: dict[str, object] | None = None) -> str:
    data = load_config() if data is None else data
    return _load_nonempty_string(data, "reference_revision") or DEFAULT_REFERENCE_REVISION


def load_context_lines(data: dict[str, object] | None = None) -> int:
    """Load diff context line count.

    Booleans, non-integers, and negative values fall back to the default.
    """
    data = load_config() if data is None else data
    value = data.get("context_lines")
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        return DEFAULT_CONTEXT_LINES
    return value


def load_hunk_header_pattern(data: dict[str, object] | None = None) -> str:
    """Load the hunk boundary regex, ignoring patterns that do not compile.

    The pattern only decides which lines are hunk headers. Line numbers are
    still read from git-style ``@@ -a,b +c,d @@`` ranges, so headers without
    them locate no hunks and the file reports "no changes".
    """
    data = load_config() if data is None else data
    pattern = _load_nonempty_string(data, "hunk_header_pattern")
    if pattern is None:
        return DEFAULT_HUNK_HEADER_PATTERN
    try:
        re.compile(pattern)
    except re.error:
        logger.warning("ignoring invalid hunk_header_pattern %r", pattern)
        return DEFAULT_HUNK_HEADER_PATTERN
    return pattern


def load_style(data: dict[str, object] | None = None) -> str:
    data = load_config() if data is None else data
    return _load_nonempty_string(data, "style") or DEFAULT_STYLE


def load_git_timeout_seconds(data: dict[str, object] | None = None) -> float:
    data = load_config() if data is None else data
    value = data.get("git_timeout_seconds")
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
        return DEFAULT_GIT_TIMEOUT_SECONDS
    return float(value)


def load_settings() -> HunkPeekSettings:
    """Load every setting from one read of the config file."""
    data = load_config()
    return HunkPeekSettings(
        renderer=load_renderer_name(data),
        reference_revision=load_reference_revision(data),
        context_lines=load_context_lines(data),
        hunk_header_pattern=load_hunk_header_pattern(data),
        style=load_style(data),
        git_timeout_seconds=load_git_timeout_seconds(data),
    )
