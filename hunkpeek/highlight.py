"""Syntax colouring and diff backgrounds for hunk lines.

Code is coloured with Pygments using the lexer for the working file's name;
added/removed lines then get a persistent background with foreground
contrast boosted so dim tokens stay legible.
"""

from __future__ import annotations

from pathlib import Path
import re

from pygments import highlight as pygments_highlight
from pygments.formatters import TerminalFormatter
from pygments.lexers import TextLexer, get_lexer_for_filename
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

from .diff.model import DiffLine, DiffLineKind

DEFAULT_STYLE = "monokai"

_SGR_RE = re.compile(r"\x1b\[([0-9;]*)m")
ADDED_BG_SGR = "48;2;36;74;52"
REMOVED_BG_SGR = "48;2;92;43;49"
HEADER_SGR = "38;5;81"
_DIFF_CONTRAST_8BIT = "246"
_DIFF_CONTRAST_TRUECOLOR = ("170", "170", "170")

_FORMATTERS: dict[str, TerminalFormatter] = {}
_VALID_STYLES: set[str] = set()
_INVALID_STYLES: set[str] = set()


def normalize_style(style: str) -> str:
    """Validate/canonicalize requested style name with cache-backed checks."""
    if style in _VALID_STYLES:
        return style
    if style in _INVALID_STYLES:
        return DEFAULT_STYLE
    try:
        get_style_by_name(style)
    except ClassNotFound:
        _INVALID_STYLES.add(style)
        return DEFAULT_STYLE
    _VALID_STYLES.add(style)
    return style


def _formatter_for_style(style: str) -> TerminalFormatter:
    formatter = _FORMATTERS.get(style)
    if formatter is None:
        formatter = TerminalFormatter(style=style)
        _FORMATTERS[style] = formatter
    return formatter


def colorize_lines(lines: list[str], path: Path, style: str = DEFAULT_STYLE) -> list[str]:
    """Colorize code lines for ``path`` and preserve one-to-one line count.

    Falls back to the plain lines when the highlighted output does not split
    back into the same number of lines.
    """
    if not lines:
        return lines
    source = "\n".join(lines)
    try:
        lexer = get_lexer_for_filename(path.name, source)
    except ClassNotFound:
        lexer = TextLexer()
    rendered = pygments_highlight(source, lexer, _formatter_for_style(normalize_style(style)))
    rendered_lines = rendered.rstrip("\n").split("\n")
    if len(rendered_lines) != len(lines):
        return lines
    return rendered_lines


def _boost_foreground_contrast_for_diff(params: str) -> str:
    """Adjust low-contrast foreground SGR params for diff background readability."""
    parts = [part for part in params.split(";") if part]
    if not parts:
        return params

    boosted: list[str] = []
    index = 0
    while index < len(parts):
        token = parts[index]

        if token in {"38", "48"} and index + 1 < len(parts):
            mode = parts[index + 1]
            if mode == "5" and index + 2 < len(parts):
                color_token = parts[index + 2]
                if token == "38" and color_token.isdigit() and 232 <= int(color_token) <= 248:
                    boosted.extend(["38", "5", _DIFF_CONTRAST_8BIT])
                else:
                    boosted.extend([token, "5", color_token])
                index += 3
                continue
            if mode == "2" and index + 4 < len(parts):
                rgb = parts[index + 2 : index + 5]
                if token == "38" and all(value.isdigit() for value in rgb):
                    red, green, blue = (int(value) for value in rgb)
                    if abs(red - green) <= 8 and abs(green - blue) <= 8 and max(red, green, blue) < 190:
                        rgb = list(_DIFF_CONTRAST_TRUECOLOR)
                boosted.extend([token, "2", *rgb])
                index += 5
                continue

        # Faint text disappears on diff backgrounds.
        if token == "2":
            index += 1
            continue

        if token in {"30", "90"}:
            boosted.extend(["38", "5", _DIFF_CONTRAST_8BIT])
            index += 1
            continue

        boosted.append(token)
        index += 1

    return ";".join(boosted)


def apply_line_background(code_line: str, bg_sgr: str) -> str:
    """Apply persistent background SGR to an ANSI-coded line."""
    def _inject_bg(match: re.Match[str]) -> str:
        params = _boost_foreground_contrast_for_diff(match.group(1))
        if params:
            return f"\033[{params};{bg_sgr}m"
        return f"\033[{bg_sgr}m"

    line_with_persistent_bg = _SGR_RE.sub(_inject_bg, code_line)
    return f"\033[{bg_sgr}m{line_with_persistent_bg}\033[K\033[0m"


def format_hunk_line(line: DiffLine, display_body: str, colorize: bool) -> str:
    """Format one hunk line with marker-aware styling.

    Without colour the raw diff marker is kept so kinds stay distinguishable.
    """
    if line.kind == DiffLineKind.HUNK_HEADER:
        return f"\033[{HEADER_SGR}m{line.text}\033[0m" if colorize else line.text

    marker = {DiffLineKind.ADDED: "+", DiffLineKind.REMOVED: "-"}.get(line.kind, " ")
    if not colorize:
        return f"{marker}{line.body}"
    if line.kind == DiffLineKind.ADDED:
        return apply_line_background(f"+{display_body}", ADDED_BG_SGR)
    if line.kind == DiffLineKind.REMOVED:
        return apply_line_background(f"-{display_body}", REMOVED_BG_SGR)
    return f" {display_body}"
