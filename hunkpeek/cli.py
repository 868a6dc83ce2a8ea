"""Command-line front door for hunkpeek.

Parses CLI options, merges them over the persisted config, and shows the
hunk at ``PATH:LINE`` once, prints its original text, or runs an interactive
key loop for navigating, copying, and reverting hunks.
"""

from __future__ import annotations

import argparse
from collections.abc import Callable
from dataclasses import replace
import logging
from pathlib import Path
import sys

from .config import load_settings
from .cursor import FileCursor
from .diff.model import ExtractedHunk
from .log import setup_logging
from .notify import Notifier
from .pipeline import HunkPeek, build_hunk_peek
from .renderers import BUILTIN_RENDERERS
from .terminal import TerminalController, read_key

NO_RENDERER_NAMES = {"none", "raw"}


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def _nonnegative_int(value: str) -> int:
    """argparse type for integer values >= 0."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed < 0:
        raise argparse.ArgumentTypeError("value must be >= 0")
    return parsed


def _no_display(hunk: ExtractedHunk, dismiss: Callable[[], None]) -> Callable[[], None]:
    return _noop


def _noop() -> None:
    return None


def _print_status(message: str) -> None:
    sys.stderr.write(f"hunkpeek: {message}\n")
    sys.stderr.flush()


def handle_key(peek: HunkPeek, key: str) -> bool:
    """Dispatch one interactive key; returns ``False`` when the loop should end."""
    if key in {"", "q", "ESC"}:
        peek.hide()
        return False
    if key == "n":
        peek.go_next()
    elif key == "p":
        peek.go_previous()
    elif key == "y":
        peek.copy_original_text()
    elif key == "r":
        peek.revert()
    elif key == "ENTER":
        peek.show()
    return True


def run_interactive(peek: HunkPeek, stdin_fd: int) -> int:
    """Show the hunk at the cursor and process keys until quit."""
    controller = TerminalController(stdin_fd)
    with controller.key_mode():
        if not peek.show():
            return 1
        while handle_key(peek, read_key(stdin_fd)):
            pass
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Show, navigate, and revert the git diff hunk at a line of a working file."
    )
    parser.add_argument("path", help="Working file to inspect.")
    parser.add_argument("line", type=_positive_int, help="1-based line number in the working file.")
    parser.add_argument("--rev", default=None, help="Reference revision to diff against (default: HEAD).")
    parser.add_argument(
        "--renderer",
        default=None,
        help=f"Renderer: {', '.join(BUILTIN_RENDERERS)}, none, or module:callable.",
    )
    parser.add_argument("--context", type=_nonnegative_int, default=None, help="Diff context lines.")
    parser.add_argument("--style", default=None, help="Pygments style name.")
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument("--original", action="store_true", help="Print the hunk's original text and exit.")
    parser.add_argument("-i", "--interactive", action="store_true", help="Navigate hunks with n/p/y/r/q keys.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output to stderr.")
    return parser


def main() -> int:
    """Parse CLI arguments and run one hunkpeek action.

    Returns the process exit status: 0 when a hunk was shown, 1 otherwise.
    """
    args = build_parser().parse_args()
    setup_logging(logging.DEBUG if args.verbose else logging.WARNING)

    path = Path(args.path)
    if not path.is_file():
        raise SystemExit(f"Path not found: {path}")

    settings = load_settings()
    if args.rev is not None:
        settings = replace(settings, reference_revision=args.rev)
    if args.renderer is not None:
        renderer = None if args.renderer in NO_RENDERER_NAMES else args.renderer
        settings = replace(settings, renderer=renderer)
    if args.context is not None:
        settings = replace(settings, context_lines=args.context)
    if args.style is not None:
        settings = replace(settings, style=args.style)

    caller = FileCursor(path=path.resolve(), line=args.line)
    peek = build_hunk_peek(
        caller,
        settings,
        colorize=not args.no_color,
        notifier=Notifier(sink=_print_status),
    )

    if args.original:
        peek.renderer = _no_display
        if not peek.show():
            return 1
        sys.stdout.write(peek.original_text + "\n" if peek.original_text else "")
        return 0

    if args.interactive:
        return run_interactive(peek, sys.stdin.fileno())

    return 0 if peek.show() else 1


if __name__ == "__main__":
    raise SystemExit(main())
