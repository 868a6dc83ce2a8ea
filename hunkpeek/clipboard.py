"""Clipboard helper for the copy-original-text action.

Text is piped to the first platform clipboard command that is installed and
exits cleanly.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
import sys

logger = logging.getLogger(__name__)

LINUX_CLIPBOARD_COMMANDS = (
    ("wl-copy",),
    ("xclip", "-selection", "clipboard"),
    ("xsel", "--clipboard", "--input"),
)


def clipboard_commands(platform: str | None = None) -> list[tuple[str, ...]]:
    """Return clipboard writer commands for ``platform``, in preference order."""
    platform = sys.platform if platform is None else platform
    if platform == "darwin":
        return [("pbcopy",)]
    if platform in {"win32", "cygwin"}:
        return [("clip",)]
    return list(LINUX_CLIPBOARD_COMMANDS)


def _pipe_to_command(command: tuple[str, ...], text: str) -> bool:
    try:
        proc = subprocess.run(
            list(command),
            input=text,
            text=True,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            check=False,
        )
    except OSError as exc:
        logger.debug("clipboard command %s failed: %s", command[0], exc)
        return False
    if proc.returncode != 0:
        logger.debug("clipboard command %s exited with %d", command[0], proc.returncode)
        return False
    return True


def copy_text_to_clipboard(text: str, commands: list[tuple[str, ...]] | None = None) -> bool:
    """Copy ``text`` with the first working clipboard command; empty text is never copied."""
    if not text:
        return False
    candidates = clipboard_commands() if commands is None else commands
    installed = [command for command in candidates if shutil.which(command[0]) is not None]
    if not installed:
        logger.debug("no clipboard command installed among %s", [command[0] for command in candidates])
        return False
    return any(_pipe_to_command(command, text) for command in installed)
