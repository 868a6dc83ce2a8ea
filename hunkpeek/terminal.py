"""Terminal control helpers for the interactive hunk session.

Owns cbreak-mode lifecycle and single-key decoding. Cbreak (rather than raw)
mode keeps output newline translation so renderers can write plain ``\\n``.
"""

from __future__ import annotations

import contextlib
import os
import select
import termios
import tty

ESC_SEQUENCE_TIMEOUT_MS = 25


class TerminalController:
    """Switch stdin into unbuffered key mode and back."""

    def __init__(self, stdin_fd: int) -> None:
        self.stdin_fd = stdin_fd
        self._saved_tty_state = termios.tcgetattr(stdin_fd)

    def enable_key_mode(self) -> None:
        tty.setcbreak(self.stdin_fd, termios.TCSAFLUSH)

    def disable_key_mode(self) -> None:
        termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)

    @contextlib.contextmanager
    def key_mode(self):
        """Context manager that brackets code with key-mode enter/exit calls."""
        try:
            self.enable_key_mode()
            yield
        finally:
            self.disable_key_mode()


def _drain_ready_bytes(fd: int, timeout_ms: int) -> None:
    while True:
        ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
        if not ready or not os.read(fd, 1):
            return


def read_key(fd: int) -> str:
    """Read one key token; escape sequences collapse to ``"ESC"``.

    Returns ``""`` at end of input.
    """
    ch = os.read(fd, 1)
    if not ch:
        return ""
    if ch == b"\x1b":
        _drain_ready_bytes(fd, ESC_SEQUENCE_TIMEOUT_MS)
        return "ESC"
    if ch in {b"\r", b"\n"}:
        return "ENTER"
    return ch.decode("utf-8", errors="replace")
