"""User-facing failure conditions.

Each exception's ``str()`` is the message shown through the notifier. None
of them is fatal: public entry points catch ``HunkPeekError`` and report it.
"""

from __future__ import annotations


class HunkPeekError(Exception):
    message = "hunk display failed"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)


class NotTracked(HunkPeekError):
    message = "not tracked"


class NoChanges(HunkPeekError):
    message = "no changes"


class NoRendererConfigured(HunkPeekError):
    message = "no renderer configured"


class RevertRefused(HunkPeekError):
    message = "cannot revert hunk"


class NoAdjacentHunk(HunkPeekError):
    def __init__(self, direction: int) -> None:
        self.direction = direction
        super().__init__("no next change" if direction > 0 else "no previous change")


class RenderFailed(HunkPeekError):
    message = "renderer failed"
