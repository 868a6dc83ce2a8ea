"""Pluggable hunk renderers.

A renderer is any callable ``(hunk, dismiss) -> teardown``. ``dismiss`` is a
zero-argument callable the renderer invokes when its own UI is dismissed;
``teardown`` is the zero-argument handle the session calls to remove it.
Built-ins are selected by name; ``"package.module:callable"`` loads a custom
renderer.

The built-in renderers write to a stream and never call ``dismiss``; the key
loop or host closes the session. A custom renderer with its own UI calls
``dismiss`` when that UI goes away, and may raise: the pipeline reports
"renderer failed" and leaves the session closed.
"""

from __future__ import annotations

from collections.abc import Callable
import importlib
import logging
from typing import TextIO

from ..diff.model import ExtractedHunk
from ..highlight import DEFAULT_STYLE
from .floating import FloatingRenderer
from .inline import InlineRenderer
from .raw import RawDiffRenderer

logger = logging.getLogger(__name__)

Renderer = Callable[[ExtractedHunk, Callable[[], None]], Callable[[], None]]

BUILTIN_RENDERERS = ("inline", "floating")


def load_custom_renderer(reference: str) -> Renderer | None:
    """Import ``module:attribute`` and return it when callable."""
    module_name, _, attribute = reference.partition(":")
    if not module_name or not attribute:
        logger.warning("custom renderer %r must look like 'module:callable'", reference)
        return None
    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        logger.warning("cannot import renderer module %r: %s", module_name, exc)
        return None
    target = module
    for part in attribute.split("."):
        target = getattr(target, part, None)
        if target is None:
            logger.warning("renderer %r not found", reference)
            return None
    if not callable(target):
        logger.warning("renderer %r is not callable", reference)
        return None
    return target


def resolve_renderer(
    name: str | None,
    style: str = DEFAULT_STYLE,
    colorize: bool = True,
    stream: TextIO | None = None,
) -> Renderer | None:
    """Return the renderer configured by ``name``, or ``None`` when unset/unknown."""
    if not name:
        return None
    if name == "inline":
        return InlineRenderer(stream=stream, style=style, colorize=colorize)
    if name == "floating":
        return FloatingRenderer(stream=stream, style=style, colorize=colorize)
    if ":" in name:
        return load_custom_renderer(name)
    logger.warning("unknown renderer %r", name)
    return None


__all__ = [
    "BUILTIN_RENDERERS",
    "FloatingRenderer",
    "InlineRenderer",
    "RawDiffRenderer",
    "Renderer",
    "load_custom_renderer",
    "resolve_renderer",
]
