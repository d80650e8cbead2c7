"""Syntax highlighting for content-view lines.

Pygments is imported on first use so directory browsing never pays for it.
Terminal control bytes in file text are escaped before anything is drawn.
"""

from __future__ import annotations

import functools
import re

_CONTROL_RE = re.compile(r"[\x00-\x08\x0b-\x1f\x7f-\x9f]")

DEFAULT_STYLE = "monokai"

_PYGMENTS_LOADED = False
_PYGMENTS_HIGHLIGHT = None
_PYGMENTS_GET_LEXER_FOR_FILENAME = None
_PYGMENTS_TEXT_LEXER = None
_PYGMENTS_FORMATTER = None
_PYGMENTS_GET_STYLE_BY_NAME = None
_PYGMENTS_CLASS_NOT_FOUND: type[Exception] = Exception
_PYGMENTS_FORMATTERS: dict[str, object] = {}


def sanitize_terminal_text(source: str) -> str:
    """Escape terminal control bytes to avoid side effects (bell, cursor moves, etc.)."""
    if _CONTROL_RE.search(source) is None:
        return source
    return _CONTROL_RE.sub(lambda match: f"\\x{ord(match.group(0)):02x}", source)


def _ensure_pygments_loaded() -> None:
    global _PYGMENTS_LOADED
    global _PYGMENTS_HIGHLIGHT
    global _PYGMENTS_GET_LEXER_FOR_FILENAME
    global _PYGMENTS_TEXT_LEXER
    global _PYGMENTS_FORMATTER
    global _PYGMENTS_GET_STYLE_BY_NAME
    global _PYGMENTS_CLASS_NOT_FOUND

    if _PYGMENTS_LOADED:
        return

    from pygments import highlight as pygments_highlight
    from pygments.formatters import Terminal256Formatter
    from pygments.lexers import TextLexer, get_lexer_for_filename
    from pygments.styles import get_style_by_name
    from pygments.util import ClassNotFound

    _PYGMENTS_HIGHLIGHT = pygments_highlight
    _PYGMENTS_GET_LEXER_FOR_FILENAME = get_lexer_for_filename
    _PYGMENTS_TEXT_LEXER = TextLexer
    _PYGMENTS_FORMATTER = Terminal256Formatter
    _PYGMENTS_GET_STYLE_BY_NAME = get_style_by_name
    _PYGMENTS_CLASS_NOT_FOUND = ClassNotFound
    _PYGMENTS_LOADED = True


def _formatter_for_style(style: str):
    formatter = _PYGMENTS_FORMATTERS.get(style)
    if formatter is not None:
        return formatter
    try:
        _PYGMENTS_GET_STYLE_BY_NAME(style)
    except _PYGMENTS_CLASS_NOT_FOUND:
        style = DEFAULT_STYLE
    formatter = _PYGMENTS_FORMATTER(style=style)
    _PYGMENTS_FORMATTERS[style] = formatter
    return formatter


def _lexer_for(filename: str, source: str):
    # Keep leading/trailing blank lines so output rows match input rows.
    try:
        return _PYGMENTS_GET_LEXER_FOR_FILENAME(filename, source, stripnl=False, ensurenl=False)
    except _PYGMENTS_CLASS_NOT_FOUND:
        return _PYGMENTS_TEXT_LEXER(stripnl=False, ensurenl=False)


@functools.lru_cache(maxsize=8)
def highlight_lines(lines: tuple[str, ...], filename: str, style: str = DEFAULT_STYLE) -> tuple[str, ...]:
    """Return ANSI-coloured copies of ``lines`` highlighted as one file.

    The result always has exactly ``len(lines)`` rows. Unknown file types are
    rendered with the plain text lexer and unknown styles with ``monokai``.
    """
    if not lines:
        return ()
    _ensure_pygments_loaded()
    source = "\n".join(sanitize_terminal_text(line) for line in lines)
    rendered = _PYGMENTS_HIGHLIGHT(source, _lexer_for(filename, source), _formatter_for_style(style))
    out = rendered.split("\n")
    if len(out) < len(lines):
        out.extend("" for _ in range(len(lines) - len(out)))
    return tuple(out[: len(lines)])


__all__ = [
    "DEFAULT_STYLE",
    "highlight_lines",
    "sanitize_terminal_text",
]
