"""String helpers for generated JavaScript text."""

from __future__ import annotations

import re

_LINE_RE = re.compile(r"[^\n]*\n|[^\n]+$")
_TERMINATOR_RE = re.compile(r"\r\n|\r|\n")


def split_lines(text: str) -> list[str]:
    """Split *text* into lines, each keeping its own terminator."""
    return _LINE_RE.findall(text)


def detect_line_terminator(text: str, default: str = "\n") -> str:
    """Return the terminator *text* was written with (``\\r\\n`` or ``\\n``)."""
    match = _TERMINATOR_RE.search(text)
    return match.group(0) if match else default


def normalize_line_terminators(text: str, terminator: str) -> str:
    """Rewrite every line break in *text* as *terminator*."""
    return _TERMINATOR_RE.sub(terminator, text)


def escape_js_string(text: str, quote: str = "'") -> str:
    """Escape *text* for use inside a JS string literal delimited by *quote*."""
    escaped = text.replace("\\", "\\\\").replace(quote, "\\" + quote)
    escaped = escaped.replace("\r", "\\r").replace("\n", "\\n")
    if quote == "`":
        escaped = escaped.replace("${", "\\${")
    return escaped
