"""Resolve the identifier under an editor cursor."""

from __future__ import annotations

import re

_IDENTIFIER_RE = re.compile(r"[A-Za-z_$][A-Za-z0-9_$]*")


def word_at_position(text: str, line: int, column: int) -> str | None:
    """Return the identifier touching the 1-based *line*/*column* in *text*.

    A cursor just past the last character of a word still selects it.
    Returns None when the position is out of range or not on a word.
    """
    if line < 1 or column < 1:
        return None
    lines = text.splitlines()
    if line > len(lines):
        return None

    current = lines[line - 1]
    offset = column - 1
    for match in _IDENTIFIER_RE.finditer(current):
        if match.start() <= offset <= match.end():
            return match.group(0)
    return None
