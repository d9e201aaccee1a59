"""Detect, merge and append marker-tagged test cases in a test file.

A test file holds at most one case per function, each introduced by a
marker line::

    // Test case for add
    describe('adds two numbers', () => {
        it('returns the sum', () => {
            ...
        });
    });

A case runs from its marker to the next marker (or end of file).  Merging
rewrites only the first string argument of the case's ``describe`` call
and of the ``it``/``test`` call after it; everything else in the file is
left byte-for-byte as it was.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

from jestgen.utils.strings import (
    detect_line_terminator,
    escape_js_string,
    normalize_line_terminators,
    split_lines,
)

if TYPE_CHECKING:
    from jestgen.models.scaffold import SourceUnitDescriptor

logger = logging.getLogger(__name__)

MARKER_PREFIX = "// Test case for "

_GROUP_CALLS = ("describe",)
_ASSERTION_CALLS = ("it", "test")
_QUOTES = frozenset({"'", '"', "`"})


def marker_line(function_name: str) -> str:
    """Return the marker comment for *function_name*."""
    return f"{MARKER_PREFIX}{function_name}"


@dataclass(frozen=True)
class CaseBlock:
    """Character span of one marker-delimited case."""

    function_name: str
    start: int
    end: int


@dataclass(frozen=True)
class _StringSpan:
    """Inner span (without quotes) of a string literal."""

    start: int
    end: int
    quote: str


def find_case_blocks(content: str) -> list[CaseBlock]:
    """Scan *content* for marker lines and return the case spans in order."""
    markers: list[tuple[str, int]] = []
    offset = 0
    for line in split_lines(content):
        stripped = line.strip()
        if stripped.startswith(MARKER_PREFIX):
            name = stripped[len(MARKER_PREFIX) :].strip()
            if name:
                markers.append((name, offset))
        offset += len(line)

    blocks: list[CaseBlock] = []
    for index, (name, start) in enumerate(markers):
        end = markers[index + 1][1] if index + 1 < len(markers) else len(content)
        blocks.append(CaseBlock(function_name=name, start=start, end=end))
    return blocks


def case_exists(content: str, function_name: str) -> bool:
    """Return True when a case tagged with exactly *function_name* is present."""
    return any(block.function_name == function_name for block in find_case_blocks(content))


def merge_case(content: str, function_name: str, descriptor: SourceUnitDescriptor) -> str:
    """Rewrite the labels of the existing case for *function_name*.

    Only the first matching case is touched.  A case whose ``describe`` /
    ``it`` calls cannot be located is left unchanged.
    """
    blocks = [b for b in find_case_blocks(content) if b.function_name == function_name]
    if not blocks:
        logger.warning("No case for %s to merge into", function_name)
        return content
    if len(blocks) > 1:
        logger.warning(
            "Found %d cases for %s; updating only the first one",
            len(blocks),
            function_name,
        )

    block = blocks[0]
    segment = content[block.start : block.end]

    group = _find_call_string(segment, _GROUP_CALLS, 0)
    if group is None:
        logger.warning("Case for %s has no describe(...) label; leaving it as is", function_name)
        return content
    assertion = _find_call_string(segment, _ASSERTION_CALLS, group.end + 1)
    if assertion is None:
        logger.warning("Case for %s has no it(...) label; leaving it as is", function_name)
        return content

    merged = (
        segment[: group.start]
        + escape_js_string(descriptor.description_label, group.quote)
        + segment[group.end : assertion.start]
        + escape_js_string(descriptor.expectation_label, assertion.quote)
        + segment[assertion.end :]
    )
    return content[: block.start] + merged + content[block.end :]


def remove_last_line(content: str) -> str:
    """Drop the final line of *content* (the outer ``});``).

    Content with zero or one lines becomes the empty string.
    """
    lines = split_lines(content)
    if len(lines) <= 1:
        return ""
    return "".join(lines[:-1])


def append_case(content: str, case_text: str) -> str:
    """Replace the closing line of *content* with *case_text*.

    *case_text* must close the outer ``describe`` again.  Its line breaks
    are converted to the ones *content* already uses.  Blank lines after
    the closing line are kept after the new case.
    """
    terminator = detect_line_terminator(content)
    lines = split_lines(content)
    body_end = len(lines)
    while body_end and not lines[body_end - 1].strip():
        body_end -= 1
    trailing = "".join(lines[body_end:])

    trimmed = remove_last_line("".join(lines[:body_end]))
    if trimmed and not trimmed.endswith(("\n", "\r")):
        trimmed += terminator
    appended = trimmed + normalize_line_terminators(case_text, terminator)
    if trailing and not appended.endswith(("\n", "\r")):
        appended += terminator
    return appended + trailing


def _find_call_string(text: str, callees: tuple[str, ...], pos: int) -> _StringSpan | None:
    """Locate the first string argument of the first ``callee(`` at or after *pos*."""
    pattern = re.compile(r"(?<![\w$.])(?:" + "|".join(map(re.escape, callees)) + r")\s*\(\s*")
    for match in pattern.finditer(text, pos):
        open_index = match.end()
        if open_index >= len(text) or text[open_index] not in _QUOTES:
            continue
        close_index = _closing_quote(text, open_index)
        if close_index is None:
            return None
        return _StringSpan(start=open_index + 1, end=close_index, quote=text[open_index])
    return None


def _closing_quote(text: str, open_index: int) -> int | None:
    quote = text[open_index]
    index = open_index + 1
    while index < len(text):
        char = text[index]
        if char == "\\":
            index += 2
            continue
        if char == quote:
            return index
        if char == "\n" and quote != "`":
            return None
        index += 1
    return None
