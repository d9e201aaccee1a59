"""Source metadata extraction for test-case labels.

A function can carry its own test wording in the doc comment above its
export::

    /**
     * Adds two numbers.
     * @JestGen.describe: adds two numbers
     * @JestGen.it: returns the sum
     */
    export function add(a: number, b: number): number { ... }

The text after each marker, up to the end of the line or the comment
close, becomes the ``describe`` / ``it`` label of the generated case.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import TYPE_CHECKING

from jestgen.errors import SourceParseError
from jestgen.models.scaffold import SourceUnitDescriptor
from jestgen.parsing.languages import extract_from_file

if TYPE_CHECKING:
    from jestgen.parsing.treesitter import ExportInfo

logger = logging.getLogger(__name__)

DESCRIBE_MARKER = "@JestGen.describe:"
IT_MARKER = "@JestGen.it:"


def _marker_pattern(marker: str) -> re.Pattern[str]:
    return re.compile(re.escape(marker) + r"[ \t]*([^\r\n]*?)(?=\*/|\r?$)", re.MULTILINE)


_DESCRIBE_RE = _marker_pattern(DESCRIBE_MARKER)
_IT_RE = _marker_pattern(IT_MARKER)


def find_doc_comment(exports: list[ExportInfo], function_name: str) -> str | None:
    """Pick the doc comment that belongs to *function_name*.

    The comment of the export declaring *function_name* wins.  Otherwise
    the first comment mentioning the name anywhere in its text is used.
    """
    for export in exports:
        if function_name in export.names and export.comments:
            return export.comments[-1]

    for export in exports:
        for comment in export.comments:
            if function_name in comment:
                return comment
    return None


def parse_annotations(comment: str | None) -> tuple[str, str]:
    """Return ``(description, expectation)`` found in *comment*.

    Either value is empty when its marker is absent.
    """
    if not comment:
        return "", ""
    describe_match = _DESCRIBE_RE.search(comment)
    it_match = _IT_RE.search(comment)
    description = describe_match.group(1).strip() if describe_match else ""
    expectation = it_match.group(1).strip() if it_match else ""
    return description, expectation


def fallback_descriptor(source_path: str | Path, function_name: str) -> SourceUnitDescriptor:
    """Descriptor that labels the case with the function name only."""
    return SourceUnitDescriptor(file_name=Path(source_path).stem, function_name=function_name)


def extract_descriptor(source_path: str | Path, function_name: str) -> SourceUnitDescriptor:
    """Build the ``SourceUnitDescriptor`` for *function_name* in *source_path*.

    Raises:
        SourceParseError: The file cannot be read, its language is not
            supported, or it does not parse.
    """
    path = Path(source_path)
    try:
        result = extract_from_file(path)
    except OSError as exc:
        raise SourceParseError(f"Cannot read {path}: {exc}") from exc
    except ValueError as exc:
        raise SourceParseError(str(exc)) from exc
    except Exception as exc:
        # Grammar loading and parser failures from tree-sitter.
        raise SourceParseError(f"Cannot parse {path.name}: {exc}") from exc

    if result.has_errors:
        lines = ", ".join(f"{start}-{end}" for start, end in result.error_ranges[:3])
        raise SourceParseError(f"Cannot parse {path.name} (syntax errors at lines {lines})")

    description, expectation = parse_annotations(find_doc_comment(result.exports, function_name))
    logger.debug(
        "Metadata for %s: describe=%r it=%r (%d exports scanned)",
        function_name,
        description,
        expectation,
        len(result.exports),
    )
    return SourceUnitDescriptor(
        file_name=path.stem,
        function_name=function_name,
        description=description,
        expectation=expectation,
    )


def extract_descriptor_or_fallback(
    source_path: str | Path, function_name: str
) -> tuple[SourceUnitDescriptor, str | None]:
    """Like ``extract_descriptor``, but degrade to the name-only descriptor.

    Returns the descriptor and the parse problem, if there was one.
    """
    try:
        return extract_descriptor(source_path, function_name), None
    except SourceParseError as exc:
        logger.warning("Using function name as labels for %s: %s", function_name, exc)
        return fallback_descriptor(source_path, function_name), str(exc)
