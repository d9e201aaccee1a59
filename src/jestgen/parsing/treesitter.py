"""Tree-sitter wrapper for parsing JavaScript / TypeScript sources."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, cast

import tree_sitter
import tree_sitter_language_pack as tslp

if TYPE_CHECKING:
    from tree_sitter_language_pack import SupportedLanguage

logger = logging.getLogger(__name__)

# Map file extensions to tree-sitter language names
EXTENSION_TO_LANGUAGE: dict[str, str] = {
    ".js": "javascript",
    ".mjs": "javascript",
    ".cjs": "javascript",
    ".jsx": "javascript",
    ".ts": "typescript",
    ".mts": "typescript",
    ".cts": "typescript",
    ".tsx": "tsx",
}

SUPPORTED_LANGUAGES = frozenset({"javascript", "typescript", "tsx"})


@dataclass
class ExportInfo:
    """An ``export`` statement and the block comments written right above it."""

    names: list[str]
    start_line: int
    end_line: int
    comments: list[str] = field(default_factory=list)
    """Comment bodies with ``/*`` and ``*/`` stripped, outer whitespace trimmed."""


@dataclass
class ParseResult:
    """Exported declarations of one source file."""

    language: str
    exports: list[ExportInfo] = field(default_factory=list)
    has_errors: bool = False
    error_ranges: list[tuple[int, int]] = field(default_factory=list)


_parser_cache: dict[str, tree_sitter.Parser] = {}


def detect_language(file_path: str | Path) -> str | None:
    """Detect language from file extension.

    Returns the tree-sitter language name, or None if unsupported.
    """
    ext = Path(file_path).suffix.lower()
    return EXTENSION_TO_LANGUAGE.get(ext)


def get_parser(language: str) -> tree_sitter.Parser:
    """Get a (cached) tree-sitter parser for the given language."""
    if language not in SUPPORTED_LANGUAGES:
        raise ValueError(f"Unsupported language: {language}")
    cached = _parser_cache.get(language)
    if cached is not None:
        return cached
    parser = tslp.get_parser(cast("SupportedLanguage", language))
    _parser_cache[language] = parser
    return parser


def parse_code(source: bytes, language: str) -> tree_sitter.Tree:
    """Parse source code bytes into a tree-sitter AST."""
    return get_parser(language).parse(source)


def has_parse_errors(root: tree_sitter.Node) -> bool:
    return root.has_error


def collect_error_ranges(root: tree_sitter.Node) -> list[tuple[int, int]]:
    """1-based ``(start, end)`` line spans of ERROR and MISSING nodes, in document order."""
    ranges: list[tuple[int, int]] = []
    pending = [root]
    while pending:
        node = pending.pop()
        if node.is_error or node.is_missing:
            ranges.append((node.start_point.row + 1, node.end_point.row + 1))
        if node.has_error:
            pending.extend(reversed(node.children))
    return ranges


def check_syntax(code: str, language: str) -> list[str]:
    """Return one message per syntax error in *code* (empty when valid)."""
    root = parse_code(code.encode("utf-8"), language).root_node
    if not has_parse_errors(root):
        return []
    return [f"Syntax error at line {start}-{end}" for start, end in collect_error_ranges(root)]
