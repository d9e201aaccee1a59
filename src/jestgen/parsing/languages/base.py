"""Base class and utilities for language-specific export extractors."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from jestgen.parsing.treesitter import (
    ExportInfo,
    ParseResult,
    collect_error_ranges,
    has_parse_errors,
    parse_code,
)

if TYPE_CHECKING:
    import tree_sitter


def _text(node: tree_sitter.Node | None) -> str:
    """Decode node text from bytes, returning empty string for None."""
    if node is None:
        return ""
    return node.text.decode("utf-8", errors="replace") if node.text else ""


class LanguageExtractor(ABC):
    """Base class for language-specific export extractors."""

    @property
    @abstractmethod
    def language(self) -> str:
        """Tree-sitter language name."""

    def extract(self, source: bytes) -> ParseResult:
        """Parse source and extract its exported declarations."""
        root = parse_code(source, self.language).root_node

        return ParseResult(
            language=self.language,
            exports=self.extract_exports(root),
            has_errors=has_parse_errors(root),
            error_ranges=collect_error_ranges(root),
        )

    @abstractmethod
    def extract_exports(self, root: tree_sitter.Node) -> list[ExportInfo]:
        """Extract top-level export statements with their leading comments."""
