"""Language-specific export extractors.

Use get_extractor(), extract_from_source(), or extract_from_file()
to work with them.
"""

from __future__ import annotations

from pathlib import Path

from jestgen.parsing.languages.base import LanguageExtractor
from jestgen.parsing.languages.javascript import (
    JavaScriptExtractor,
    TSXExtractor,
    TypeScriptExtractor,
)
from jestgen.parsing.treesitter import ParseResult, detect_language

_EXTRACTORS: dict[str, type[LanguageExtractor]] = {
    "javascript": JavaScriptExtractor,
    "typescript": TypeScriptExtractor,
    "tsx": TSXExtractor,
}


def get_extractor(language: str) -> LanguageExtractor:
    """Get a language extractor instance for the given language."""
    cls = _EXTRACTORS.get(language)
    if cls is None:
        raise ValueError(f"No extractor for language: {language}")
    return cls()


def extract_from_source(source: bytes, language: str) -> ParseResult:
    """Parse source code and extract its exported declarations."""
    return get_extractor(language).extract(source)


def extract_from_file(file_path: str | Path) -> ParseResult:
    """Parse a file and extract its exported declarations.

    Detects language from file extension.
    """
    path = Path(file_path)
    language = detect_language(path)
    if language is None:
        raise ValueError(f"Cannot detect language for: {path}")
    source = path.read_bytes()
    return extract_from_source(source, language)


__all__ = [
    "JavaScriptExtractor",
    "LanguageExtractor",
    "TSXExtractor",
    "TypeScriptExtractor",
    "extract_from_file",
    "extract_from_source",
    "get_extractor",
]
