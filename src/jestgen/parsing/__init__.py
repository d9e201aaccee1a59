"""Source parsing for doc-comment extraction."""

from jestgen.parsing.languages import extract_from_file, extract_from_source, get_extractor
from jestgen.parsing.treesitter import (
    ExportInfo,
    ParseResult,
    check_syntax,
    detect_language,
    parse_code,
)

__all__ = [
    "ExportInfo",
    "ParseResult",
    "check_syntax",
    "detect_language",
    "extract_from_file",
    "extract_from_source",
    "get_extractor",
    "parse_code",
]
