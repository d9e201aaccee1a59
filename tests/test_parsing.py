"""Tests for tree-sitter export extraction and syntax checks."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from jestgen.parsing import (
    check_syntax,
    detect_language,
    extract_from_file,
    extract_from_source,
    get_extractor,
)

if TYPE_CHECKING:
    from pathlib import Path

TS_SOURCE = b"""\
/**
 * Adds two numbers.
 * @JestGen.describe: adds two numbers
 * @JestGen.it: returns the sum
 */
export function add(a: number, b: number): number {
    return a + b;
}

// not a doc comment
export const subtract = (a: number, b: number): number => a - b;

function helper(): void {}

/* helpers */
export { helper as publicHelper };
"""


class TestDetectLanguage:
    @pytest.mark.parametrize(
        ("name", "language"),
        [
            ("a.js", "javascript"),
            ("a.jsx", "javascript"),
            ("a.mjs", "javascript"),
            ("a.cjs", "javascript"),
            ("a.ts", "typescript"),
            ("a.mts", "typescript"),
            ("a.tsx", "tsx"),
        ],
    )
    def test_known_extensions(self, name: str, language: str) -> None:
        assert detect_language(name) == language

    def test_unknown_extension(self) -> None:
        assert detect_language("a.py") is None


class TestExtractExports:
    def test_export_names(self) -> None:
        result = extract_from_source(TS_SOURCE, "typescript")
        assert [e.names for e in result.exports] == [
            ["add"],
            ["subtract"],
            ["helper", "publicHelper"],
        ]

    def test_leading_block_comment_attached(self) -> None:
        result = extract_from_source(TS_SOURCE, "typescript")
        comment = result.exports[0].comments[-1]
        assert "@JestGen.describe: adds two numbers" in comment
        assert not comment.startswith("/*")
        assert not comment.endswith("*/")

    def test_line_comments_are_not_doc_comments(self) -> None:
        result = extract_from_source(TS_SOURCE, "typescript")
        assert result.exports[1].comments == []

    def test_comment_separated_by_declaration_is_dropped(self) -> None:
        source = b"/** @JestGen.describe: lost */\nconst x = 1;\nexport const y = 2;\n"
        result = extract_from_source(source, "javascript")
        assert result.exports[0].comments == []

    def test_line_numbers(self) -> None:
        result = extract_from_source(TS_SOURCE, "typescript")
        assert result.exports[0].start_line == 6
        assert result.exports[0].end_line == 8

    def test_clean_source_has_no_errors(self) -> None:
        result = extract_from_source(TS_SOURCE, "typescript")
        assert not result.has_errors
        assert result.error_ranges == []

    def test_broken_source_reports_errors(self) -> None:
        result = extract_from_source(b"export function add(a, b {\n", "javascript")
        assert result.has_errors
        assert result.error_ranges

    def test_from_file(self, tmp_path: Path) -> None:
        path = tmp_path / "math.ts"
        path.write_bytes(TS_SOURCE)
        result = extract_from_file(path)
        assert result.language == "typescript"
        assert result.exports[0].names == ["add"]

    def test_unsupported_file_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "math.py"
        path.write_text("def add(): pass\n", encoding="utf-8")
        with pytest.raises(ValueError, match="Cannot detect language"):
            extract_from_file(path)

    def test_unknown_extractor_raises(self) -> None:
        with pytest.raises(ValueError, match="No extractor"):
            get_extractor("python")


class TestCheckSyntax:
    def test_valid_test_file(self) -> None:
        code = (
            "describe('m', () => {\n"
            "    it('x', () => {\n"
            "        expect(1).toBe(1);\n"
            "    });\n"
            "});\n"
        )
        assert check_syntax(code, "typescript") == []

    def test_unclosed_block(self) -> None:
        problems = check_syntax("describe('m', () => {\n    it('x', () => {\n", "javascript")
        assert problems
        assert all(p.startswith("Syntax error at line") for p in problems)
