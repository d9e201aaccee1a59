"""Tests for resolving the identifier under a cursor."""

from __future__ import annotations

import pytest

from jestgen.utils.cursor import word_at_position

SOURCE = "export function addAll(values: number[]) {\n    return $sum(values);\n}\n"


class TestWordAtPosition:
    @pytest.mark.parametrize(
        ("line", "column", "word"),
        [
            (1, 1, "export"),
            (1, 17, "addAll"),
            (1, 22, "addAll"),
            (1, 23, "addAll"),
            (2, 12, "$sum"),
            (2, 17, "values"),
        ],
    )
    def test_identifier_under_cursor(self, line: int, column: int, word: str) -> None:
        assert word_at_position(SOURCE, line, column) == word

    def test_whitespace_is_not_a_word(self) -> None:
        assert word_at_position(SOURCE, 2, 2) is None

    @pytest.mark.parametrize(("line", "column"), [(0, 1), (1, 0), (9, 1)])
    def test_out_of_range(self, line: int, column: int) -> None:
        assert word_at_position(SOURCE, line, column) is None

    def test_crlf_text(self) -> None:
        assert word_at_position("a\r\nsubtract()\r\n", 2, 3) == "subtract"
