"""Tests for the rich terminal reporter."""

from __future__ import annotations

from rich.console import Console

from jestgen.agents.reporters.terminal import CLIReporter
from jestgen.models.scaffold import ScaffoldAction, ScaffoldResult


def _reporter() -> tuple[CLIReporter, Console]:
    console = Console(record=True, width=120, force_terminal=False)
    return CLIReporter(console), console


class TestCLIReporter:
    def test_scaffold_result(self) -> None:
        reporter, console = _reporter()
        reporter.print_scaffold_result(
            ScaffoldResult(
                action=ScaffoldAction.APPENDED,
                artifact_path="/proj/test/math.test.ts",
                function_name="subtract",
                warnings=["math.test.ts: Syntax error at line 3-3"],
            )
        )
        text = console.export_text()
        assert "Appended test case for subtract in /proj/test/math.test.ts" in text
        assert "Syntax error at line 3-3" in text

    def test_messages(self) -> None:
        reporter, console = _reporter()
        reporter.print_error("boom")
        reporter.print_info("fyi")
        text = console.export_text()
        assert "✗ boom" in text
        assert "fyi" in text

