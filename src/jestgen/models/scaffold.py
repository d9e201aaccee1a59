"""Data models shared by the scaffold pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


@dataclass(frozen=True)
class SourceUnitDescriptor:
    """What a generated test case needs to know about its target function."""

    file_name: str
    """Source file name without directory or extension."""

    function_name: str
    """Name of the function the test case is for."""

    description: str = ""
    """``@JestGen.describe`` text, empty when not annotated."""

    expectation: str = ""
    """``@JestGen.it`` text, empty when not annotated."""

    @property
    def description_label(self) -> str:
        """Label of the outer ``describe`` block."""
        return self.description or self.function_name

    @property
    def expectation_label(self) -> str:
        """Label of the inner ``it`` block."""
        return self.expectation or self.function_name


class ScaffoldAction(Enum):
    CREATED = "created"
    UPDATED = "updated"
    APPENDED = "appended"


@dataclass
class ScaffoldResult:
    """Outcome of one scaffold invocation."""

    action: ScaffoldAction
    artifact_path: str
    function_name: str
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, object]:
        return {
            "action": self.action.value,
            "artifact_path": self.artifact_path,
            "function_name": self.function_name,
            "warnings": list(self.warnings),
        }
