"""Agent contract shared by the scaffold pipeline steps.

An agent takes a ``TaskInput`` describing which source file to work on and
always answers with a ``TaskOutput``; problems such as a missing template
or an unreadable artifact come back in ``errors`` instead of as raised
exceptions, so the CLI can print them and pick an exit status.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class TaskStatus(Enum):
    """Outcome of one agent run."""

    COMPLETED = "completed"
    FAILED = "failed"


@dataclass
class TaskInput:
    """What an agent is asked to do, and for which source file."""

    task_type: str
    target: str
    """Source file the task is about."""
    context: dict[str, Any] = field(default_factory=dict)


@dataclass
class TaskOutput:
    """Result of an agent run."""

    status: TaskStatus
    result: dict[str, Any] = field(default_factory=dict)
    """Serialised ``ScaffoldResult`` when the run completed."""
    errors: list[str] = field(default_factory=list)
    """Reasons nothing was written; empty on success."""
    warnings: list[str] = field(default_factory=list)
    """Non-fatal problems, such as labels read without doc comments."""

    @property
    def succeeded(self) -> bool:
        return self.status is TaskStatus.COMPLETED


class BaseAgent(ABC):
    """Base class for agents that analyse sources or write test artifacts."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Name used in logs and telemetry spans."""

    @abstractmethod
    async def run(self, task: TaskInput) -> TaskOutput:
        """Run *task* and report the outcome as a ``TaskOutput``."""
