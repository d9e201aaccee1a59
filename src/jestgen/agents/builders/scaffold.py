"""ScaffoldBuilder agent: create or update a Jest test case for one function.

For a source file and a function name the builder:
1. Validates the request (supported source file, identifier-like name)
2. Loads ``.jestgen.json`` from the project root
3. Maps the source to its ``<name>.test.<ext>`` artifact path
4. Loads the templates and reads the function's doc-comment labels
5. Creates the artifact, merges the existing case in place, or appends
   a new case, then writes the whole file once
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from jestgen.agents.analyzers.metadata import extract_descriptor_or_fallback
from jestgen.agents.base import BaseAgent, TaskInput, TaskOutput, TaskStatus
from jestgen.agents.builders.cases import append_case, case_exists, merge_case
from jestgen.agents.detectors.workspace import find_project_root
from jestgen.config import GenerationConfig, load_config
from jestgen.errors import ArtifactIOError, JestGenError, UserInputError
from jestgen.models.scaffold import ScaffoldAction, ScaffoldResult
from jestgen.parsing.treesitter import EXTENSION_TO_LANGUAGE, check_syntax
from jestgen.telemetry import record_metric_count, start_span
from jestgen.templating import (
    LABEL_BINDINGS,
    build_bindings,
    enabled_groups,
    load_case_template,
    load_header_template,
    render,
)
from jestgen.utils.paths import ensure_directory_exists, map_to_artifact_path

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = frozenset(EXTENSION_TO_LANGUAGE)

_IDENTIFIER_RE = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")

_MAX_SYNTAX_WARNINGS = 3


@dataclass
class ScaffoldTask(TaskInput):
    """Task input for scaffolding one test case."""

    task_type: str = "scaffold_test_case"
    """Type of task (defaults to 'scaffold_test_case')."""

    target: str = ""
    """Target for the task (defaults to source_file)."""

    source_file: str = ""
    """Path to the JavaScript/TypeScript source file."""

    function_name: str = ""
    """Exported function the test case is for."""

    root_path: str = ""
    """Project root; discovered from the source file when empty."""

    def __post_init__(self) -> None:
        if not self.target and self.source_file:
            self.target = self.source_file


def _read_text(path: Path) -> str:
    with path.open(encoding="utf-8", newline="") as handle:
        return handle.read()


def _write_text(path: Path, content: str) -> None:
    with path.open("w", encoding="utf-8", newline="") as handle:
        handle.write(content)


async def read_artifact(path: Path) -> str | None:
    """Return the artifact's text, or None if it does not exist yet."""
    if not await asyncio.to_thread(path.exists):
        return None
    try:
        return await asyncio.to_thread(_read_text, path)
    except (OSError, UnicodeDecodeError) as exc:
        raise ArtifactIOError(f"Cannot read {path}: {exc}") from exc


async def write_artifact(path: Path, content: str) -> None:
    """Write the whole artifact in one call, keeping line terminators as given."""
    try:
        await asyncio.to_thread(_write_text, path, content)
    except OSError as exc:
        raise ArtifactIOError(f"Cannot write {path}: {exc}") from exc


class ScaffoldBuilder(BaseAgent):
    """Agent that creates or updates marker-tagged Jest test cases.

    Writes to the same artifact are serialised through a per-path lock,
    so concurrent ``run`` calls on one builder never interleave a read and
    a write of the same file.
    """

    def __init__(self) -> None:
        self._locks: dict[Path, asyncio.Lock] = {}
        self._lock_users: dict[Path, int] = {}

    @property
    def name(self) -> str:
        """Unique name identifying this agent."""
        return "scaffold_builder"

    async def run(self, task: TaskInput) -> TaskOutput:
        """Execute the scaffold pipeline.

        Returns:
            TaskOutput whose ``result`` is ``ScaffoldResult.to_dict()`` on
            success, or whose ``errors`` explain why nothing was written.
        """
        if not isinstance(task, ScaffoldTask):
            return TaskOutput(
                status=TaskStatus.FAILED,
                errors=["Task must be a ScaffoldTask instance"],
            )

        with start_span(op="jestgen.scaffold", name=task.function_name or "?") as span:
            try:
                result = await self._scaffold(task)
            except JestGenError as exc:
                logger.error("Scaffold failed: %s", exc)
                record_metric_count("jestgen.scaffold.failed", error=type(exc).__name__)
                return TaskOutput(status=TaskStatus.FAILED, errors=[str(exc)])
            except Exception as exc:
                logger.exception("Unexpected error during scaffold generation")
                return TaskOutput(status=TaskStatus.FAILED, errors=[f"Unexpected error: {exc}"])
            span.set_data("action", result.action.value)

        record_metric_count("jestgen.scaffold", action=result.action.value)
        return TaskOutput(
            status=TaskStatus.COMPLETED,
            result=result.to_dict(),
            warnings=list(result.warnings),
        )

    async def _scaffold(self, task: ScaffoldTask) -> ScaffoldResult:
        source = self._check_source(task.source_file)
        function_name = self._check_function_name(task.function_name)

        root = Path(task.root_path).resolve() if task.root_path else find_project_root(source)
        config = await asyncio.to_thread(load_config, root)
        if config.project_folder:
            root = (root / config.project_folder).resolve()
        artifact = self._artifact_path(source, root, config)
        logger.info("Scaffolding %s from %s into %s", function_name, source, artifact)

        # Both templates are read before anything on disk changes.
        header_template = await load_header_template(config)
        case_template = await load_case_template()

        descriptor, problem = await asyncio.to_thread(
            extract_descriptor_or_fallback, source, function_name
        )
        warnings: list[str] = []
        if problem:
            warnings.append(f"Doc comments not read, using function name as labels: {problem}")

        bindings = build_bindings(
            descriptor, config, source_path=source, artifact_path=artifact, root=root
        )
        groups = enabled_groups(config)

        async with self._artifact_lock(artifact):
            existing = await read_artifact(artifact)
            if existing is None:
                action = ScaffoldAction.CREATED
                header = render(header_template, bindings, groups, literal=LABEL_BINDINGS)
                case_text = render(case_template, bindings, groups, literal=LABEL_BINDINGS)
                content = header + case_text
                await ensure_directory_exists(artifact.parent)
            elif case_exists(existing, function_name):
                action = ScaffoldAction.UPDATED
                content = merge_case(existing, function_name, descriptor)
            else:
                action = ScaffoldAction.APPENDED
                case_text = render(case_template, bindings, groups, literal=LABEL_BINDINGS)
                content = append_case(existing, case_text)

            if content == existing:
                logger.debug("%s already up to date", artifact)
            else:
                await write_artifact(artifact, content)

        warnings.extend(self._syntax_warnings(artifact, content))
        return ScaffoldResult(
            action=action,
            artifact_path=str(artifact),
            function_name=function_name,
            warnings=warnings,
        )

    @contextlib.asynccontextmanager
    async def _artifact_lock(self, artifact: Path) -> AsyncIterator[None]:
        """Hold the lock for *artifact*; the entry is dropped once nobody waits on it."""
        lock = self._locks.setdefault(artifact, asyncio.Lock())
        self._lock_users[artifact] = self._lock_users.get(artifact, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._lock_users[artifact] -= 1
            if not self._lock_users[artifact]:
                del self._lock_users[artifact]
                del self._locks[artifact]

    @staticmethod
    def _check_source(source_file: str) -> Path:
        if not source_file:
            raise UserInputError("No source file given")
        source = Path(source_file).resolve()
        if source.suffix not in SUPPORTED_EXTENSIONS:
            raise UserInputError(
                f"{source.name} is not a JavaScript or TypeScript file "
                f"(expected one of {', '.join(sorted(SUPPORTED_EXTENSIONS))})"
            )
        if not source.is_file():
            raise UserInputError(f"Source file not found: {source}")
        return source

    @staticmethod
    def _check_function_name(function_name: str) -> str:
        name = function_name.strip()
        if not name:
            raise UserInputError("No function name given")
        if not _IDENTIFIER_RE.match(name):
            raise UserInputError(f"{name!r} is not a function name")
        return name

    @staticmethod
    def _artifact_path(source: Path, root: Path, config: GenerationConfig) -> Path:
        try:
            return map_to_artifact_path(
                source,
                root,
                strategy=config.path_strategy,
                test_dir=config.test_dir,
                source_marker=config.source_marker,
                source_root=config.source_root,
            )
        except ValueError as exc:
            raise UserInputError(str(exc)) from exc

    @staticmethod
    def _syntax_warnings(artifact: Path, content: str) -> list[str]:
        language = EXTENSION_TO_LANGUAGE[artifact.suffix]
        try:
            problems = check_syntax(content, language)
        except Exception:
            logger.warning("Could not syntax-check %s", artifact, exc_info=True)
            return []
        if not problems:
            return []
        logger.warning("%s has %d syntax problem(s)", artifact, len(problems))
        shown = problems[:_MAX_SYNTAX_WARNINGS]
        if len(problems) > _MAX_SYNTAX_WARNINGS:
            shown.append(f"... and {len(problems) - _MAX_SYNTAX_WARNINGS} more")
        return [f"{artifact.name}: {problem}" for problem in shown]
