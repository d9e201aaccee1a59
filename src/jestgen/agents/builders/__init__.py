"""Builder agents: create and merge Jest test cases."""

from jestgen.agents.builders.cases import (
    append_case,
    case_exists,
    find_case_blocks,
    merge_case,
    remove_last_line,
)
from jestgen.agents.builders.scaffold import ScaffoldBuilder, ScaffoldTask

__all__ = [
    "ScaffoldBuilder",
    "ScaffoldTask",
    "append_case",
    "case_exists",
    "find_case_blocks",
    "merge_case",
    "remove_last_line",
]
