"""Detectors: locate the project a source file belongs to."""

from jestgen.agents.detectors.workspace import find_project_root

__all__ = ["find_project_root"]
