"""Project root discovery for a source file."""

from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger(__name__)

ROOT_MARKERS: tuple[str, ...] = (".git", "package.json")
"""Entries whose presence marks a directory as a project root."""


def find_project_root(source_path: str | Path, markers: tuple[str, ...] = ROOT_MARKERS) -> Path:
    """Return the nearest ancestor of *source_path* holding one of *markers*.

    Falls back to the source file's own directory when no ancestor does.
    """
    source = Path(source_path).resolve()
    start = source if source.is_dir() else source.parent

    for directory in (start, *start.parents):
        for marker in markers:
            if (directory / marker).exists():
                logger.debug("Project root for %s: %s (found %s)", source, directory, marker)
                return directory

    logger.debug("No project marker above %s; using its directory", source)
    return start
