"""Derive test artifact paths from source paths.

Two layouts are supported:

* ``mirror`` re-roots the source's directory under ``<root>/<test_dir>``::

      /proj/src/lib/math.ts  ->  /proj/test/src/lib/math.test.ts

  With ``source_root="src"`` the leading ``src`` is dropped
  (``/proj/test/lib/math.test.ts``).

* ``sibling`` inserts ``<test_dir>`` right after the ``source_marker``
  directory::

      /proj/src/lib/math.ts  ->  /proj/src/test/lib/math.test.ts

Mapping is pure; only ``ensure_directory_exists`` touches the filesystem.
"""

from __future__ import annotations

import asyncio
import logging
import os
from pathlib import Path, PurePosixPath

from jestgen.errors import ArtifactIOError

logger = logging.getLogger(__name__)

MIRROR = "mirror"
SIBLING = "sibling"


def artifact_file_name(source: Path) -> str:
    """Return ``<stem>.test<suffix>`` for *source*."""
    return f"{source.stem}.test{source.suffix}"


def map_to_artifact_path(
    source_path: str | Path,
    root_path: str | Path | None,
    *,
    strategy: str = MIRROR,
    test_dir: str = "test",
    source_marker: str = "src",
    source_root: str | None = None,
) -> Path:
    """Compute where the test artifact for *source_path* lives.

    An empty *root_path* means the root is undetermined; the source file's
    own directory is used instead.

    Raises:
        ValueError: Unknown *strategy*, or a ``mirror`` source outside the root.
    """
    source = Path(source_path)
    root = Path(root_path) if root_path else source.parent

    if strategy == MIRROR:
        directory = _mirror_directory(source.parent, root, test_dir, source_root)
    elif strategy == SIBLING:
        directory = _sibling_directory(
            source.parent, Path(root_path) if root_path else None, test_dir, source_marker
        )
    else:
        raise ValueError(f"Unknown path strategy: {strategy}")

    return directory / artifact_file_name(source)


def _mirror_directory(
    source_dir: Path, root: Path, test_dir: str, source_root: str | None
) -> Path:
    try:
        relative = source_dir.relative_to(root)
    except ValueError as exc:
        raise ValueError(f"{source_dir} is not inside project root {root}") from exc

    parts = relative.parts
    if source_root and parts and parts[0] == source_root:
        parts = parts[1:]
    return root.joinpath(test_dir, *parts)


def _sibling_directory(
    source_dir: Path, root: Path | None, test_dir: str, marker: str
) -> Path:
    parts = source_dir.parts
    # Segments at or above the root are never considered.
    start = len(root.parts) if root is not None and source_dir.is_relative_to(root) else 0

    for index in range(start, len(parts)):
        if parts[index] != marker:
            continue
        if index == len(parts) - 1:
            break
        return Path(*parts[: index + 1], test_dir, *parts[index + 1 :])

    logger.debug("No inner %r segment in %s; keeping directory", marker, source_dir)
    return source_dir


def relative_path_level(artifact_dir: str | Path, root: str | Path) -> str:
    """Return ``../..``-style steps from *artifact_dir* up to *root*.

    Empty when *artifact_dir* is the root itself.
    """
    relative = os.path.relpath(Path(root), Path(artifact_dir))
    steps = [".." for part in Path(relative).parts if part != "."]
    return "/".join(steps)


def relative_import_path(artifact_path: str | Path, source_path: str | Path) -> str:
    """Return the module specifier that imports *source_path* from *artifact_path*.

    The extension is dropped and the result always starts with ``./`` or
    ``../`` so Node resolves it as a relative import.
    """
    source = Path(source_path)
    relative = os.path.relpath(source.with_suffix(""), Path(artifact_path).parent)
    posix = PurePosixPath(*Path(relative).parts).as_posix()
    if not posix.startswith("../"):
        posix = f"./{posix}"
    return posix


async def ensure_directory_exists(directory: str | Path) -> None:
    """Create *directory* and its parents if they are missing."""
    path = Path(directory)
    try:
        await asyncio.to_thread(path.mkdir, parents=True, exist_ok=True)
    except OSError as exc:
        raise ArtifactIOError(f"Cannot create directory {path}: {exc}") from exc
