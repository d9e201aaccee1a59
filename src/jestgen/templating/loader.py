"""Loading of bundled and user-supplied templates."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import TYPE_CHECKING

from jestgen.config import CASE_TEMPLATE_PATH, DEFAULT_TEMPLATE_PATH
from jestgen.errors import TemplateLoadError

if TYPE_CHECKING:
    from jestgen.config import GenerationConfig

logger = logging.getLogger(__name__)


async def read_template(path: str | Path, *, kind: str = "template") -> str:
    """Read a template file, raising ``TemplateLoadError`` on any failure."""
    template_path = Path(path)
    try:
        text = await asyncio.to_thread(template_path.read_text, encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise TemplateLoadError(f"Failed to read {kind} {template_path}: {exc}") from exc
    logger.debug("Loaded %s from %s (%d chars)", kind, template_path, len(text))
    return text


async def load_header_template(config: GenerationConfig) -> str:
    """Return the header template: the custom one if enabled, else the bundled one."""
    if config.use_custom_template:
        return await read_template(config.custom_template_path, kind="custom Jest template")
    return await read_template(DEFAULT_TEMPLATE_PATH, kind="default Jest template")


async def load_case_template() -> str:
    """Return the bundled template for one test case."""
    return await read_template(CASE_TEMPLATE_PATH, kind="test case template")
