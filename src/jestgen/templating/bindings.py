"""Placeholder bindings for the bundled and custom templates."""

from __future__ import annotations

import re
from pathlib import Path
from typing import TYPE_CHECKING

from jestgen.templating.groups import SUPERTEST_GROUP
from jestgen.utils.paths import relative_import_path, relative_path_level
from jestgen.utils.strings import escape_js_string

if TYPE_CHECKING:
    from jestgen.config import GenerationConfig
    from jestgen.models.scaffold import SourceUnitDescriptor

FILE_NAME = "sourceFilePropertise_fileName"
FUNCTION_NAME = "sourceFilePropertise_functionName"
FUNCTION_DESCRIPTION = "sourceFilePropertise_functionDescription"
FUNCTION_EXPECTATION = "sourceFilePropertise_functionExpectation"
MODULE_ALIAS = "sourceFilePropertise_moduleAlias"
IMPORT_PATH = "sourceFilePropertise_importPath"

# Free text from doc comments; substituted without further expansion.
LABEL_BINDINGS = frozenset({FUNCTION_DESCRIPTION, FUNCTION_EXPECTATION})

_NON_IDENTIFIER_RE = re.compile(r"[^A-Za-z0-9_$]+")


def module_alias(file_name: str) -> str:
    """Turn a file stem such as ``date-utils`` into an identifier (``dateUtils``)."""
    words = [word for word in _NON_IDENTIFIER_RE.split(file_name) if word]
    if not words:
        return "subject"
    alias = words[0] + "".join(word[:1].upper() + word[1:] for word in words[1:])
    if alias[0].isdigit():
        alias = f"_{alias}"
    return alias


def enabled_groups(config: GenerationConfig) -> set[str]:
    """Names of the conditional groups switched on by *config*."""
    groups: set[str] = set()
    if config.use_supertest:
        groups.add(SUPERTEST_GROUP.name)
    return groups


def build_bindings(
    descriptor: SourceUnitDescriptor,
    config: GenerationConfig,
    *,
    source_path: str | Path,
    artifact_path: str | Path,
    root: str | Path,
) -> dict[str, str]:
    """Assemble every placeholder value for one scaffold.

    Labels fall back to the function name and are escaped for the single
    quoted strings the templates use.  Custom placeholders are included
    only when a custom template is in use and never shadow the built-ins.
    """
    artifact = Path(artifact_path)
    bindings: dict[str, str] = {}
    if config.use_custom_template:
        bindings.update(config.custom_placeholders)

    bindings.update(
        {
            FILE_NAME: descriptor.file_name,
            FUNCTION_NAME: descriptor.function_name,
            FUNCTION_DESCRIPTION: escape_js_string(descriptor.description_label),
            FUNCTION_EXPECTATION: escape_js_string(descriptor.expectation_label),
            MODULE_ALIAS: module_alias(descriptor.file_name),
            IMPORT_PATH: relative_import_path(artifact, source_path),
            "relativePathLevel": relative_path_level(artifact.parent, root),
            "appPath": config.app_path or "",
            "beforeAll": config.before_all or "",
            "afterAll": config.after_all or "",
        }
    )
    return bindings
