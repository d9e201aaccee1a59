"""Configuration parsing from ``.jestgen.json``."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from jestgen.errors import ConfigLoadError

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = ".jestgen.json"

SCHEMA_VERSION = 1

PATH_STRATEGIES = frozenset({"mirror", "sibling"})

_PAIR_LENGTH = 2

_TEMPLATE_DIR = Path(__file__).parent / "templating" / "data"

DEFAULT_TEMPLATE_PATH = _TEMPLATE_DIR / "default-template.txt"
"""Bundled header template used when no custom template is configured."""

CASE_TEMPLATE_PATH = _TEMPLATE_DIR / "test-suite-template.txt"
"""Bundled template for a single ``// Test case for`` block."""


@dataclass
class GenerationConfig:
    """Resolved ``.jestgen.json`` configuration for one invocation."""

    version: int = SCHEMA_VERSION
    """Config schema version."""

    use_custom_template: bool = False
    """Render the header from ``custom_template_path`` instead of the bundled one."""

    custom_template_path: str = str(DEFAULT_TEMPLATE_PATH)
    """Absolute path of the header template (resolved against the config file)."""

    custom_placeholders: dict[str, str] = field(default_factory=dict)
    """Extra ``name -> value`` bindings, honoured only with a custom template."""

    use_supertest: bool = False
    """Enable the ``useSupertest`` integration-helper placeholder group."""

    app_path: str | None = None
    """Module path imported by the integration helper (``appPath``)."""

    before_all: str | None = None
    """Code inserted for the ``${beforeAll}`` placeholder."""

    after_all: str | None = None
    """Code inserted for the ``${afterAll}`` placeholder."""

    project_folder: str | None = None
    """Overrides the discovered project root for path mapping."""

    path_strategy: str = "mirror"
    """How artifact paths are derived: ``mirror`` or ``sibling``."""

    test_dir: str = "test"
    """Name of the test directory (``test`` or ``tests``)."""

    source_marker: str = "src"
    """Directory segment after which ``sibling`` inserts ``test_dir``."""

    source_root: str | None = None
    """Leading directory stripped by ``mirror`` after the root (e.g. ``src``)."""

    config_path: str = ""
    """File the configuration was read from (empty for defaults)."""

    @property
    def is_default(self) -> bool:
        """Return True when no config file contributed to this value."""
        return not self.config_path


def default_config() -> GenerationConfig:
    """Return a fresh default configuration."""
    return GenerationConfig()


def _read_config_file(config_file: Path) -> dict[str, Any]:
    """Read and decode *config_file*, raising ``ConfigLoadError`` on failure."""
    try:
        text = config_file.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigLoadError(f"Cannot read {config_file}: {exc}") from exc
    try:
        parsed = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ConfigLoadError(f"Invalid JSON in {config_file}: {exc}") from exc
    if not isinstance(parsed, dict):
        raise ConfigLoadError(f"{config_file} must contain a JSON object")
    return parsed


def _normalize_placeholder_name(name: str) -> str:
    """Accept both ``author`` and ``${author}`` as placeholder keys."""
    if name.startswith("${") and name.endswith("}"):
        return name[2:-1]
    return name


def _parse_custom_placeholders(raw: Any) -> dict[str, str]:
    """Parse ``customPlaceholders`` from an object or a list of pairs."""
    pairs: list[tuple[Any, Any]] = []
    if isinstance(raw, dict):
        pairs = list(raw.items())
    elif isinstance(raw, list):
        for item in raw:
            if isinstance(item, (list, tuple)) and len(item) == _PAIR_LENGTH:
                pairs.append((item[0], item[1]))
            else:
                logger.warning("Ignoring malformed customPlaceholders entry: %r", item)
    elif raw is not None:
        logger.warning("customPlaceholders must be an object or a list of pairs")

    return {_normalize_placeholder_name(str(name)): str(value) for name, value in pairs}


def _optional_str(value: Any) -> str | None:
    if value is None or value == "":
        return None
    return str(value)


def parse_config(raw: dict[str, Any], config_file: Path) -> GenerationConfig:
    """Build a ``GenerationConfig`` from decoded JSON.

    Missing keys take their defaults.  The custom template path is made
    absolute relative to the directory holding *config_file*.
    """
    defaults = default_config()

    version = int(raw.get("version", SCHEMA_VERSION))
    if version != SCHEMA_VERSION:
        logger.warning(
            "Unsupported %s version %d; reading it as version %d",
            CONFIG_FILE_NAME,
            version,
            SCHEMA_VERSION,
        )

    use_custom_template = bool(raw.get("useCustomTemplate", defaults.use_custom_template))
    custom_template_path = defaults.custom_template_path
    custom_placeholders: dict[str, str] = {}
    if use_custom_template:
        template_raw = raw.get("customTemplatePath")
        if template_raw:
            custom_template_path = str((config_file.parent / str(template_raw)).resolve())
        else:
            logger.warning("useCustomTemplate is set but customTemplatePath is empty")
        custom_placeholders = _parse_custom_placeholders(raw.get("customPlaceholders"))

    path_strategy = str(raw.get("pathStrategy", defaults.path_strategy))
    if path_strategy not in PATH_STRATEGIES:
        logger.warning("Unknown pathStrategy %r; using %r", path_strategy, defaults.path_strategy)
        path_strategy = defaults.path_strategy

    return GenerationConfig(
        version=SCHEMA_VERSION,
        use_custom_template=use_custom_template,
        custom_template_path=custom_template_path,
        custom_placeholders=custom_placeholders,
        use_supertest=bool(raw.get("useSupertest", defaults.use_supertest)),
        app_path=_optional_str(raw.get("appPath")),
        before_all=_optional_str(raw.get("beforeAll")),
        after_all=_optional_str(raw.get("afterAll")),
        project_folder=_optional_str(raw.get("projectFolder")),
        path_strategy=path_strategy,
        test_dir=str(raw.get("testDir") or defaults.test_dir),
        source_marker=str(raw.get("sourceMarker") or defaults.source_marker),
        source_root=_optional_str(raw.get("sourceRoot")),
        config_path=str(config_file),
    )


def load_config(root: str | Path | None) -> GenerationConfig:
    """Load ``.jestgen.json`` from *root*.

    Never raises: a missing root, an unreadable file or invalid JSON all
    yield ``default_config()``.  ``JESTGEN_PROJECT_FOLDER`` overrides
    ``projectFolder``.
    """
    config = default_config()
    if root:
        config_file = Path(root).resolve() / CONFIG_FILE_NAME
        try:
            config = parse_config(_read_config_file(config_file), config_file)
        except (ConfigLoadError, TypeError, ValueError) as exc:
            logger.debug("Using default configuration: %s", exc)
            config = default_config()

    env_folder = os.environ.get("JESTGEN_PROJECT_FOLDER", "").strip()
    if env_folder:
        config.project_folder = env_folder
    return config


def config_to_json(config: GenerationConfig) -> dict[str, Any]:
    """Serialize *config* back to the ``.jestgen.json`` key layout."""
    return {
        "version": config.version,
        "useCustomTemplate": config.use_custom_template,
        "customTemplatePath": config.custom_template_path,
        "customPlaceholders": dict(config.custom_placeholders),
        "useSupertest": config.use_supertest,
        "appPath": config.app_path,
        "beforeAll": config.before_all,
        "afterAll": config.after_all,
        "projectFolder": config.project_folder,
        "pathStrategy": config.path_strategy,
        "testDir": config.test_dir,
        "sourceMarker": config.source_marker,
        "sourceRoot": config.source_root,
    }


def initial_config_json() -> dict[str, Any]:
    """Return the document written by ``jestgen config init``."""
    data = config_to_json(default_config())
    data["customTemplatePath"] = ""
    return data


def validate_config(config: GenerationConfig) -> list[str]:
    """Validate the configuration and return a list of error messages.

    Returns an empty list if the configuration is valid.
    """
    errors: list[str] = []

    if config.use_custom_template:
        template = Path(config.custom_template_path)
        if not template.is_absolute():
            errors.append("customTemplatePath must resolve to an absolute path")
        elif not template.is_file():
            errors.append(f"customTemplatePath does not exist: {template}")

    if config.use_supertest and not config.app_path:
        errors.append("appPath is required when useSupertest is true")

    if config.path_strategy not in PATH_STRATEGIES:
        errors.append(
            f"pathStrategy must be one of {sorted(PATH_STRATEGIES)}, got {config.path_strategy!r}"
        )

    for name, value in (("testDir", config.test_dir), ("sourceMarker", config.source_marker)):
        if not value or "/" in value or "\\" in value:
            errors.append(f"{name} must be a single directory name, got {value!r}")

    if config.project_folder and not Path(config.project_folder).is_dir():
        errors.append(f"projectFolder does not exist: {config.project_folder}")

    return errors
