"""Top-level jestgen command group."""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path

import click
import yaml
from rich.console import Console
from rich.logging import RichHandler

from jestgen import __version__
from jestgen.agents.builders.scaffold import ScaffoldBuilder, ScaffoldTask
from jestgen.agents.detectors.workspace import find_project_root
from jestgen.agents.reporters.terminal import reporter
from jestgen.config import (
    CONFIG_FILE_NAME,
    config_to_json,
    initial_config_json,
    load_config,
    validate_config,
)
from jestgen.models.scaffold import ScaffoldAction, ScaffoldResult
from jestgen.telemetry import init_sentry, telemetry_config_from_env
from jestgen.utils.cursor import word_at_position
from jestgen.utils.paths import map_to_artifact_path

logger = logging.getLogger(__name__)
console = Console()


def _configure_logging(*, verbose: bool) -> None:
    root_logger = logging.getLogger()
    for handler in [h for h in root_logger.handlers if isinstance(h, RichHandler)]:
        root_logger.removeHandler(handler)
    root_logger.addHandler(
        RichHandler(console=Console(stderr=True), show_path=False, rich_tracebacks=True)
    )
    root_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)


def _resolve_function_name(
    source: Path, function_name: str | None, line: int | None, column: int | None
) -> str:
    """Return FUNCTION, or the identifier at ``--line``/``--column``."""
    if function_name:
        return function_name
    if line is None or column is None:
        reporter.print_error("Give a FUNCTION name or both --line and --column.")
        raise click.Abort

    text = source.read_text(encoding="utf-8", errors="replace")
    word = word_at_position(text, line, column)
    if word is None:
        reporter.print_error(f"No identifier at {source.name}:{line}:{column}")
        raise click.Abort
    logger.debug("Cursor %d:%d resolves to %s", line, column, word)
    return word


def _resolve_root(source: Path, root: str | None) -> Path:
    return Path(root) if root else find_project_root(source)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging.")
@click.version_option(version=__version__, prog_name="jestgen")
@click.pass_context
def cli(ctx: click.Context, *, verbose: bool) -> None:
    """Create and update Jest test scaffolds from templates."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    _configure_logging(verbose=verbose)
    init_sentry(telemetry_config_from_env())


@cli.command()
@click.argument("source", type=click.Path(exists=True, dir_okay=False, resolve_path=True))
@click.argument("function_name", metavar="[FUNCTION]", required=False)
@click.option("--line", type=click.IntRange(min=1), help="Cursor line (1-based).")
@click.option("--column", type=click.IntRange(min=1), help="Cursor column (1-based).")
@click.option(
    "--root",
    type=click.Path(exists=True, file_okay=False, resolve_path=True),
    help="Project root directory (discovered from SOURCE when omitted).",
)
@click.option(
    "--json-output",
    "as_json",
    is_flag=True,
    help="Print the result as JSON.",
)
def generate(
    source: str,
    function_name: str | None,
    line: int | None,
    column: int | None,
    root: str | None,
    *,
    as_json: bool,
) -> None:
    """Create or update the Jest test case for FUNCTION in SOURCE.

    Example:
      jestgen generate src/math.ts add
      jestgen generate src/math.ts --line 12 --column 17
    """
    source_path = Path(source)
    name = _resolve_function_name(source_path, function_name, line, column)
    task = ScaffoldTask(
        source_file=str(source_path),
        function_name=name,
        root_path=str(_resolve_root(source_path, root)),
    )
    output = asyncio.run(ScaffoldBuilder().run(task))

    if as_json:
        payload = {
            "status": output.status.value,
            "result": output.result,
            "errors": output.errors,
            "warnings": output.warnings,
        }
        click.echo(json.dumps(payload, indent=2))
        if not output.succeeded:
            raise SystemExit(1)
        return

    if not output.succeeded:
        for error in output.errors:
            reporter.print_error(error)
        raise click.Abort

    result = ScaffoldResult(
        action=ScaffoldAction(output.result["action"]),
        artifact_path=output.result["artifact_path"],
        function_name=output.result["function_name"],
        warnings=output.warnings,
    )
    reporter.print_scaffold_result(result)


@cli.command("path")
@click.argument("source", type=click.Path(exists=True, dir_okay=False, resolve_path=True))
@click.option(
    "--root",
    type=click.Path(exists=True, file_okay=False, resolve_path=True),
    help="Project root directory (discovered from SOURCE when omitted).",
)
def path_command(source: str, root: str | None) -> None:
    """Print the test artifact path for SOURCE."""
    source_path = Path(source)
    root_path = _resolve_root(source_path, root)
    config = load_config(root_path)
    if config.project_folder:
        root_path = (root_path / config.project_folder).resolve()
    try:
        artifact = map_to_artifact_path(
            source_path,
            root_path,
            strategy=config.path_strategy,
            test_dir=config.test_dir,
            source_marker=config.source_marker,
            source_root=config.source_root,
        )
    except ValueError as e:
        reporter.print_error(str(e))
        raise click.Abort from e
    click.echo(str(artifact))


@cli.group("config")
def config_group() -> None:
    """Inspect and create `.jestgen.json`."""


@config_group.command("show")
@click.option(
    "--path",
    default=".",
    type=click.Path(exists=True, file_okay=False, resolve_path=True),
    help="Project root directory.",
)
@click.option(
    "--json-output",
    "as_json",
    is_flag=True,
    help="Output as JSON instead of YAML.",
)
def config_show(path: str, *, as_json: bool) -> None:
    """Display the resolved configuration.

    Missing or unreadable files show the defaults.

    Example:
      jestgen config show
      jestgen config show --json-output
    """
    config = load_config(path)
    config_dict = config_to_json(config)

    if as_json:
        click.echo(json.dumps(config_dict, indent=2))
        return

    if config.is_default:
        reporter.print_info(f"No readable {CONFIG_FILE_NAME} in {path}; showing defaults")
    console.print("[bold cyan]Configuration:[/bold cyan]")
    click.echo(yaml.safe_dump(config_dict, sort_keys=False, default_flow_style=False))


@config_group.command("validate")
@click.option(
    "--path",
    default=".",
    type=click.Path(exists=True, file_okay=False, resolve_path=True),
    help="Project root directory.",
)
def config_validate(path: str) -> None:
    """Check `.jestgen.json` for unusable values.

    Example:
      jestgen config validate
    """
    reporter.print_header(f"Validating {CONFIG_FILE_NAME}")
    config = load_config(path)
    if config.is_default:
        reporter.print_warning(f"No readable {CONFIG_FILE_NAME} in {path}; checking defaults")

    errors = validate_config(config)
    if not errors:
        reporter.print_success("Configuration is valid!")
        return

    reporter.print_error(f"Found {len(errors)} configuration error(s):")
    console.print()
    for idx, error in enumerate(errors, start=1):
        console.print(f"  {idx}. [red]{error}[/red]")
    console.print()
    raise click.Abort


@config_group.command("init")
@click.option(
    "--path",
    default=".",
    type=click.Path(exists=True, file_okay=False, resolve_path=True),
    help="Project root directory.",
)
@click.option("--force", is_flag=True, help="Overwrite an existing file.")
def config_init(path: str, *, force: bool) -> None:
    """Write a default `.jestgen.json` to the project root."""
    config_file = Path(path) / CONFIG_FILE_NAME
    if config_file.exists() and not force:
        reporter.print_error(f"{config_file} already exists (use --force to overwrite)")
        raise click.Abort

    config_file.write_text(json.dumps(initial_config_json(), indent=2) + "\n", encoding="utf-8")
    reporter.print_success(f"Wrote {config_file}")
