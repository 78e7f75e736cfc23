"""Command line interface for fileman."""

from __future__ import annotations

import difflib
import logging
from copy import deepcopy
from pathlib import Path
from typing import Any

import click
import yaml
from click.core import ParameterSource
from rich.console import Console
from rich.logging import RichHandler
from rich.syntax import Syntax

from fileman.config import (
    ConfigError,
    ConfigManager,
    FilemanConfig,
    assign_nested,
    resolve_with_precedence,
)
from fileman.organize import OrganizeError, Organizer, OrganizeResult, OrganizeTask

console = Console()
error_console = Console(stderr=True)


def setup_logging(level: str, *, verbose: bool = False) -> None:
    """Route log records through a rich handler on stderr.

    Args:
        level: Configured logging level name.
        verbose: Force DEBUG output regardless of the configured level.
    """
    resolved = logging.DEBUG if verbose else logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        resolved = logging.WARNING
    logging.basicConfig(
        level=resolved,
        format="%(message)s",
        handlers=[RichHandler(rich_tracebacks=True, console=error_console)],
        force=True,
    )


def _handle_cli_error(
    message: str,
    *,
    code: str,
    json_output: bool,
    details: Any | None = None,
    original: Exception | None = None,
) -> None:
    """Emit a standardized error and terminate the command.

    Args:
        message: Human-readable error message.
        code: Machine-readable error identifier.
        json_output: Indicates whether JSON mode is active.
        details: Optional structured details to include in the payload.
        original: Original exception for chaining when not using JSON.

    Raises:
        SystemExit: When emitting JSON output to terminate the command.
        click.ClickException: For non-JSON flows to surface the error.
    """

    if json_output:
        payload: dict[str, Any] = {"error": {"code": code, "message": message}}
        if details is not None:
            payload["error"]["details"] = details
        console.print_json(data=payload)
        raise SystemExit(1)

    raise click.ClickException(message) from original


def _format_summary_line(command: str, root: Path | str, metrics: dict[str, Any]) -> str:
    parts = ", ".join(f"{key}={value}" for key, value in metrics.items())
    return f"[green]{command} summary for {root}: {parts}.[/green]"


def _result_payload(result: OrganizeResult) -> dict[str, Any]:
    return {
        "context": {
            "source": result.task.source.as_posix(),
            "target": result.task.target.as_posix(),
            "started_at": result.started_at.isoformat(),
            "finished_at": result.finished_at.isoformat() if result.finished_at else None,
        },
        "counts": {"moved": len(result.moves), "buckets": len(result.buckets)},
        "buckets": result.buckets,
        "moves": [move.model_dump(mode="json") for move in result.moves],
    }


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="fileman")
def cli() -> None:
    """fileman reorganizes large collections of files into dated buckets."""


@cli.command()
@click.argument("source", type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.argument("target", type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.option("--json", "json_output", is_flag=True, help="Emit JSON describing the moves.")
@click.option("--quiet", is_flag=True, help="Suppress non-error output.")
@click.option("-v", "--verbose", is_flag=True, help="Log every bucket and move.")
@click.option(
    "--fallback-mtime",
    is_flag=True,
    help="Use the modification time when a file has no creation time.",
)
@click.pass_context
def organize(
    ctx: click.Context,
    source: Path,
    target: Path,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    fallback_mtime: bool,
) -> None:
    """Move every file under SOURCE into TARGET/YYYY/YYYY-MM buckets.

    Files are renamed to YYYY-MM_<n>.<ext>, numbering on from the files a
    bucket already holds. The first failure stops the run; files moved before
    it stay where they were moved.

    Args:
        ctx: Click context used for parameter source inspection.
        source: Directory holding the unorganized files.
        target: Directory receiving the bucket tree.
        json_output: If True, emit JSON describing the applied moves.
        quiet: When True, suppress non-error output.
        verbose: When True, log at DEBUG level.
        fallback_mtime: When True, override the configured creation-time fallback.
    """

    try:
        overrides = {"organize.creation_time_fallback": True} if fallback_mtime else None
        config = ConfigManager().load(cli_overrides=overrides)
    except ConfigError as exc:
        _handle_cli_error(str(exc), code="config_error", json_output=json_output, original=exc)
        return

    setup_logging(config.logging.level, verbose=verbose)

    explicit_quiet = ctx.get_parameter_source("quiet") == ParameterSource.COMMANDLINE
    quiet_enabled = quiet if explicit_quiet else config.cli.quiet_default
    if json_output:
        if explicit_quiet and quiet_enabled:
            raise click.ClickException("--json cannot be combined with --quiet.")
        quiet_enabled = False

    try:
        task = OrganizeTask(source=source, target=target)
        result = Organizer(task, config.organize).run()
    except OrganizeError as exc:
        _handle_cli_error(
            f"Organize failed: {exc}",
            code=exc.code,
            json_output=json_output,
            details={"path": exc.path.as_posix(), "exception": type(exc).__name__},
            original=exc,
        )
        return

    if json_output:
        console.print_json(data=_result_payload(result))
        return

    if quiet_enabled:
        return

    console.print(
        _format_summary_line(
            "Organize",
            target,
            {"moved": len(result.moves), "buckets": len(result.buckets)},
        ),
        soft_wrap=True,
    )


@cli.group()
def config() -> None:
    """Manage fileman configuration files and overrides."""


@config.command("view")
@click.option("--no-env", is_flag=True, help="Ignore environment overrides when displaying output.")
def config_view(no_env: bool) -> None:
    """Display the effective configuration after applying precedence rules."""
    try:
        effective = ConfigManager().load(include_env=not no_env)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc

    yaml_text = yaml.safe_dump(effective.model_dump(mode="python"), sort_keys=False)
    console.print(Syntax(yaml_text, "yaml", word_wrap=True))


@config.command("set")
@click.argument("key")
@click.option("--value", required=True, help="Value to assign to KEY.")
def config_set(key: str, value: str) -> None:
    """Persist a configuration value expressed as a dotted KEY.

    Args:
        key: Dotted path such as ``organize.creation_time_fallback``.
        value: YAML-literal value to write into the configuration file.

    Raises:
        click.ClickException: If parsing, assignment, or validation fails.
    """
    manager = ConfigManager()
    manager.ensure_exists()

    segments = [segment.strip() for segment in key.split(".") if segment.strip()]
    if not segments:
        raise click.ClickException("KEY must specify a dotted path such as 'logging.level'.")

    try:
        parsed_value = yaml.safe_load(value)
    except yaml.YAMLError as exc:
        raise click.ClickException(f"Unable to parse value: {exc}") from exc

    before = manager.read_text().splitlines()
    try:
        original = manager.load_file_overrides()
        file_data = deepcopy(original)
        assign_nested(file_data, segments, parsed_value)
        resolve_with_precedence(defaults=FilemanConfig(), file_overrides=file_data)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc

    if file_data == original:
        console.print("[yellow]No changes applied; value already up to date.[/yellow]")
        return

    manager.save(file_data)
    after = manager.read_text().splitlines()

    diff = difflib.unified_diff(
        before,
        after,
        fromfile="config.yaml (before)",
        tofile="config.yaml (after)",
        lineterm="",
    )
    console.print(Syntax("\n".join(diff), "diff", word_wrap=False))
    console.print(f"[green]Updated {'.'.join(segments)}.[/green]")


def main() -> None:
    """Invoke the Click CLI as the console script entry point."""
    cli()


if __name__ == "__main__":
    main()
