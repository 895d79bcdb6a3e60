"""Click command line interface for ``lib_log_redact``.

Purpose
-------
Give operators a shell entry point to inspect the pattern catalog and to
redact a JSON log record with a preset or ad-hoc policy, e.g. to check what a
production logger would emit before rolling out a new rule.

Contents
--------
* :func:`cli` - click group with global traceback and ``.env`` options.
* ``info`` / ``catalog`` / ``mask`` subcommands.
* :func:`main` - entry point wrapping :func:`lib_cli_exit_tools.run_cli`.
"""

from __future__ import annotations

import json
import os
from typing import Any, Sequence, TextIO

import click
import lib_cli_exit_tools
from click.core import ParameterSource
from rich.console import Console
from rich.table import Table

from . import __init__conf__
from . import config as log_config
from .adapters.scrubber import RedactionScrubber
from .domain import DEFAULT_CATALOG, ConfigurationError, LogRecord, preset_policy, resolve_policy
from .domain.presets import PRESETS
from .runtime import summary_info

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


@click.group(invoke_without_command=True, context_settings=CLICK_CONTEXT_SETTINGS)
@click.version_option(version=__init__conf__.version, prog_name=__init__conf__.shell_command, message="%(version)s")
@click.option(
    "--traceback/--no-traceback",
    default=False,
    help="Show full Python tracebacks for errors.",
)
@click.option(
    "--use-dotenv/--no-use-dotenv",
    default=None,
    help=f"Load the nearest .env before running (overrides {log_config.DOTENV_ENV_VAR}).",
)
@click.pass_context
def cli(ctx: click.Context, traceback: bool, use_dotenv: bool | None) -> None:
    """Redact sensitive data from structured log records."""

    if ctx.get_parameter_source("traceback") is not ParameterSource.DEFAULT:
        lib_cli_exit_tools.config.traceback = traceback
        lib_cli_exit_tools.config.traceback_force_color = traceback
    explicit = None if ctx.get_parameter_source("use_dotenv") is ParameterSource.DEFAULT else use_dotenv
    if log_config.should_use_dotenv(explicit, os.getenv(log_config.DOTENV_ENV_VAR)):
        log_config.enable_dotenv()
    if ctx.invoked_subcommand is None:
        click.echo(summary_info(), nl=False)


@cli.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_info() -> None:
    """Print package metadata."""

    click.echo(summary_info(), nl=False)


@cli.command("catalog", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["table", "json"], case_sensitive=False),
    default="table",
    show_default=True,
    help="Render the catalog as a Rich table or as JSON.",
)
def cli_catalog(output_format: str) -> None:
    """List the built-in pattern catalog."""

    entries = [
        {
            "name": name,
            "description": rule.description,
            "pattern": rule.pattern.pattern,
            "replacement": rule.replacement,
        }
        for name, rule in DEFAULT_CATALOG.items()
    ]
    if output_format.lower() == "json":
        click.echo(json.dumps(entries, indent=2, ensure_ascii=False))
        return
    table = Table(title="Pattern catalog")
    table.add_column("Name", no_wrap=True, min_width=14)
    table.add_column("Description")
    table.add_column("Replacement", no_wrap=True)
    for entry in entries:
        table.add_row(entry["name"], entry["description"], entry["replacement"])
    Console(highlight=False).print(table)


@cli.command("mask", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option(
    "--input",
    "input_file",
    type=click.File("r", encoding="utf-8"),
    default="-",
    show_default=True,
    help="JSON file holding one log record ('-' reads stdin).",
)
@click.option(
    "--preset",
    type=click.Choice(sorted(PRESETS), case_sensitive=False),
    default="default",
    show_default=True,
    help="Base masking policy.",
)
@click.option("--pattern", "patterns", multiple=True, help="Catalog pattern to add (repeatable).")
@click.option("--path", "paths", multiple=True, help="Dotted sensitive path to add (repeatable).")
@click.option("--mask-value", default=None, help="Replacement for sensitive paths.")
@click.option("--shallow", is_flag=True, help="Only scan top-level strings of context and attributes.")
@click.option("--no-scan-limit", is_flag=True, help="Scan strings of any length (disables max_scan_chars).")
@click.option("--strict", is_flag=True, help="Report skipped rules on stderr.")
def cli_mask(
    input_file: TextIO,
    preset: str,
    patterns: tuple[str, ...],
    paths: tuple[str, ...],
    mask_value: str | None,
    shallow: bool,
    no_scan_limit: bool,
    strict: bool,
) -> None:
    """Read one JSON log record and print its masked form as JSON."""

    overrides: dict[str, Any] = {"patterns": list(patterns), "sensitive_paths": list(paths)}
    if mask_value is not None:
        overrides["mask_value"] = mask_value
    if shallow:
        overrides["deep_scan"] = False
    if no_scan_limit:
        overrides["max_scan_chars"] = None
    if strict:
        overrides["strict"] = True
    try:
        policy = resolve_policy(overrides, bases=[preset_policy(preset)])
    except ConfigurationError as exc:
        raise click.ClickException(str(exc)) from exc
    record = _read_record(input_file)
    scrubber = RedactionScrubber(policy=policy)
    click.echo(scrubber.scrub(record).to_json())
    for kind, count in sorted(scrubber.anomaly_counts.items()):
        click.echo(f"{kind}: {count}", err=True)


def _read_record(stream: TextIO) -> LogRecord:
    try:
        payload = json.load(stream)
    except json.JSONDecodeError as exc:
        raise click.ClickException(f"input is not valid JSON: {exc}") from exc
    if not isinstance(payload, dict):
        raise click.ClickException("input must be a JSON object describing one log record")
    try:
        return LogRecord.from_dict(payload)
    except (TypeError, ValueError) as exc:
        raise click.ClickException(f"invalid log record: {exc}") from exc


def main(argv: Sequence[str] | None = None) -> int:
    """Run the CLI through :func:`lib_cli_exit_tools.run_cli`.

    Traceback preferences changed by ``--traceback`` are restored afterwards
    so embedding hosts keep their own configuration.
    """

    previous_traceback = lib_cli_exit_tools.config.traceback
    previous_force_color = lib_cli_exit_tools.config.traceback_force_color
    try:
        return lib_cli_exit_tools.run_cli(
            cli,
            argv=list(argv) if argv is not None else None,
            prog_name=__init__conf__.shell_command,
        )
    finally:
        lib_cli_exit_tools.config.traceback = previous_traceback
        lib_cli_exit_tools.config.traceback_force_color = previous_force_color


__all__ = ["cli", "main"]
