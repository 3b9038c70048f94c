"""Check-config command for engine configuration files."""

from pathlib import Path
from typing import Annotated

import typer

from cutstock.application.config import ConfigError, EngineConfig, load_config


def check_config_command(
    config_file: Annotated[
        Path,
        typer.Argument(help="Path to the JSON engine configuration file"),
    ],
) -> None:
    """Validate an engine configuration file.

    Exit codes:
        0 - Configuration is valid
        1 - Configuration has errors (cannot be used)

    Example:
        cutstock check-config engine.json
    """
    typer.echo(f"Checking {config_file}...")
    typer.echo()

    try:
        config = load_config(config_file)
    except ConfigError as e:
        display_config_error(e)
        raise typer.Exit(code=1)

    _display_config(config)
    typer.echo()
    typer.echo("Configuration is valid.")


def display_config_error(error: ConfigError) -> None:
    """Display a configuration loading error on stderr."""
    typer.echo("Errors:", err=True)
    if error.error_type == "file_not_found":
        typer.echo(f"  File not found: {error.path}", err=True)
    elif error.error_type == "json_parse":
        typer.echo("  Invalid JSON syntax", err=True)
        for detail in error.details:
            line = detail.get("line", "?")
            column = detail.get("column", "?")
            message = detail.get("message", "Unknown error")
            typer.echo(f"    Line {line}, Column {column}: {message}", err=True)
    elif error.error_type == "validation":
        for detail in error.details:
            path = detail.get("path", "unknown")
            message = detail.get("message", "Unknown error")
            value = detail.get("value")
            typer.echo(f"  {path}: {message}", err=True)
            if value is not None:
                typer.echo(f"    Value: {value!r}", err=True)
    else:
        typer.echo(f"  {error.message}", err=True)


def _display_config(config: EngineConfig) -> None:
    strategy = config.strategy
    typer.echo(f"Strategy:        {strategy.name.value}")
    if strategy.name.value == "lookahead":
        typer.echo(f"  Window:        {strategy.window}")
        typer.echo(f"  Candidates:    {strategy.candidate_limit}")
        if strategy.tie_tolerance_mm is not None:
            typer.echo(f"  Tie tolerance: {strategy.tie_tolerance_mm} mm")
    typer.echo(f"Sort order:      {config.sort_order.value}")
    max_boards = config.max_boards if config.max_boards is not None else "unlimited"
    typer.echo(f"Max boards:      {max_boards}")
    typer.echo(f"Workers:         {config.max_workers}")
    typer.echo(f"Default kerf:    {config.default_kerf_mm} mm")
