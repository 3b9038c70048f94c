"""Typer CLI for cutting-stock optimization."""

import json
import logging
from enum import Enum
from pathlib import Path
from typing import Annotated, Any

import typer

from cutstock.application import (
    ConfigError,
    EngineConfig,
    OptimizationOrchestrator,
    RequestShapeError,
)
from cutstock.application.config import StrategyName, load_config, merge_config_with_cli
from cutstock.cli.commands import (
    check_config_command,
    display_config_error,
    serve_command,
)
from cutstock.infrastructure import JsonResultExporter, SummaryFormatter


class OutputFormat(str, Enum):
    """Output formats for the optimize command."""

    JSON = "json"
    SUMMARY = "summary"


app = typer.Typer(
    name="cutstock",
    help="Pack rectangular parts onto stock boards with guillotine cuts.",
)

app.command(name="check-config")(check_config_command)
app.command(name="serve")(serve_command)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _load_request(path: Path) -> Any:
    if not path.exists():
        typer.echo(f"Error: Request file not found: {path}", err=True)
        raise typer.Exit(code=1)
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        typer.echo(
            f"Error: Invalid JSON in request file: {path} "
            f"(line {e.lineno}, column {e.colno}): {e.msg}",
            err=True,
        )
        raise typer.Exit(code=1)


@app.command()
def optimize(
    request_file: Annotated[
        Path,
        typer.Argument(help="Path to the JSON optimization request"),
    ],
    config_file: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Path to JSON engine configuration file"),
    ] = None,
    strategy: Annotated[
        StrategyName | None,
        typer.Option("--strategy", "-s", help="Packing strategy"),
    ] = None,
    window: Annotated[
        int | None,
        typer.Option("--window", "-w", help="Look-ahead window size (0-8)"),
    ] = None,
    workers: Annotated[
        int | None,
        typer.Option("--workers", help="Worker processes for materials"),
    ] = None,
    max_boards: Annotated[
        int | None,
        typer.Option("--max-boards", help="Maximum boards per material"),
    ] = None,
    output_format: Annotated[
        OutputFormat,
        typer.Option("--format", "-f", help="Output format: json, summary"),
    ] = OutputFormat.JSON,
    output_file: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write output to this file"),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log packing decisions"),
    ] = False,
) -> None:
    """Optimize board layouts for a request file.

    When using --config, CLI options override config file values.

    Exit codes:
        0 - Every material was optimized
        1 - The request or configuration could not be used
        2 - At least one material failed

    Examples:
        cutstock optimize request.json
        cutstock optimize request.json --strategy greedy --format summary
        cutstock optimize request.json --config engine.json --window 5 -o result.json
    """
    _configure_logging(verbose)

    try:
        config = load_config(config_file) if config_file is not None else EngineConfig()
        config = merge_config_with_cli(
            config,
            strategy=strategy.value if strategy is not None else None,
            window=window,
            max_workers=workers,
            max_boards=max_boards,
        )
    except ConfigError as e:
        display_config_error(e)
        raise typer.Exit(code=1)

    payload = _load_request(request_file)

    orchestrator = OptimizationOrchestrator(config)
    try:
        outcomes = orchestrator.optimize(payload)
    except RequestShapeError as e:
        typer.echo(f"Error: {e.message}", err=True)
        raise typer.Exit(code=1)

    if output_format == OutputFormat.SUMMARY:
        text = SummaryFormatter().format(outcomes)
    else:
        text = JsonResultExporter().export(outcomes)

    if output_file is not None:
        output_file.write_text(text + "\n", encoding="utf-8")
        typer.echo(f"Results written to {output_file}")
    else:
        typer.echo(text)

    if any(not outcome.is_valid for outcome in outcomes):
        raise typer.Exit(code=2)


if __name__ == "__main__":
    app()
