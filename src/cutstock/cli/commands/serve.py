"""Serve command: run the REST API with uvicorn."""

import os
from pathlib import Path
from typing import Annotated

import typer
import uvicorn

from cutstock.web.dependencies import CONFIG_ENV_VAR


def serve_command(
    host: Annotated[
        str,
        typer.Option("--host", help="Interface to bind"),
    ] = "127.0.0.1",
    port: Annotated[
        int,
        typer.Option("--port", "-p", help="Port to listen on"),
    ] = 8000,
    config_file: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Engine configuration for the API"),
    ] = None,
    reload: Annotated[
        bool,
        typer.Option("--reload", help="Restart on source changes"),
    ] = False,
) -> None:
    """Serve the optimization API.

    The configuration file, if given, is passed to the app through
    CUTSTOCK_CONFIG.

    Example:
        cutstock serve --port 8080 --config engine.json
    """
    if config_file is not None:
        if not config_file.exists():
            typer.echo(f"Error: Config file not found: {config_file}", err=True)
            raise typer.Exit(code=1)
        os.environ[CONFIG_ENV_VAR] = str(config_file.resolve())

    uvicorn.run("cutstock.web:app", host=host, port=port, reload=reload)
