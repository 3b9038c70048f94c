"""CLI command implementations for the cutstock application.

This package contains subcommands for the cutstock CLI, including:
- check-config: Validate an engine configuration file
- serve: Run the REST API
"""

from cutstock.cli.commands.check_config import (
    check_config_command,
    display_config_error,
)
from cutstock.cli.commands.serve import serve_command

__all__ = ["check_config_command", "display_config_error", "serve_command"]
