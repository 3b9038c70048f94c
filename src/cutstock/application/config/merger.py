"""Configuration merging utilities for CLI override support.

Precedence is: CLI args > config values > defaults. Only non-None CLI
arguments override configuration values.
"""

from typing import Any

from pydantic import ValidationError as PydanticValidationError

from cutstock.application.config.loader import ConfigError, extract_validation_errors
from cutstock.application.config.schema import EngineConfig


def merge_config_with_cli(
    config: EngineConfig,
    *,
    strategy: str | None = None,
    window: int | None = None,
    max_workers: int | None = None,
    max_boards: int | None = None,
) -> EngineConfig:
    """Merge CLI arguments with configuration values.

    Args:
        config: The base EngineConfig to merge with
        strategy: Override for strategy.name (if not None)
        window: Override for strategy.window (if not None)
        max_workers: Override for max_workers (if not None)
        max_boards: Override for max_boards (if not None)

    Returns:
        A new, re-validated EngineConfig with merged values

    Raises:
        ConfigError: If an override is out of range (error_type "validation").

    Example:
        >>> merged = merge_config_with_cli(EngineConfig(), strategy="greedy")
        >>> merged.strategy.name.value
        'greedy'
    """
    data: dict[str, Any] = config.model_dump(mode="json")
    strategy_data: dict[str, Any] = data["strategy"]

    if strategy is not None:
        strategy_data["name"] = strategy
    if window is not None:
        strategy_data["window"] = window
    if max_workers is not None:
        data["max_workers"] = max_workers
    if max_boards is not None:
        data["max_boards"] = max_boards

    try:
        return EngineConfig.model_validate(data)
    except PydanticValidationError as e:
        details = extract_validation_errors(e)
        overrides = ", ".join(f"{d['path']}: {d['message']}" for d in details)
        raise ConfigError(
            message=f"Invalid command-line override ({overrides})",
            error_type="validation",
            details=details,
        ) from e
