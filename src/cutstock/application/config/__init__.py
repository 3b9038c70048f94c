"""Engine configuration schema and loading.

Public API:
    - EngineConfig: Root configuration model
    - StrategyConfig: Strategy selection and tuning
    - StrategyName: Available packing strategies
    - SortOrderConfig: Panel packing order
    - load_config: Load configuration from a JSON file
    - load_config_from_dict: Load configuration from a dictionary
    - merge_config_with_cli: Apply CLI overrides to a configuration
    - ConfigError: Exception for configuration errors

Example:
    >>> from pathlib import Path
    >>> from cutstock.application.config import load_config, ConfigError
    >>>
    >>> try:
    ...     config = load_config(Path("engine.json"))
    ...     print(config.strategy.name.value)
    ... except ConfigError as e:
    ...     print(f"Error: {e}")
"""

from cutstock.application.config.loader import (
    ConfigError,
    extract_validation_errors,
    format_json_path,
    load_config,
    load_config_from_dict,
)
from cutstock.application.config.merger import merge_config_with_cli
from cutstock.application.config.schema import (
    SUPPORTED_VERSIONS,
    EngineConfig,
    SortOrderConfig,
    StrategyConfig,
    StrategyName,
)

__all__ = [
    "SUPPORTED_VERSIONS",
    "ConfigError",
    "EngineConfig",
    "SortOrderConfig",
    "StrategyConfig",
    "StrategyName",
    "extract_validation_errors",
    "format_json_path",
    "load_config",
    "load_config_from_dict",
    "merge_config_with_cli",
]
