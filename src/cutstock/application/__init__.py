"""Application layer: configuration, request DTOs and orchestration."""

from cutstock.application.config import ConfigError, EngineConfig
from cutstock.application.dtos import (
    MaterialFailure,
    MaterialInput,
    MaterialOutcome,
    MaterialResult,
    PlacementOutput,
    UnplacedOutput,
)
from cutstock.application.orchestrator import (
    OptimizationOrchestrator,
    RequestShapeError,
    optimize_material,
)
from cutstock.application.strategies import (
    AVAILABLE_STRATEGIES,
    PackingStrategyFactory,
)

__all__ = [
    "AVAILABLE_STRATEGIES",
    "ConfigError",
    "EngineConfig",
    "MaterialFailure",
    "MaterialInput",
    "MaterialOutcome",
    "MaterialResult",
    "OptimizationOrchestrator",
    "PackingStrategyFactory",
    "PlacementOutput",
    "RequestShapeError",
    "UnplacedOutput",
    "optimize_material",
]
