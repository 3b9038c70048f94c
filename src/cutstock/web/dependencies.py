"""FastAPI dependency injection for the optimizer."""

import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Annotated

from fastapi import Depends

from cutstock.application.config import EngineConfig, load_config
from cutstock.application.orchestrator import OptimizationOrchestrator

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "CUTSTOCK_CONFIG"


@lru_cache(maxsize=1)
def get_engine_config() -> EngineConfig:
    """Load the engine configuration named by ``CUTSTOCK_CONFIG``, once.

    Without the variable the built-in defaults apply.
    """
    path = os.environ.get(CONFIG_ENV_VAR)
    if not path:
        return EngineConfig()
    logger.info("Loading engine configuration from %s", path)
    return load_config(Path(path))


def get_orchestrator(
    config: Annotated[EngineConfig, Depends(get_engine_config)],
) -> OptimizationOrchestrator:
    """Dependency for OptimizationOrchestrator."""
    return OptimizationOrchestrator(config)


# Type aliases for cleaner endpoint signatures
EngineConfigDep = Annotated[EngineConfig, Depends(get_engine_config)]
OrchestratorDep = Annotated[OptimizationOrchestrator, Depends(get_orchestrator)]
