"""Optimization endpoints."""

from typing import Annotated, Any

from fastapi import APIRouter, Body

from cutstock.application.strategies import AVAILABLE_STRATEGIES
from cutstock.web.dependencies import EngineConfigDep, OrchestratorDep
from cutstock.web.schemas.responses import MaterialOutcomeSchema, StrategiesSchema

router = APIRouter(prefix="/optimize", tags=["optimize"])


@router.post("", response_model=list[MaterialOutcomeSchema])
def optimize(
    payload: Annotated[Any, Body(description="Request with a materials list")],
    orchestrator: OrchestratorDep,
) -> list[dict[str, Any]]:
    """Optimize board layouts for every material of a request.

    Materials are reported in request order. A malformed material yields
    an error entry in its slot without affecting the others.

    Raises:
        RequestShapeError: If the body has no ``materials`` list (HTTP 400).
    """
    return orchestrator.optimize_to_dicts(payload)


@router.get("/strategies", response_model=StrategiesSchema)
async def list_strategies(config: EngineConfigDep) -> StrategiesSchema:
    """List available packing strategies and the configured default."""
    return StrategiesSchema(
        strategies=list(AVAILABLE_STRATEGIES),
        default=config.strategy.name.value,
        window=config.strategy.window,
    )
