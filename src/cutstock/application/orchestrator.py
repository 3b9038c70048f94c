"""Optimization orchestrator: the single entry point of the engine.

For each material of a request the orchestrator expands parts into
panels, orients the board and computes its usable area, runs the
configured packing strategy, measures saw-pass length per board and
collects metrics. Materials are independent; a failure in one is
reported for that material only.
"""

from __future__ import annotations

import logging
from collections import Counter
from concurrent.futures import BrokenExecutor, ProcessPoolExecutor
from itertools import repeat
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from cutstock.application.config.loader import extract_validation_errors
from cutstock.application.config.schema import EngineConfig
from cutstock.application.dtos import (
    MaterialFailure,
    MaterialInput,
    MaterialOutcome,
    MaterialResult,
    PlacementOutput,
    UnplacedOutput,
)
from cutstock.application.strategies import PackingStrategyFactory
from cutstock.domain import (
    CutLengthEstimator,
    MetricsCollector,
    PanelSortOrder,
    calculate_usable_area,
    expand_parts,
    order_panels,
    orient_board,
    orient_part,
)
from cutstock.infrastructure.bin_packing import PackingResult

logger = logging.getLogger(__name__)


class RequestShapeError(ValueError):
    """Raised when a request is not an object with a ``materials`` list.

    No material is processed when this is raised.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


def _label(raw: Any, key: str) -> Any:
    if isinstance(raw, dict):
        return raw.get(key)
    return None


def _number_outputs(
    result: PackingResult,
) -> tuple[list[PlacementOutput], list[UnplacedOutput]]:
    """Convert packing output to response entries with per-part numbering.

    Each part's instances are numbered 1..n in output order: placements by
    board and placement order first, then unplaced panels.
    """
    counter: Counter[str] = Counter()

    placements: list[PlacementOutput] = []
    for placement in result.placements:
        part_id = placement.panel.part_id
        counter[part_id] += 1
        placements.append(
            PlacementOutput(
                id=f"{part_id}-{counter[part_id]}",
                x_mm=placement.x,
                y_mm=placement.y,
                w_mm=placement.width,
                h_mm=placement.height,
                rot_deg=placement.rotation_degrees,
                board_id=placement.board_id,
            )
        )

    unplaced: list[UnplacedOutput] = []
    for entry in result.unplaced:
        part_id = entry.panel.part_id
        counter[part_id] += 1
        # Panels are in the packing frame; report the part as requested.
        unplaced.append(
            UnplacedOutput(
                id=f"{part_id}-{counter[part_id]}",
                w_mm=entry.panel.height,
                h_mm=entry.panel.width,
                reason=entry.reason.value,
            )
        )

    return placements, unplaced


def optimize_material(raw: Any, config: EngineConfig) -> MaterialOutcome:
    """Run the full pipeline for one material.

    Module-level so it can be shipped to worker processes.

    Args:
        raw: The material object exactly as received.
        config: Engine configuration.

    Returns:
        MaterialResult on success, MaterialFailure if the material is
        malformed or its computation fails.
    """
    material_id = _label(raw, "id")
    material_name = _label(raw, "name") or ""

    try:
        material = MaterialInput.model_validate(raw)
    except PydanticValidationError as e:
        details = extract_validation_errors(e)
        logger.warning(
            "Material %r rejected: %d validation error(s)", material_id, len(details)
        )
        return MaterialFailure(
            material_id=material_id,
            material_name=str(material_name),
            error="Invalid material data",
            error_type="invalid_material",
            details=details,
        )

    try:
        return _compute(material, config)
    except Exception as e:
        # Any fault is confined to its material; the rest of the request
        # still gets results.
        logger.error(
            "Computation failed for material %r: %s", material.id, e, exc_info=True
        )
        return MaterialFailure(
            material_id=material.id,
            material_name=material.name,
            error=str(e) or type(e).__name__,
            error_type="computation",
        )


def _compute(material: MaterialInput, config: EngineConfig) -> MaterialResult:
    kerf = (
        material.params.kerf_mm
        if material.params.kerf_mm is not None
        else config.default_kerf_mm
    )

    board = orient_board(material.board.to_board_spec())
    area = calculate_usable_area(board)
    panels = order_panels(
        expand_parts(orient_part(part) for part in material.part_specs()),
        PanelSortOrder(config.sort_order.value),
    )

    factory = PackingStrategyFactory(config.strategy, max_bins=config.max_boards)
    strategy = factory.create(kerf)
    result = strategy.pack(panels, area)

    estimator = CutLengthEstimator(kerf)
    board_cut_lengths = {
        layout.board_id: estimator.estimate(
            layout.bounds, [p.rect for p in layout.placements]
        )
        for layout in result.layouts
    }

    placements, unplaced = _number_outputs(result)
    metrics = MetricsCollector().collect(
        result.placements,
        result.unplaced,
        area,
        result.bin_count,
        list(board_cut_lengths.values()),
    )

    logger.info(
        "Material %r: %d panels -> %d boards, %d unplaced, "
        "waste %.2f%%, cut length %.1f mm",
        material.id,
        len(panels),
        metrics.boards_used,
        metrics.unplaced_count,
        metrics.waste_percentage,
        metrics.total_cut_length,
    )

    return MaterialResult(
        material_id=material.id,
        material_name=material.name,
        placements=placements,
        unplaced=unplaced,
        metrics=metrics,
        board_cut_lengths=board_cut_lengths,
        debug={
            "board_width": board.width,
            "board_height": board.height,
            "usable_width": area.width,
            "usable_height": area.height,
            "bins_count": result.bin_count,
            "panels_count": len(panels),
            "strategy": strategy.name,
        },
    )


class OptimizationOrchestrator:
    """Runs optimization requests against a fixed engine configuration.

    Example:
        ```python
        orchestrator = OptimizationOrchestrator(EngineConfig())
        outcomes = orchestrator.optimize({"materials": [...]})
        response = [o.to_dict() for o in outcomes]
        ```
    """

    def __init__(self, config: EngineConfig | None = None) -> None:
        self.config = config or EngineConfig()

    @property
    def strategy_name(self) -> str:
        return self.config.strategy.name.value

    def optimize(self, payload: Any) -> list[MaterialOutcome]:
        """Optimize every material of a request.

        Args:
            payload: Decoded request body.

        Returns:
            One outcome per material, in input order.

        Raises:
            RequestShapeError: If the payload has no ``materials`` list.
        """
        materials = self._extract_materials(payload)

        workers = min(self.config.max_workers, len(materials))
        if workers > 1:
            outcomes = self._optimize_parallel(materials, workers)
        else:
            outcomes = [optimize_material(m, self.config) for m in materials]

        failed = sum(1 for o in outcomes if not o.is_valid)
        logger.info(
            "Optimized %d materials (%d failed) with %s strategy",
            len(outcomes),
            failed,
            self.strategy_name,
        )
        return outcomes

    def optimize_to_dicts(self, payload: Any) -> list[dict[str, Any]]:
        """Optimize a request and render the response contract."""
        return [outcome.to_dict() for outcome in self.optimize(payload)]

    def _extract_materials(self, payload: Any) -> list[Any]:
        if not isinstance(payload, dict):
            raise RequestShapeError("Invalid request data - expected a JSON object")
        materials = payload.get("materials")
        if not isinstance(materials, list):
            raise RequestShapeError("Invalid request data - missing materials array")
        return materials

    def _optimize_parallel(
        self, materials: list[Any], workers: int
    ) -> list[MaterialOutcome]:
        """Compute materials in worker processes, preserving input order.

        Falls back to sequential execution if the pool cannot be used.
        """
        try:
            with ProcessPoolExecutor(max_workers=workers) as executor:
                return list(
                    executor.map(optimize_material, materials, repeat(self.config))
                )
        except (OSError, BrokenExecutor) as e:
            logger.warning(
                "Process pool unavailable (%s); optimizing sequentially", e
            )
        return [optimize_material(m, self.config) for m in materials]
