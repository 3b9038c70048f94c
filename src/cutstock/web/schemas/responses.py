"""Pydantic response schemas for the REST API."""

from typing import Any

from pydantic import BaseModel, Field


class PlacementSchema(BaseModel):
    """A panel placed on a board."""

    id: str = Field(..., description="Panel identifier {part_id}-{n}")
    x_mm: float = Field(..., description="Left edge in board coordinates")
    y_mm: float = Field(..., description="Top edge in board coordinates")
    w_mm: float = Field(..., description="Placed width")
    h_mm: float = Field(..., description="Placed height")
    rot_deg: int = Field(..., description="0 or 90")
    board_id: int = Field(..., description="1-based board number")


class UnplacedSchema(BaseModel):
    """A panel that could not be placed."""

    id: str = Field(..., description="Panel identifier {part_id}-{n}")
    w_mm: float = Field(..., description="Part width")
    h_mm: float = Field(..., description="Part height")
    reason: str = Field(..., description="Why the panel was not placed")


class MetricsSchema(BaseModel):
    """Utilisation statistics for one material."""

    used_area_mm2: float
    board_area_mm2: float
    waste_pct: float = Field(..., ge=0, le=100)
    placed_count: int
    unplaced_count: int
    boards_used: int
    total_cut_length_mm: float


class MaterialResultSchema(BaseModel):
    """Successful result for one material."""

    material_id: str | int | None = None
    material_name: str = ""
    placements: list[PlacementSchema]
    unplaced: list[UnplacedSchema]
    metrics: MetricsSchema
    board_cut_lengths: dict[int, float] = Field(
        default_factory=dict, description="Cut length per 1-based board number"
    )
    debug: dict[str, Any] = Field(default_factory=dict)


class ErrorDetailSchema(BaseModel):
    """Structured error body."""

    error: str = Field(..., description="Error message")
    error_type: str = Field(..., description="Error category")
    details: Any = Field(default=None, description="Additional details")


class MaterialFailureSchema(BaseModel):
    """A material whose computation failed."""

    material_id: str | int | None = None
    material_name: str = ""
    error: ErrorDetailSchema


MaterialOutcomeSchema = MaterialResultSchema | MaterialFailureSchema


class StrategiesSchema(BaseModel):
    """Available packing strategies."""

    strategies: list[str] = Field(..., description="Strategy names")
    default: str = Field(..., description="Configured strategy")
    window: int = Field(..., description="Configured look-ahead window")


