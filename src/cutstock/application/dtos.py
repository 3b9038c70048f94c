"""Data Transfer Objects for the application layer.

Input models are Pydantic so each material of a request can be validated
on its own; output objects are plain dataclasses with ``to_dict`` for the
response contract.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from cutstock.domain import BoardSpec, MaterialMetrics, PartSpec


class PartInput(BaseModel):
    """One requested part. Unknown keys are ignored."""

    model_config = ConfigDict(extra="ignore")

    id: str = Field(..., description="Part identifier")
    w_mm: float = Field(..., gt=0, description="Part width in mm")
    h_mm: float = Field(..., gt=0, description="Part height in mm")
    qty: int = Field(default=1, ge=0, description="Number of pieces")
    allow_rot_90: bool = Field(default=True, description="Allow 90 degree rotation")

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v: Any) -> Any:
        """Accept numeric identifiers as strings."""
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v

    def to_part_spec(self, grain_locked: bool = False) -> PartSpec:
        """Convert to a PartSpec in request orientation."""
        return PartSpec(
            id=self.id,
            width=self.w_mm,
            height=self.h_mm,
            quantity=self.qty,
            can_rotate=self.allow_rot_90 and not grain_locked,
        )


class BoardInput(BaseModel):
    """Raw board size and edge trims."""

    model_config = ConfigDict(extra="ignore")

    w_mm: float = Field(..., gt=0, description="Board width in mm")
    h_mm: float = Field(..., gt=0, description="Board height in mm")
    trim_top_mm: float = Field(default=0.0, ge=0)
    trim_right_mm: float = Field(default=0.0, ge=0)
    trim_bottom_mm: float = Field(default=0.0, ge=0)
    trim_left_mm: float = Field(default=0.0, ge=0)

    def to_board_spec(self) -> BoardSpec:
        """Convert to a BoardSpec in request orientation."""
        return BoardSpec(
            width=self.w_mm,
            height=self.h_mm,
            trim_top=self.trim_top_mm,
            trim_right=self.trim_right_mm,
            trim_bottom=self.trim_bottom_mm,
            trim_left=self.trim_left_mm,
        )


class ParamsInput(BaseModel):
    """Cutting parameters for one material."""

    model_config = ConfigDict(extra="ignore")

    kerf_mm: float | None = Field(default=None, ge=0, description="Saw kerf in mm")


class MaterialInput(BaseModel):
    """One material of an optimization request."""

    model_config = ConfigDict(extra="ignore")

    id: str | int = Field(..., description="Material identifier")
    name: str = Field(default="", description="Material display name")
    parts: list[PartInput] = Field(default_factory=list)
    board: BoardInput
    params: ParamsInput = Field(default_factory=ParamsInput)
    grain_direction: bool = Field(
        default=False, description="Grain-locked material; disables rotation"
    )

    def part_specs(self) -> list[PartSpec]:
        return [part.to_part_spec(self.grain_direction) for part in self.parts]


@dataclass(frozen=True)
class PlacementOutput:
    """A placement as reported in the response."""

    id: str
    x_mm: float
    y_mm: float
    w_mm: float
    h_mm: float
    rot_deg: int
    board_id: int

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class UnplacedOutput:
    """An unplaced panel as reported in the response."""

    id: str
    w_mm: float
    h_mm: float
    reason: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class MaterialResult:
    """Successful optimization result for one material."""

    material_id: str | int | None
    material_name: str
    placements: list[PlacementOutput]
    unplaced: list[UnplacedOutput]
    metrics: MaterialMetrics
    board_cut_lengths: dict[int, float] = field(default_factory=dict)
    debug: dict[str, Any] = field(default_factory=dict)

    @property
    def is_valid(self) -> bool:
        return True

    def to_dict(self) -> dict[str, Any]:
        """Render in the response contract shape."""
        return {
            "material_id": self.material_id,
            "material_name": self.material_name,
            "placements": [p.to_dict() for p in self.placements],
            "unplaced": [u.to_dict() for u in self.unplaced],
            "metrics": {
                "used_area_mm2": self.metrics.used_area,
                "board_area_mm2": self.metrics.board_area,
                "waste_pct": self.metrics.waste_percentage,
                "placed_count": self.metrics.placed_count,
                "unplaced_count": self.metrics.unplaced_count,
                "boards_used": self.metrics.boards_used,
                "total_cut_length_mm": self.metrics.total_cut_length,
            },
            "board_cut_lengths": dict(self.board_cut_lengths),
            "debug": dict(self.debug),
        }


@dataclass
class MaterialFailure:
    """A material whose computation failed; its result must be treated as absent."""

    material_id: str | int | None
    material_name: str
    error: str
    error_type: str
    details: list[dict[str, Any]] | None = None

    @property
    def is_valid(self) -> bool:
        return False

    def to_dict(self) -> dict[str, Any]:
        return {
            "material_id": self.material_id,
            "material_name": self.material_name,
            "error": {
                "error": self.error,
                "error_type": self.error_type,
                "details": self.details,
            },
        }


MaterialOutcome = MaterialResult | MaterialFailure
