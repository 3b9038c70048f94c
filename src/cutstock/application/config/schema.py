"""Pydantic models for engine configuration files.

The configuration controls how materials are packed: which strategy is
used and how it is tuned, how panels are ordered, whether the number of
boards is capped, and how many worker processes compute materials.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Supported schema versions for configuration files
# Version 1.0: Initial schema with strategy, ordering and worker settings
SUPPORTED_VERSIONS: frozenset[str] = frozenset({"1.0"})


class StrategyName(str, Enum):
    """Packing strategies selectable by configuration."""

    GREEDY = "greedy"
    LOOKAHEAD = "lookahead"


class SortOrderConfig(str, Enum):
    """Order in which expanded panels are packed."""

    AREA_DESC = "area_desc"
    INPUT = "input"


class StrategyConfig(BaseModel):
    """Packing strategy selection and tuning.

    Attributes:
        name: Strategy to run for every material.
        window: Panels considered per look-ahead decision, including the
            current one. 0 or 1 behaves like the greedy strategy.
        candidate_limit: Maximum candidates simulated per decision.
        tie_tolerance_mm: If set, only candidates within this many mm of the
            best short leftover side are simulated.
    """

    model_config = ConfigDict(extra="forbid")

    name: StrategyName = Field(
        default=StrategyName.LOOKAHEAD, description="Packing strategy"
    )
    window: int = Field(default=3, ge=0, le=8, description="Look-ahead window size")
    candidate_limit: int = Field(
        default=4, ge=1, le=16, description="Candidates simulated per panel"
    )
    tie_tolerance_mm: float | None = Field(
        default=None, ge=0, description="Short-side tolerance for close ties"
    )


class EngineConfig(BaseModel):
    """Root configuration model for the optimization engine.

    Every field has a default, so an empty object (or no file at all) is a
    valid configuration.

    Example:
        >>> config = EngineConfig(strategy=StrategyConfig(name="greedy"))
        >>> config.strategy.name
        <StrategyName.GREEDY: 'greedy'>
    """

    model_config = ConfigDict(extra="forbid")

    schema_version: str = Field(default="1.0", pattern=r"^\d+\.\d+$")
    strategy: StrategyConfig = Field(default_factory=StrategyConfig)
    sort_order: SortOrderConfig = Field(
        default=SortOrderConfig.AREA_DESC, description="Panel packing order"
    )
    max_boards: int | None = Field(
        default=None, ge=1, description="Maximum boards per material"
    )
    max_workers: int = Field(
        default=1, ge=1, description="Worker processes for materials"
    )
    default_kerf_mm: float = Field(
        default=3.0, ge=0, description="Kerf used when a material omits one"
    )

    @field_validator("schema_version")
    @classmethod
    def validate_supported_version(cls, v: str) -> str:
        """Accept listed versions and newer minors of a supported major."""
        if v in SUPPORTED_VERSIONS:
            return v

        major_version = int(v.split(".")[0])
        supported_majors = {int(sv.split(".")[0]) for sv in SUPPORTED_VERSIONS}
        if major_version in supported_majors:
            return v

        raise ValueError(
            f"Unsupported schema version '{v}'. "
            f"Supported versions: {sorted(SUPPORTED_VERSIONS)}"
        )
