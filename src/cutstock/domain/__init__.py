"""Domain layer: cutting geometry value objects and pure services."""

from .services import (
    CutLengthEstimator,
    MetricsCollector,
    PanelSortOrder,
    calculate_usable_area,
    expand_parts,
    order_panels,
    orient_board,
    orient_part,
)
from .value_objects import (
    EPSILON,
    BoardSpec,
    MaterialMetrics,
    Panel,
    PartSpec,
    Placement,
    Rectangle,
    UnplacedPanel,
    UnplacedReason,
    UsableArea,
)

__all__ = [
    # Value objects
    "EPSILON",
    "BoardSpec",
    "MaterialMetrics",
    "Panel",
    "PartSpec",
    "Placement",
    "Rectangle",
    "UnplacedPanel",
    "UnplacedReason",
    "UsableArea",
    # Services
    "CutLengthEstimator",
    "MetricsCollector",
    "PanelSortOrder",
    "calculate_usable_area",
    "expand_parts",
    "order_panels",
    "orient_board",
    "orient_part",
]
