"""Pure domain services for panel preparation and result analysis."""

from .cut_length import CutLengthEstimator
from .metrics import MetricsCollector
from .panel_expander import PanelSortOrder, expand_parts, order_panels
from .trim_calculator import calculate_usable_area, orient_board, orient_part

__all__ = [
    "CutLengthEstimator",
    "MetricsCollector",
    "PanelSortOrder",
    "calculate_usable_area",
    "expand_parts",
    "order_panels",
    "orient_board",
    "orient_part",
]
