"""Infrastructure layer - packing algorithms and result formatters."""

from .bin_packing import (
    BinLayout,
    Candidate,
    FreeRectangleArena,
    GuillotineFitter,
    PackingResult,
    PackingState,
)
from .formatters import JsonResultExporter, SummaryFormatter
from .lookahead import LookAheadPlanner

__all__ = [
    # Bin packing
    "BinLayout",
    "Candidate",
    "FreeRectangleArena",
    "GuillotineFitter",
    "LookAheadPlanner",
    "PackingResult",
    "PackingState",
    # Formatters
    "JsonResultExporter",
    "SummaryFormatter",
]
