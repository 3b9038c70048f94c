"""Utilisation and waste statistics for one material."""

from __future__ import annotations

from typing import Sequence

from ..value_objects import MaterialMetrics, Placement, UnplacedPanel, UsableArea

__all__ = ["MetricsCollector"]


class MetricsCollector:
    """Computes material metrics from a finished packing."""

    def __init__(self, precision: int = 2) -> None:
        """Initialize with the number of decimals kept for waste (default 2)."""
        self.precision = precision

    def collect(
        self,
        placements: Sequence[Placement],
        unplaced: Sequence[UnplacedPanel],
        area: UsableArea,
        boards_used: int,
        cut_lengths: Sequence[float] = (),
    ) -> MaterialMetrics:
        """Aggregate placements and bin geometry into metrics.

        Board area is the usable area times the number of bins. Waste is
        zero when there is no board area to waste.
        """
        used_area = sum(p.area for p in placements)
        board_area = area.area * boards_used

        return MaterialMetrics(
            used_area=used_area,
            board_area=board_area,
            waste_percentage=self.waste_percentage(used_area, board_area),
            placed_count=len(placements),
            unplaced_count=len(unplaced),
            boards_used=boards_used,
            total_cut_length=sum(cut_lengths),
        )

    def waste_percentage(self, used_area: float, board_area: float) -> float:
        """Unused share of board area in percent, clamped to 0-100."""
        if board_area <= 0:
            return 0.0
        waste = (board_area - used_area) / board_area * 100
        return round(min(max(waste, 0.0), 100.0), self.precision)
