"""Output formatters for optimization results."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from cutstock.application.dtos import MaterialOutcome, MaterialResult


def _material_label(material_id: object, material_name: str) -> str:
    label = str(material_id) if material_id is not None else "?"
    if material_name:
        label = f"{label} ({material_name})"
    return label


class SummaryFormatter:
    """Formats a per-material summary table for terminal display."""

    def __init__(self, width: int = 78) -> None:
        self._width = width

    def format(self, outcomes: Sequence[MaterialOutcome]) -> str:
        """Format outcomes as a table followed by the unplaced panels."""
        if not outcomes:
            return "No materials in request."

        lines = [
            "OPTIMIZATION SUMMARY",
            "=" * self._width,
            f"{'Material':<28} {'Boards':>6} {'Placed':>7} {'Unplaced':>9} "
            f"{'Waste %':>8} {'Cut (mm)':>12}",
            "-" * self._width,
        ]

        totals = [0, 0, 0]
        cut_total = 0.0
        results: list[MaterialResult] = []
        for outcome in outcomes:
            label = _material_label(outcome.material_id, outcome.material_name)
            if not outcome.is_valid:
                lines.append(
                    f"{label[:28]:<28} FAILED: {outcome.error} ({outcome.error_type})"
                )
                continue

            metrics = outcome.metrics
            lines.append(
                f"{label[:28]:<28} {metrics.boards_used:>6} {metrics.placed_count:>7} "
                f"{metrics.unplaced_count:>9} {metrics.waste_percentage:>8.2f} "
                f"{metrics.total_cut_length:>12.1f}"
            )
            totals[0] += metrics.boards_used
            totals[1] += metrics.placed_count
            totals[2] += metrics.unplaced_count
            cut_total += metrics.total_cut_length
            results.append(outcome)

        lines.append("-" * self._width)
        lines.append(
            f"{'TOTAL':<28} {totals[0]:>6} {totals[1]:>7} {totals[2]:>9} "
            f"{'':>8} {cut_total:>12.1f}"
        )

        unplaced_lines = self._format_unplaced(results)
        if unplaced_lines:
            lines.append("")
            lines.extend(unplaced_lines)

        return "\n".join(lines)

    def _format_unplaced(self, results: Sequence[MaterialResult]) -> list[str]:
        lines: list[str] = []
        for result in results:
            for entry in result.unplaced:
                lines.append(
                    f"  [{result.material_id}] {entry.id:<20} "
                    f"{entry.w_mm:g} x {entry.h_mm:g}  {entry.reason}"
                )
        if lines:
            lines.insert(0, "UNPLACED PANELS")
        return lines


class JsonResultExporter:
    """Exports optimization outcomes as the JSON response list."""

    def __init__(self, indent: int = 2) -> None:
        self._indent = indent

    def export(self, outcomes: Sequence[MaterialOutcome]) -> str:
        """Export outcomes as a JSON string, in input order."""
        return json.dumps([o.to_dict() for o in outcomes], indent=self._indent)
