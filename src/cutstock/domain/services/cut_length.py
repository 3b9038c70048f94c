"""Saw-pass length reconstruction for finished bins.

A guillotine saw cuts a region with a straight pass that runs the full
extent of that region, leaving two smaller regions. Given only the final
pieces of a bin, the estimator searches for the cheapest such cutting
plan:

1. In a region, a candidate line on either axis is the far edge of a
   piece, or the position one kerf before its near edge. A line is
   usable when no piece straddles it or sits inside the kerf band that
   follows it.
2. Each usable line is a possible first pass. It costs the region's
   extent across it, plus the cheapest plans for the regions on either
   side of the kerf band.
3. The cheapest option wins. Results are memoised by region.

Collinear boundaries still cost one pass when a single cut separates
them, since the remaining regions share its extent. A region that is
empty, or filled exactly by one piece, needs no cut. The region passed
in is the bin's usable area, so trim strips are never counted.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from ..value_objects import EPSILON, Rectangle

logger = logging.getLogger(__name__)

__all__ = ["CutLengthEstimator"]

_Key = tuple[float, float, float, float]
_Region = tuple[Rectangle, tuple[Rectangle, ...]]


def _key(region: Rectangle) -> _Key:
    return (
        round(region.x, 6),
        round(region.y, 6),
        round(region.right, 6),
        round(region.bottom, 6),
    )


@dataclass(frozen=True)
class _Split:
    """One saw pass across a region and the occupied regions it leaves."""

    length: float
    parts: tuple[_Region, ...]


class _SearchBudgetExceeded(Exception):
    pass


class CutLengthEstimator:
    """Estimates the total saw-pass length needed to cut out a layout.

    Attributes:
        kerf: Saw blade width in mm, the gap between pieces sharing a cut.
        max_regions: Number of distinct regions the plan search may visit
            before it gives up and sums interior edges instead.
    """

    def __init__(self, kerf: float = 0.0, max_regions: int = 20_000) -> None:
        if kerf < 0:
            raise ValueError("Kerf must be non-negative")
        if max_regions < 1:
            raise ValueError("Region budget must be at least 1")
        self.kerf = kerf
        self.max_regions = max_regions

    def estimate(self, region: Rectangle, pieces: Sequence[Rectangle]) -> float:
        """Return the total length of saw passes for one bin.

        Args:
            region: Usable area of the bin in the pieces' coordinates.
            pieces: Placed piece rectangles.

        Returns:
            Cut length in mm. Zero for an empty bin.
        """
        if not pieces:
            return 0.0

        try:
            cost = self._solve(region, tuple(pieces))
        except _SearchBudgetExceeded:
            logger.warning(
                "Cut plan search for %d pieces exceeded %d regions; "
                "summing interior edges instead",
                len(pieces),
                self.max_regions,
            )
            return self._edge_length(region, pieces)

        if cost is None:
            logger.warning(
                "Layout of %d pieces is not guillotine-separable; "
                "summing interior edges instead",
                len(pieces),
            )
            return self._edge_length(region, pieces)
        return cost

    def _solve(
        self, region: Rectangle, pieces: tuple[Rectangle, ...]
    ) -> float | None:
        """Cheapest plan for a region, or None if no guillotine plan exists.

        Regions are evaluated bottom-up from an explicit stack, so plan
        depth is not limited by the interpreter's recursion limit.
        """
        memo: dict[_Key, float | None] = {}
        pending: dict[_Key, list[_Split]] = {}
        stack: list[_Region] = [(region, pieces)]

        while stack:
            current, members = stack[-1]
            key = _key(current)
            if key in memo:
                stack.pop()
                continue

            if key not in pending:
                if self._is_finished(current, members):
                    memo[key] = 0.0
                    stack.pop()
                    continue
                if len(memo) + len(pending) >= self.max_regions:
                    raise _SearchBudgetExceeded
                splits = self._splits(current, members)
                pending[key] = splits
                unsolved = [
                    part
                    for split in splits
                    for part in split.parts
                    if _key(part[0]) not in memo
                ]
                if unsolved:
                    stack.extend(unsolved)
                    continue

            memo[key] = self._cheapest(pending.pop(key), memo)
            stack.pop()

        return memo[_key(region)]

    @staticmethod
    def _is_finished(region: Rectangle, pieces: tuple[Rectangle, ...]) -> bool:
        return not pieces or (len(pieces) == 1 and pieces[0].fills(region))

    @staticmethod
    def _cheapest(
        splits: list[_Split], memo: dict[_Key, float | None]
    ) -> float | None:
        best: float | None = None
        for split in splits:
            costs = [memo[_key(part)] for part, _ in split.parts]
            if any(cost is None for cost in costs):
                continue
            total = split.length + sum(costs)
            if best is None or total < best - EPSILON:
                best = total
        return best

    def _splits(
        self, region: Rectangle, pieces: tuple[Rectangle, ...]
    ) -> list[_Split]:
        """Every single pass that separates the pieces of a region.

        Vertical lines run top to bottom at constant x and come first;
        horizontal lines run left to right at constant y.
        """
        kerf = self.kerf
        splits: list[_Split] = []
        for vertical in (True, False):
            if vertical:
                lo, hi, extent = region.x, region.right, region.height
                spans = [(p.x, p.right) for p in pieces]
            else:
                lo, hi, extent = region.y, region.bottom, region.width
                spans = [(p.y, p.bottom) for p in pieces]

            for line in self._usable_lines(lo, hi, spans):
                before = tuple(
                    p for p, (_, e) in zip(pieces, spans) if e <= line + EPSILON
                )
                after = tuple(
                    p for p, (_, e) in zip(pieces, spans) if e > line + EPSILON
                )
                far = line + kerf
                if vertical:
                    first = Rectangle(lo, region.y, line - lo, region.height)
                    second = Rectangle(far, region.y, hi - far, region.height)
                else:
                    first = Rectangle(region.x, lo, region.width, line - lo)
                    second = Rectangle(region.x, far, region.width, hi - far)

                parts: list[_Region] = []
                if before:
                    parts.append((first, before))
                if after:
                    parts.append((second, after))
                splits.append(_Split(length=extent, parts=tuple(parts)))
        return splits

    def _usable_lines(
        self, lo: float, hi: float, spans: list[tuple[float, float]]
    ) -> list[float]:
        """Candidate lines strictly inside (lo, hi) that no piece blocks."""
        kerf = self.kerf
        positions = sorted(
            {
                round(pos, 6)
                for start, end in spans
                for pos in (end, start - kerf)
                if lo + EPSILON < pos < hi - EPSILON
            }
        )

        # A line is blocked by any span starting before its kerf band ends
        # and ending after the line; lines ascend, so one sweep suffices.
        ordered = sorted(spans)
        lines: list[float] = []
        reach = float("-inf")
        index = 0
        for line in positions:
            while index < len(ordered) and ordered[index][0] < line + kerf - EPSILON:
                reach = max(reach, ordered[index][1])
                index += 1
            if reach <= line + EPSILON:
                lines.append(line)
        return lines

    def _edge_length(self, region: Rectangle, pieces: Sequence[Rectangle]) -> float:
        """Sum distinct piece edges that do not lie on the region border."""
        edges: set[tuple[float, float, float, float]] = set()
        for p in pieces:
            for x1, y1, x2, y2 in (
                (p.x, p.y, p.right, p.y),
                (p.x, p.bottom, p.right, p.bottom),
                (p.x, p.y, p.x, p.bottom),
                (p.right, p.y, p.right, p.bottom),
            ):
                if y1 == y2:
                    border = min(abs(y1 - region.y), abs(y1 - region.bottom))
                else:
                    border = min(abs(x1 - region.x), abs(x1 - region.right))
                on_border = border <= EPSILON
                if not on_border:
                    edges.add((round(x1, 6), round(y1, 6), round(x2, 6), round(y2, 6)))
        return sum(abs(x2 - x1) + abs(y2 - y1) for x1, y1, x2, y2 in edges)
