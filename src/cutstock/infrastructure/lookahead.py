"""Look-ahead packing strategy.

Instead of always committing the best-scored placement, the planner
shortlists the top candidates for each panel and simulates a short
window of upcoming panels after each one. The candidate whose simulated
future opens the fewest bins and leaves the least unusable free space
wins. The result is finally compared with the greedy baseline so the
planner never does worse on unplaced panels or bin count.
"""

from __future__ import annotations

import logging
from typing import Sequence

from cutstock.domain.value_objects import EPSILON, Panel, UsableArea
from cutstock.infrastructure.bin_packing import (
    Candidate,
    GuillotineFitter,
    PackingResult,
    PackingState,
)

logger = logging.getLogger(__name__)

# Outcome of simulating one candidate; smaller is better.
_Outcome = tuple[int, int, float, float, Candidate]


def _suffix_short_sides(panels: Sequence[Panel]) -> list[float | None]:
    """Smallest short side among panels after each index."""
    smallest: list[float | None] = [None] * len(panels)
    running: float | None = None
    for i in range(len(panels) - 1, -1, -1):
        smallest[i] = running
        side = min(panels[i].width, panels[i].height)
        running = side if running is None else min(running, side)
    return smallest


class LookAheadPlanner:
    """Guillotine packer that looks ahead before committing a placement.

    Attributes:
        kerf: Saw blade width in mm.
        max_bins: Optional cap on the number of bins.
        window: Number of panels considered per decision, including the
            current one. 0 or 1 means plain greedy packing.
        candidate_limit: Maximum number of candidates simulated.
        tie_tolerance: If set, only candidates whose short leftover side is
            within this many mm of the best are simulated.
    """

    name = "lookahead"

    def __init__(
        self,
        kerf: float = 0.0,
        max_bins: int | None = None,
        window: int = 3,
        candidate_limit: int = 4,
        tie_tolerance: float | None = None,
    ) -> None:
        if window < 0:
            raise ValueError("Look-ahead window must be non-negative")
        if candidate_limit < 1:
            raise ValueError("Candidate limit must be at least 1")
        if tie_tolerance is not None and tie_tolerance < 0:
            raise ValueError("Tie tolerance must be non-negative")
        self.kerf = kerf
        self.max_bins = max_bins
        self.window = window
        self.candidate_limit = candidate_limit
        self.tie_tolerance = tie_tolerance
        self._baseline = GuillotineFitter(kerf=kerf, max_bins=max_bins)

    def pack(self, panels: Sequence[Panel], area: UsableArea) -> PackingResult:
        """Pack panels into bins sized to the usable area."""
        if self.window <= 1:
            return self._baseline.pack(panels, area)

        state = PackingState(area, kerf=self.kerf, max_bins=self.max_bins)
        smallest_after = _suffix_short_sides(panels)
        for index, panel in enumerate(panels):
            self._place(state, panels, index, smallest_after[index])
        planned = state.to_result()

        baseline = self._baseline.pack(panels, area)
        if (baseline.unplaced_count, baseline.bin_count) < (
            planned.unplaced_count,
            planned.bin_count,
        ):
            logger.debug(
                "Greedy result kept (%d bins, %d unplaced) over look-ahead "
                "(%d bins, %d unplaced)",
                baseline.bin_count,
                baseline.unplaced_count,
                planned.bin_count,
                planned.unplaced_count,
            )
            return baseline

        logger.debug(
            "Look-ahead packing: %d panels -> %d bins, %d unplaced",
            len(panels),
            planned.bin_count,
            planned.unplaced_count,
        )
        return planned

    def _shortlist(self, candidates: list[Candidate]) -> list[Candidate]:
        shortlist = candidates[: self.candidate_limit]
        if self.tie_tolerance is not None:
            limit = shortlist[0].short_leftover + self.tie_tolerance + EPSILON
            shortlist = [c for c in shortlist if c.short_leftover <= limit]
        return shortlist

    def _place(
        self,
        state: PackingState,
        panels: Sequence[Panel],
        index: int,
        smallest_after: float | None,
    ) -> None:
        panel = panels[index]
        candidates = state.candidates(panel)
        if not candidates:
            state.place_in_new_bin(panel)
            return

        shortlist = self._shortlist(candidates)
        if len(shortlist) == 1:
            state.commit(panel, shortlist[0])
            return

        upcoming = panels[index + 1 : index + self.window]
        outcomes = [
            self._simulate(state, panel, candidate, upcoming, smallest_after)
            for candidate in shortlist
        ]
        best = min(outcomes)
        chosen = best[-1]
        if chosen is not shortlist[0]:
            logger.debug(
                "Look-ahead chose candidate in bin %d slot %d for %s "
                "over greedy best in bin %d slot %d",
                chosen.bin_index,
                chosen.free_index,
                panel.id,
                shortlist[0].bin_index,
                shortlist[0].free_index,
            )
        state.commit(panel, chosen)

    def _simulate(
        self,
        state: PackingState,
        panel: Panel,
        candidate: Candidate,
        upcoming: Sequence[Panel],
        smallest_after: float | None,
    ) -> _Outcome:
        """Score a candidate by greedily placing the next panels after it."""
        trial = state.copy()
        bins_before = trial.bin_count
        trial.commit(panel, candidate)

        missed = 0
        for nxt in upcoming:
            if trial.place_greedy(nxt) is None:
                missed += 1

        return (
            trial.bin_count - bins_before,
            missed,
            trial.dead_area(smallest_after),
            -trial.largest_free_area(),
            candidate,
        )
