"""Guillotine bin packing for rectangular panels.

This module provides the packing state shared by all strategies (bins,
their free-rectangle arenas, placements, unplaced panels) and the
baseline ``GuillotineFitter``.

Each bin tracks the empty regions it still offers as a list of free
rectangles. Placing a panel consumes one free rectangle and replaces it
with at most two children produced by a single guillotine cut, so every
layout can be realised with edge-to-edge saw passes.

Result dataclasses are frozen (immutable); the working state is not.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterator, Sequence

from cutstock.domain.value_objects import (
    EPSILON,
    Panel,
    Placement,
    Rectangle,
    UnplacedPanel,
    UnplacedReason,
    UsableArea,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BinLayout:
    """Final layout of one bin.

    Attributes:
        index: Zero-based bin index.
        bounds: Usable area of the bin in absolute board coordinates.
        placements: Panels placed on this bin, in placement order.
    """

    index: int
    bounds: Rectangle
    placements: tuple[Placement, ...]

    def __post_init__(self) -> None:
        if self.index < 0:
            raise ValueError("Bin index must be non-negative")

    @property
    def board_id(self) -> int:
        return self.index + 1

    @property
    def used_area(self) -> float:
        """Total area covered by placed panels in square mm."""
        return sum(p.area for p in self.placements)

    @property
    def piece_count(self) -> int:
        return len(self.placements)


@dataclass(frozen=True)
class PackingResult:
    """Complete result of packing one material.

    Attributes:
        area: Usable area every bin was sized to.
        layouts: One layout per opened bin, in opening order.
        unplaced: Panels that could not be placed, in packing order.
    """

    area: UsableArea
    layouts: tuple[BinLayout, ...]
    unplaced: tuple[UnplacedPanel, ...]

    @property
    def bin_count(self) -> int:
        return len(self.layouts)

    @property
    def placements(self) -> tuple[Placement, ...]:
        """All placements, ordered by bin and then placement order."""
        return tuple(p for layout in self.layouts for p in layout.placements)

    @property
    def placed_count(self) -> int:
        return sum(layout.piece_count for layout in self.layouts)

    @property
    def unplaced_count(self) -> int:
        return len(self.unplaced)

    @property
    def used_area(self) -> float:
        return sum(layout.used_area for layout in self.layouts)


class FreeRectangleArena:
    """Indexed collection of the free rectangles of one bin.

    Rectangles are addressed by their index in insertion order. Taking a
    rectangle removes it and shifts later indices down by one; new
    rectangles are appended. Iteration order is therefore deterministic.
    """

    def __init__(self, rectangles: Sequence[Rectangle] = ()) -> None:
        self._slots: list[Rectangle] = list(rectangles)

    def __len__(self) -> int:
        return len(self._slots)

    def __iter__(self) -> Iterator[Rectangle]:
        return iter(self._slots)

    def __getitem__(self, index: int) -> Rectangle:
        return self._slots[index]

    def add(self, rect: Rectangle) -> int | None:
        """Store a rectangle and return its index.

        Degenerate rectangles (zero or negative width or height) are
        dropped and ``None`` is returned.
        """
        if rect.is_degenerate:
            return None
        self._slots.append(rect)
        return len(self._slots) - 1

    def take(self, index: int) -> Rectangle:
        """Remove and return the rectangle at ``index``."""
        return self._slots.pop(index)

    def items(self) -> Iterator[tuple[int, Rectangle]]:
        return enumerate(self._slots)

    def copy(self) -> FreeRectangleArena:
        return FreeRectangleArena(self._slots)

    @property
    def largest_area(self) -> float:
        return max((r.area for r in self._slots), default=0.0)


@dataclass
class _BinState:
    """Mutable state of one bin during packing.

    Free rectangles are in bin-local coordinates (origin at the usable
    area's top-left corner).
    """

    index: int
    free: FreeRectangleArena
    placements: list[Placement] = field(default_factory=list)

    def copy(self) -> _BinState:
        return _BinState(
            index=self.index,
            free=self.free.copy(),
            placements=list(self.placements),
        )


@dataclass(frozen=True, order=True)
class Candidate:
    """A possible placement of a panel, ordered by fit quality.

    Best-short-side-fit: the smallest leftover side wins, then the
    smallest leftover area. Bin index, free-rectangle index and rotation
    break remaining ties so the order is total and reproducible.
    """

    short_leftover: float
    area_leftover: float
    bin_index: int
    free_index: int
    rotated: bool
    width: float = field(compare=False)
    height: float = field(compare=False)


class PackingState:
    """Working state for packing one material.

    Holds the open bins, the placements made so far and the panels that
    were given up on. Strategies drive it one panel at a time; the
    look-ahead planner copies it to try placements without committing.
    """

    def __init__(
        self,
        area: UsableArea,
        kerf: float = 0.0,
        max_bins: int | None = None,
    ) -> None:
        if kerf < 0:
            raise ValueError("Kerf must be non-negative")
        if max_bins is not None and max_bins < 1:
            raise ValueError("Maximum bin count must be at least 1")
        self.area = area
        self.kerf = kerf
        self.max_bins = max_bins
        self.bins: list[_BinState] = []
        self.unplaced: list[UnplacedPanel] = []

    def copy(self) -> PackingState:
        clone = PackingState.__new__(PackingState)
        clone.area = self.area
        clone.kerf = self.kerf
        clone.max_bins = self.max_bins
        clone.bins = [b.copy() for b in self.bins]
        clone.unplaced = list(self.unplaced)
        return clone

    @property
    def bin_count(self) -> int:
        return len(self.bins)

    @property
    def can_open_bin(self) -> bool:
        return self.max_bins is None or len(self.bins) < self.max_bins

    def candidates(
        self,
        panel: Panel,
        bins: Sequence[_BinState] | None = None,
    ) -> list[Candidate]:
        """Rank every admissible (free rectangle, orientation) pair.

        Args:
            panel: Panel to place.
            bins: Bins to search; defaults to all open bins.

        Returns:
            Candidates sorted best first. Empty if nothing fits.
        """
        found: list[Candidate] = []
        for bin_state in self.bins if bins is None else bins:
            for free_index, rect in bin_state.free.items():
                for width, height, rotated in panel.orientations():
                    if not rect.can_hold(width, height):
                        continue
                    leftover_w = rect.width - width
                    leftover_h = rect.height - height
                    found.append(
                        Candidate(
                            short_leftover=min(leftover_w, leftover_h),
                            area_leftover=rect.area - width * height,
                            bin_index=bin_state.index,
                            free_index=free_index,
                            rotated=rotated,
                            width=width,
                            height=height,
                        )
                    )
        found.sort()
        return found

    def open_bin(self) -> _BinState:
        """Open a new bin covering the full usable area."""
        bin_state = _BinState(
            index=len(self.bins),
            free=FreeRectangleArena(
                [Rectangle(0.0, 0.0, self.area.width, self.area.height)]
            ),
        )
        self.bins.append(bin_state)
        logger.debug(
            "Opened bin %d (%sx%s)",
            bin_state.index,
            self.area.width,
            self.area.height,
        )
        return bin_state

    def commit(self, panel: Panel, candidate: Candidate) -> Placement:
        """Place a panel and split the consumed free rectangle.

        The free rectangle is replaced by the strip to the right of the
        panel (panel height tall) and the strip below it (full width),
        each starting one kerf away from the panel. Degenerate strips are
        dropped.
        """
        bin_state = self.bins[candidate.bin_index]
        rect = bin_state.free.take(candidate.free_index)
        width, height = candidate.width, candidate.height
        kerf = self.kerf

        bin_state.free.add(
            Rectangle(
                x=rect.x + width + kerf,
                y=rect.y,
                width=rect.width - width - kerf,
                height=height,
            )
        )
        bin_state.free.add(
            Rectangle(
                x=rect.x,
                y=rect.y + height + kerf,
                width=rect.width,
                height=rect.height - height - kerf,
            )
        )

        placement = Placement(
            panel=panel,
            x=rect.x + self.area.offset_x,
            y=rect.y + self.area.offset_y,
            width=width,
            height=height,
            rotated=candidate.rotated,
            bin_index=bin_state.index,
        )
        bin_state.placements.append(placement)
        logger.debug(
            "Placed %s at (%s, %s) on bin %d%s",
            panel.id,
            placement.x,
            placement.y,
            bin_state.index,
            " rotated" if candidate.rotated else "",
        )
        return placement

    def reject(self, panel: Panel, reason: UnplacedReason) -> None:
        self.unplaced.append(UnplacedPanel(panel=panel, reason=reason))
        logger.debug("Panel %s unplaced: %s", panel.id, reason.value)

    def place_greedy(self, panel: Panel) -> Placement | None:
        """Place a panel with the baseline rule.

        Takes the best candidate across open bins; if none exists, opens a
        new bin when the panel can fit an empty one and the bin limit
        allows it. Otherwise records the panel as unplaced.

        Returns:
            The placement, or None if the panel was rejected.
        """
        candidates = self.candidates(panel)
        if candidates:
            return self.commit(panel, candidates[0])
        return self.place_in_new_bin(panel)

    def place_in_new_bin(self, panel: Panel) -> Placement | None:
        """Open a bin for a panel that fits no open bin, or reject it."""
        if not self.area.admits(panel):
            self.reject(panel, UnplacedReason.NO_SPACE)
            return None
        if not self.can_open_bin:
            self.reject(panel, UnplacedReason.BOARD_LIMIT)
            return None
        new_bin = self.open_bin()
        candidates = self.candidates(panel, bins=[new_bin])
        return self.commit(panel, candidates[0])

    def dead_area(self, smallest_side: float | None) -> float:
        """Free area in rectangles too narrow for any remaining panel."""
        if smallest_side is None:
            return 0.0
        return sum(
            rect.area
            for bin_state in self.bins
            for rect in bin_state.free
            if rect.short_side < smallest_side - EPSILON
        )

    def largest_free_area(self) -> float:
        return max((b.free.largest_area for b in self.bins), default=0.0)

    def to_result(self) -> PackingResult:
        bounds = self.area.bounds
        return PackingResult(
            area=self.area,
            layouts=tuple(
                BinLayout(
                    index=b.index,
                    bounds=bounds,
                    placements=tuple(b.placements),
                )
                for b in self.bins
            ),
            unplaced=tuple(self.unplaced),
        )


class GuillotineFitter:
    """Baseline greedy guillotine packer.

    Panels are placed one at a time in the order given. For each panel the
    best-short-side-fit free rectangle across all open bins is chosen; a
    new bin is opened only when no open bin has room.

    Attributes:
        kerf: Saw blade width in mm.
        max_bins: Optional cap on the number of bins.
    """

    name = "greedy"

    def __init__(self, kerf: float = 0.0, max_bins: int | None = None) -> None:
        self.kerf = kerf
        self.max_bins = max_bins

    def pack(self, panels: Sequence[Panel], area: UsableArea) -> PackingResult:
        """Pack panels into bins sized to the usable area.

        Args:
            panels: Panels in packing order.
            area: Usable area of one board.

        Returns:
            PackingResult with layouts and unplaced panels.
        """
        state = PackingState(area, kerf=self.kerf, max_bins=self.max_bins)

        if area.is_degenerate:
            logger.warning(
                "Usable area %sx%s is degenerate; %d panels unplaced",
                area.width,
                area.height,
                len(panels),
            )

        for panel in panels:
            state.place_greedy(panel)

        result = state.to_result()
        logger.debug(
            "Greedy packing: %d panels -> %d bins, %d unplaced",
            len(panels),
            result.bin_count,
            result.unplaced_count,
        )
        return result
