"""Tests for the packing state and the greedy GuillotineFitter.

Tests cover:
- Free-rectangle arena bookkeeping
- Guillotine splits with kerf
- Best-short-side-fit selection and tie-breaking
- Opening bins, rotation, oversize panels and the bin limit
"""

from __future__ import annotations

from typing import Callable

import pytest

from cutstock.domain.value_objects import Panel, Rectangle, UnplacedReason, UsableArea
from cutstock.infrastructure.bin_packing import (
    FreeRectangleArena,
    GuillotineFitter,
    PackingState,
)

PanelFactory = Callable[..., Panel]


# =============================================================================
# FreeRectangleArena
# =============================================================================


class TestFreeRectangleArena:
    """Tests for the indexed free-rectangle collection."""

    def test_add_returns_index(self) -> None:
        arena = FreeRectangleArena()

        assert arena.add(Rectangle(0, 0, 10, 10)) == 0
        assert arena.add(Rectangle(10, 0, 5, 10)) == 1
        assert len(arena) == 2

    def test_degenerate_rectangles_are_dropped(self) -> None:
        arena = FreeRectangleArena()

        assert arena.add(Rectangle(0, 0, 0, 10)) is None
        assert arena.add(Rectangle(0, 0, 10, -3)) is None
        assert len(arena) == 0

    def test_take_removes_and_shifts(self) -> None:
        first = Rectangle(0, 0, 1, 1)
        second = Rectangle(1, 0, 1, 1)
        third = Rectangle(2, 0, 1, 1)
        arena = FreeRectangleArena([first, second, third])

        assert arena.take(1) == second
        assert list(arena) == [first, third]
        assert arena[1] == third

    def test_copy_is_independent(self) -> None:
        arena = FreeRectangleArena([Rectangle(0, 0, 10, 10)])
        clone = arena.copy()

        clone.take(0)

        assert len(arena) == 1
        assert len(clone) == 0

    def test_largest_area(self) -> None:
        arena = FreeRectangleArena([Rectangle(0, 0, 10, 10), Rectangle(0, 0, 5, 30)])

        assert arena.largest_area == 150
        assert FreeRectangleArena().largest_area == 0.0


# =============================================================================
# PackingState
# =============================================================================


class TestPackingState:
    """Tests for splitting and state handling."""

    def test_commit_splits_right_and_below_with_kerf(
        self, panel_factory: PanelFactory
    ) -> None:
        state = PackingState(UsableArea(width=100, height=50), kerf=5)
        state.open_bin()
        panel = panel_factory(30, 20, can_rotate=False)

        placement = state.commit(panel, state.candidates(panel)[0])

        assert (placement.x, placement.y) == (0, 0)
        assert list(state.bins[0].free) == [
            Rectangle(35, 0, 65, 20),
            Rectangle(0, 25, 100, 25),
        ]

    def test_exact_fit_leaves_no_free_space(self, panel_factory: PanelFactory) -> None:
        state = PackingState(UsableArea(width=100, height=50), kerf=3)
        state.open_bin()
        panel = panel_factory(98, 50, can_rotate=False)

        state.commit(panel, state.candidates(panel)[0])

        assert len(state.bins[0].free) == 0

    def test_placement_is_offset_by_trim(self, panel_factory: PanelFactory) -> None:
        state = PackingState(UsableArea(width=80, height=80, offset_x=10, offset_y=5))

        placement = state.place_greedy(panel_factory(20, 30))

        assert placement is not None
        assert (placement.x, placement.y) == (10, 5)

    def test_copy_does_not_share_bins(self, panel_factory: PanelFactory) -> None:
        state = PackingState(UsableArea(width=100, height=100))
        state.place_greedy(panel_factory(40, 40))

        clone = state.copy()
        clone.place_greedy(panel_factory(40, 40, instance=2))
        clone.place_greedy(panel_factory(90, 90, instance=3))

        assert state.bin_count == 1
        assert len(state.bins[0].placements) == 1
        assert clone.bin_count == 2

    def test_negative_kerf_rejected(self) -> None:
        with pytest.raises(ValueError, match="Kerf"):
            PackingState(UsableArea(width=10, height=10), kerf=-1)

    def test_zero_bin_limit_rejected(self) -> None:
        with pytest.raises(ValueError):
            PackingState(UsableArea(width=10, height=10), max_bins=0)

    def test_dead_area_counts_narrow_rectangles(
        self, panel_factory: PanelFactory
    ) -> None:
        state = PackingState(UsableArea(width=100, height=100))
        state.place_greedy(panel_factory(90, 100, can_rotate=False))

        # Only the 10 mm strip on the right remains.
        assert state.dead_area(20) == 10 * 100
        assert state.dead_area(5) == 0
        assert state.dead_area(None) == 0


# =============================================================================
# GuillotineFitter
# =============================================================================


class TestGuillotineFitter:
    """Tests for the greedy best-short-side-fit packer."""

    def test_two_small_panels_share_one_bin(
        self, panel_factory: PanelFactory, square_area: UsableArea
    ) -> None:
        panels = [panel_factory(40, 40, instance=i) for i in (1, 2)]

        result = GuillotineFitter(kerf=2).pack(panels, square_area)

        assert result.bin_count == 1
        assert result.unplaced == ()
        assert [(p.x, p.y) for p in result.placements] == [(0, 0), (42, 0)]

    def test_best_short_side_fit_prefers_tightest_rectangle(
        self, panel_factory: PanelFactory, square_area: UsableArea
    ) -> None:
        panels = [
            panel_factory(60, 40, part_id="a"),
            panel_factory(40, 35, part_id="b"),
            panel_factory(100, 60, part_id="c"),
        ]

        result = GuillotineFitter(kerf=0).pack(panels, square_area)

        placed = {p.panel.part_id: p for p in result.placements}
        # The 40x40 strip beside "a" leaves a zero short side; unrotated wins the tie.
        assert (placed["b"].x, placed["b"].y, placed["b"].rotated) == (60, 0, False)
        assert (placed["c"].x, placed["c"].y) == (0, 40)
        assert result.bin_count == 1

    def test_new_bin_opened_when_nothing_fits(
        self, panel_factory: PanelFactory, square_area: UsableArea
    ) -> None:
        panels = [panel_factory(60, 60, instance=i) for i in (1, 2)]

        result = GuillotineFitter().pack(panels, square_area)

        assert result.bin_count == 2
        assert [(p.bin_index, p.x, p.y) for p in result.placements] == [
            (0, 0, 0),
            (1, 0, 0),
        ]
        assert [layout.board_id for layout in result.layouts] == [1, 2]

    def test_rotation_used_when_needed(self, panel_factory: PanelFactory) -> None:
        area = UsableArea(width=100, height=50)

        result = GuillotineFitter().pack([panel_factory(50, 100)], area)

        placement = result.placements[0]
        assert placement.rotated is True
        assert (placement.width, placement.height) == (100, 50)

    def test_rotation_forbidden(self, panel_factory: PanelFactory) -> None:
        area = UsableArea(width=100, height=50)

        result = GuillotineFitter().pack([panel_factory(50, 100, can_rotate=False)], area)

        assert result.placed_count == 0
        assert result.unplaced[0].reason is UnplacedReason.NO_SPACE
        assert result.bin_count == 0

    def test_oversize_panel_unplaced_without_opening_bins(
        self, panel_factory: PanelFactory, square_area: UsableArea
    ) -> None:
        panels = [
            panel_factory(150, 40, part_id="big"),
            panel_factory(40, 40, part_id="small"),
        ]

        result = GuillotineFitter().pack(panels, square_area)

        assert [u.panel.id for u in result.unplaced] == ["big-1"]
        assert result.unplaced[0].reason is UnplacedReason.NO_SPACE
        assert [p.panel.id for p in result.placements] == ["small-1"]
        assert result.bin_count == 1

    def test_bin_limit_marks_overflow(
        self, panel_factory: PanelFactory, square_area: UsableArea
    ) -> None:
        panels = [panel_factory(60, 60, instance=i) for i in (1, 2, 3)]

        result = GuillotineFitter(max_bins=1).pack(panels, square_area)

        assert result.bin_count == 1
        assert result.placed_count == 1
        assert [u.reason for u in result.unplaced] == [
            UnplacedReason.BOARD_LIMIT,
            UnplacedReason.BOARD_LIMIT,
        ]

    def test_degenerate_area_places_nothing(self, panel_factory: PanelFactory) -> None:
        area = UsableArea(width=0, height=100)
        panels = [panel_factory(10, 10, instance=i) for i in (1, 2)]

        result = GuillotineFitter().pack(panels, area)

        assert result.bin_count == 0
        assert result.unplaced_count == 2
        assert all(u.reason is UnplacedReason.NO_SPACE for u in result.unplaced)

    def test_placements_stay_inside_and_apart(
        self, panel_factory: PanelFactory
    ) -> None:
        area = UsableArea(width=300, height=200, offset_x=7, offset_y=3)
        sizes = [(120, 80), (90, 60), (60, 60), (150, 40), (35, 70), (80, 80)] * 3
        panels = [
            panel_factory(w, h, part_id=f"p{i}") for i, (w, h) in enumerate(sizes)
        ]

        result = GuillotineFitter(kerf=3).pack(panels, area)

        assert result.placed_count + result.unplaced_count == len(panels)
        for layout in result.layouts:
            rects = [p.rect for p in layout.placements]
            for rect in rects:
                assert layout.bounds.contains(rect)
            for i, first in enumerate(rects):
                for second in rects[i + 1 :]:
                    assert not first.overlaps(second)

    def test_deterministic(self, panel_factory: PanelFactory) -> None:
        area = UsableArea(width=250, height=180)
        panels = [
            panel_factory(w, h, part_id=f"p{i}")
            for i, (w, h) in enumerate([(100, 50), (50, 100), (70, 70), (120, 30)] * 4)
        ]

        first = GuillotineFitter(kerf=2).pack(panels, area)
        second = GuillotineFitter(kerf=2).pack(panels, area)

        assert first == second

    def test_name(self) -> None:
        assert GuillotineFitter.name == "greedy"
