"""Tests for cutting geometry value objects."""

from __future__ import annotations

import pytest

from cutstock.domain.value_objects import (
    BoardSpec,
    MaterialMetrics,
    Panel,
    PartSpec,
    Placement,
    Rectangle,
    UnplacedReason,
    UsableArea,
)


# =============================================================================
# Rectangle
# =============================================================================


class TestRectangle:
    """Tests for Rectangle geometry helpers."""

    def test_edges_and_area(self) -> None:
        rect = Rectangle(10.0, 20.0, 30.0, 40.0)

        assert rect.right == 40.0
        assert rect.bottom == 60.0
        assert rect.area == 1200.0
        assert rect.short_side == 30.0

    def test_degenerate_when_a_dimension_is_not_positive(self) -> None:
        assert Rectangle(0, 0, 0, 10).is_degenerate
        assert Rectangle(0, 0, 10, -1).is_degenerate
        assert not Rectangle(0, 0, 1, 1).is_degenerate

    def test_can_hold_is_inclusive(self) -> None:
        rect = Rectangle(0, 0, 100, 50)

        assert rect.can_hold(100, 50)
        assert not rect.can_hold(100.1, 50)
        assert not rect.can_hold(50, 100)

    def test_touching_rectangles_do_not_overlap(self) -> None:
        left = Rectangle(0, 0, 50, 50)
        right = Rectangle(50, 0, 50, 50)

        assert not left.overlaps(right)
        assert not right.overlaps(left)

    def test_intersecting_rectangles_overlap(self) -> None:
        assert Rectangle(0, 0, 50, 50).overlaps(Rectangle(49, 49, 10, 10))

    def test_contains(self) -> None:
        outer = Rectangle(10, 10, 100, 100)

        assert outer.contains(Rectangle(10, 10, 100, 100))
        assert outer.contains(Rectangle(50, 50, 10, 10))
        assert not outer.contains(Rectangle(5, 50, 10, 10))
        assert not outer.contains(Rectangle(100, 100, 20, 5))

    def test_fills_requires_exact_match(self) -> None:
        region = Rectangle(0, 0, 40, 40)

        assert Rectangle(0, 0, 40, 40).fills(region)
        assert not Rectangle(0, 0, 40, 39).fills(region)


# =============================================================================
# Parts and panels
# =============================================================================


class TestPartSpec:
    """Tests for PartSpec validation."""

    def test_valid_part(self) -> None:
        part = PartSpec(id="side", width=300, height=200, quantity=2)

        assert part.can_rotate is True

    @pytest.mark.parametrize("width,height", [(0, 10), (10, 0), (-1, 10)])
    def test_non_positive_dimensions_rejected(self, width: float, height: float) -> None:
        with pytest.raises(ValueError, match="dimensions must be positive"):
            PartSpec(id="bad", width=width, height=height, quantity=1)

    def test_negative_quantity_rejected(self) -> None:
        with pytest.raises(ValueError, match="quantity"):
            PartSpec(id="bad", width=10, height=10, quantity=-1)

    def test_zero_quantity_allowed(self) -> None:
        assert PartSpec(id="none", width=10, height=10, quantity=0).quantity == 0


class TestPanel:
    """Tests for Panel identity and orientations."""

    def test_id_combines_part_and_instance(self) -> None:
        assert Panel(part_id="shelf", instance=3, width=10, height=20).id == "shelf-3"

    def test_instance_numbers_start_at_one(self) -> None:
        with pytest.raises(ValueError):
            Panel(part_id="p", instance=0, width=10, height=20)

    def test_rotatable_panel_has_two_orientations(self) -> None:
        panel = Panel(part_id="p", instance=1, width=10, height=20)

        assert panel.orientations() == ((10, 20, False), (20, 10, True))

    def test_fixed_panel_has_one_orientation(self) -> None:
        panel = Panel(part_id="p", instance=1, width=10, height=20, can_rotate=False)

        assert panel.orientations() == ((10, 20, False),)

    def test_square_panel_has_one_orientation(self) -> None:
        panel = Panel(part_id="p", instance=1, width=15, height=15)

        assert panel.orientations() == ((15, 15, False),)

    def test_nearly_square_panel_has_one_orientation(self) -> None:
        panel = Panel(part_id="p", instance=1, width=40, height=40.0000001)

        assert panel.orientations() == ((40, 40.0000001, False),)


# =============================================================================
# Boards and usable areas
# =============================================================================


class TestBoardSpec:
    """Tests for BoardSpec validation."""

    def test_trims_default_to_zero(self) -> None:
        board = BoardSpec(width=2800, height=2070)

        assert (board.trim_top, board.trim_right, board.trim_bottom, board.trim_left) == (
            0.0,
            0.0,
            0.0,
            0.0,
        )
        assert board.area == 2800 * 2070

    def test_negative_trim_rejected(self) -> None:
        with pytest.raises(ValueError, match="trims"):
            BoardSpec(width=100, height=100, trim_left=-1)

    def test_non_positive_size_rejected(self) -> None:
        with pytest.raises(ValueError, match="width"):
            BoardSpec(width=0, height=100)


class TestUsableArea:
    """Tests for UsableArea."""

    def test_degenerate_area_is_zero(self) -> None:
        area = UsableArea(width=0, height=100)

        assert area.is_degenerate
        assert area.area == 0.0

    def test_bounds_include_offsets(self) -> None:
        area = UsableArea(width=80, height=90, offset_x=10, offset_y=5)

        assert area.bounds == Rectangle(10, 5, 80, 90)

    def test_admits_checks_both_orientations(self) -> None:
        area = UsableArea(width=100, height=50)

        assert area.admits(Panel(part_id="p", instance=1, width=50, height=100))
        assert not area.admits(
            Panel(part_id="p", instance=1, width=50, height=100, can_rotate=False)
        )
        assert not area.admits(Panel(part_id="p", instance=1, width=150, height=40))

    def test_degenerate_area_admits_nothing(self) -> None:
        area = UsableArea(width=-10, height=100)

        assert not area.admits(Panel(part_id="p", instance=1, width=1, height=1))


# =============================================================================
# Placements and metrics
# =============================================================================


class TestPlacement:
    """Tests for Placement."""

    def test_board_id_is_one_based(self) -> None:
        panel = Panel(part_id="p", instance=1, width=10, height=20)
        placement = Placement(
            panel=panel, x=0, y=0, width=20, height=10, rotated=True, bin_index=2
        )

        assert placement.board_id == 3
        assert placement.rotation_degrees == 90
        assert placement.rect == Rectangle(0, 0, 20, 10)
        assert placement.area == 200

    def test_negative_bin_index_rejected(self) -> None:
        panel = Panel(part_id="p", instance=1, width=10, height=20)

        with pytest.raises(ValueError):
            Placement(panel=panel, x=0, y=0, width=10, height=20, rotated=False, bin_index=-1)


class TestUnplacedReason:
    """Tests for UnplacedReason values used in responses."""

    def test_reason_strings(self) -> None:
        assert UnplacedReason.NO_SPACE.value == "no space available"
        assert UnplacedReason.BOARD_LIMIT.value == "board limit reached"


class TestMaterialMetrics:
    """Tests for MaterialMetrics validation."""

    def test_waste_above_hundred_rejected(self) -> None:
        with pytest.raises(ValueError, match="Waste"):
            MaterialMetrics(
                used_area=0,
                board_area=100,
                waste_percentage=100.5,
                placed_count=0,
                unplaced_count=0,
                boards_used=1,
                total_cut_length=0,
            )
