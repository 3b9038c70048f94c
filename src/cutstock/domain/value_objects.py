"""Geometry and cutting value objects.

All coordinates are in millimetres. The origin is the top-left corner of
the region being described; x grows to the right and y grows downward,
so ``bottom`` is ``y + height``.

All dataclasses are frozen (immutable) so they can be shared freely
between packing states and hashed.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

# Tolerance for comparing millimetre coordinates produced by float arithmetic.
EPSILON = 1e-6


@dataclass(frozen=True)
class Rectangle:
    """Axis-aligned rectangle with a position and a size."""

    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        """X coordinate of the right edge."""
        return self.x + self.width

    @property
    def bottom(self) -> float:
        """Y coordinate of the bottom edge."""
        return self.y + self.height

    @property
    def area(self) -> float:
        """Area in square millimetres."""
        return self.width * self.height

    @property
    def short_side(self) -> float:
        return min(self.width, self.height)

    @property
    def is_degenerate(self) -> bool:
        """True if either dimension is zero or negative."""
        return self.width <= EPSILON or self.height <= EPSILON

    def can_hold(self, width: float, height: float) -> bool:
        """Check whether a width x height piece fits without rotation."""
        return width <= self.width + EPSILON and height <= self.height + EPSILON

    def contains(self, other: Rectangle) -> bool:
        """Check whether ``other`` lies entirely inside this rectangle."""
        return (
            other.x >= self.x - EPSILON
            and other.y >= self.y - EPSILON
            and other.right <= self.right + EPSILON
            and other.bottom <= self.bottom + EPSILON
        )

    def overlaps(self, other: Rectangle) -> bool:
        """Check whether the interiors of two rectangles intersect.

        Rectangles that merely touch along an edge do not overlap.
        """
        return (
            self.x < other.right - EPSILON
            and other.x < self.right - EPSILON
            and self.y < other.bottom - EPSILON
            and other.y < self.bottom - EPSILON
        )

    def fills(self, other: Rectangle) -> bool:
        """Check whether this rectangle covers ``other`` exactly."""
        return (
            abs(self.x - other.x) <= EPSILON
            and abs(self.y - other.y) <= EPSILON
            and abs(self.width - other.width) <= EPSILON
            and abs(self.height - other.height) <= EPSILON
        )


@dataclass(frozen=True)
class PartSpec:
    """A part as requested: one size, a quantity, and a rotation permission.

    Attributes:
        id: Stable part identifier from the request.
        width: Part width in mm.
        height: Part height in mm.
        quantity: Number of identical pieces requested (may be zero).
        can_rotate: Whether the part may be turned 90 degrees.
    """

    id: str
    width: float
    height: float
    quantity: int
    can_rotate: bool = True

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"Part '{self.id}' dimensions must be positive "
                f"(got {self.width}x{self.height})"
            )
        if self.quantity < 0:
            raise ValueError(f"Part '{self.id}' quantity must be non-negative")


@dataclass(frozen=True)
class Panel:
    """One physical piece to be cut, produced by quantity expansion.

    Attributes:
        part_id: Identifier of the originating part.
        instance: 1-based instance number within the part.
        width: Panel width in mm (packing frame).
        height: Panel height in mm (packing frame).
        can_rotate: Whether the fitter may turn the panel 90 degrees.
    """

    part_id: str
    instance: int
    width: float
    height: float
    can_rotate: bool = True

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"Panel '{self.part_id}-{self.instance}' dimensions must be positive"
            )
        if self.instance < 1:
            raise ValueError("Panel instance numbers start at 1")

    @property
    def id(self) -> str:
        """Derived identifier ``{part_id}-{instance}``."""
        return f"{self.part_id}-{self.instance}"

    @property
    def area(self) -> float:
        return self.width * self.height

    def orientations(self) -> tuple[tuple[float, float, bool], ...]:
        """Admissible (width, height, rotated) orientations, unrotated first.

        Square panels and panels that may not rotate have one orientation.
        """
        if not self.can_rotate or abs(self.width - self.height) <= EPSILON:
            return ((self.width, self.height, False),)
        return (
            (self.width, self.height, False),
            (self.height, self.width, True),
        )


@dataclass(frozen=True)
class BoardSpec:
    """A raw source sheet with its four edge trims.

    Attributes:
        width: Raw board width in mm.
        height: Raw board height in mm.
        trim_top: Material excluded along the top edge.
        trim_right: Material excluded along the right edge.
        trim_bottom: Material excluded along the bottom edge.
        trim_left: Material excluded along the left edge.
    """

    width: float
    height: float
    trim_top: float = 0.0
    trim_right: float = 0.0
    trim_bottom: float = 0.0
    trim_left: float = 0.0

    def __post_init__(self) -> None:
        if self.width <= 0:
            raise ValueError("Board width must be positive")
        if self.height <= 0:
            raise ValueError("Board height must be positive")
        trims = (self.trim_top, self.trim_right, self.trim_bottom, self.trim_left)
        if any(trim < 0 for trim in trims):
            raise ValueError("Board trims must be non-negative")

    @property
    def area(self) -> float:
        return self.width * self.height


@dataclass(frozen=True)
class UsableArea:
    """The placement rectangle left on a board after trimming.

    Attributes:
        width: Usable width in mm (may be zero or negative when the trims
            consume the board).
        height: Usable height in mm (same caveat).
        offset_x: Left trim; added to placement x when reporting.
        offset_y: Top trim; added to placement y when reporting.
    """

    width: float
    height: float
    offset_x: float = 0.0
    offset_y: float = 0.0

    @property
    def is_degenerate(self) -> bool:
        """True if trims leave no usable width or height."""
        return self.width <= 0 or self.height <= 0

    @property
    def area(self) -> float:
        """Usable area in square mm, zero for degenerate boards."""
        if self.is_degenerate:
            return 0.0
        return self.width * self.height

    @property
    def bounds(self) -> Rectangle:
        """The usable area in absolute board coordinates."""
        return Rectangle(self.offset_x, self.offset_y, self.width, self.height)

    def admits(self, panel: Panel) -> bool:
        """Check whether the panel fits an empty bin in any orientation."""
        if self.is_degenerate:
            return False
        local = Rectangle(0.0, 0.0, self.width, self.height)
        return any(local.can_hold(w, h) for w, h, _ in panel.orientations())


@dataclass(frozen=True)
class Placement:
    """A panel fitted into a bin.

    Coordinates are absolute board coordinates (trim offset applied).

    Attributes:
        panel: The panel that was placed.
        x: Left edge in mm.
        y: Top edge in mm.
        width: Placed width (after rotation, if any).
        height: Placed height (after rotation, if any).
        rotated: True if the panel was turned 90 degrees.
        bin_index: Zero-based index of the owning bin.
    """

    panel: Panel
    x: float
    y: float
    width: float
    height: float
    rotated: bool
    bin_index: int

    def __post_init__(self) -> None:
        if self.bin_index < 0:
            raise ValueError("Bin index must be non-negative")

    @property
    def board_id(self) -> int:
        """1-based board number used in responses."""
        return self.bin_index + 1

    @property
    def rect(self) -> Rectangle:
        return Rectangle(self.x, self.y, self.width, self.height)

    @property
    def area(self) -> float:
        return self.width * self.height

    @property
    def rotation_degrees(self) -> int:
        return 90 if self.rotated else 0


class UnplacedReason(str, Enum):
    """Why a panel could not be placed."""

    NO_SPACE = "no space available"
    BOARD_LIMIT = "board limit reached"


@dataclass(frozen=True)
class UnplacedPanel:
    """A panel for which no placement exists. Terminal for the request."""

    panel: Panel
    reason: UnplacedReason


@dataclass(frozen=True)
class MaterialMetrics:
    """Utilisation statistics for one material.

    Attributes:
        used_area: Sum of placed panel areas in square mm.
        board_area: Usable area times bins used, in square mm.
        waste_percentage: Unused share of board area, 0-100, 2 decimals.
        placed_count: Number of placed panels.
        unplaced_count: Number of unplaced panels.
        boards_used: Number of bins opened.
        total_cut_length: Sum of per-board saw pass lengths in mm.
    """

    used_area: float
    board_area: float
    waste_percentage: float
    placed_count: int
    unplaced_count: int
    boards_used: int
    total_cut_length: float

    def __post_init__(self) -> None:
        if not 0 <= self.waste_percentage <= 100:
            raise ValueError("Waste percentage must be between 0 and 100")
