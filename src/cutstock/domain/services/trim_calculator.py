"""Board orientation and usable-area calculation.

Boards are packed in a "packing frame" whose axes are swapped relative
to the request's field names: the board's ``h_mm`` becomes the packing
width and its ``w_mm`` the packing height, so panels are laid out along
the physically longer side. Parts are transposed the same way so each
part keeps its orientation relative to the physical board. Downstream
consumers (machine exporters, cut-length expectations) read coordinates
in this frame.
"""

from __future__ import annotations

from ..value_objects import BoardSpec, PartSpec, UsableArea


def orient_board(board: BoardSpec) -> BoardSpec:
    """Swap board width and height into the packing frame.

    Trims keep their edge names; they are applied to the oriented board.
    """
    return BoardSpec(
        width=board.height,
        height=board.width,
        trim_top=board.trim_top,
        trim_right=board.trim_right,
        trim_bottom=board.trim_bottom,
        trim_left=board.trim_left,
    )


def orient_part(part: PartSpec) -> PartSpec:
    """Transpose a part into the packing frame."""
    return PartSpec(
        id=part.id,
        width=part.height,
        height=part.width,
        quantity=part.quantity,
        can_rotate=part.can_rotate,
    )


def calculate_usable_area(board: BoardSpec) -> UsableArea:
    """Subtract edge trims from a board.

    The result may have a zero or negative dimension when the trims
    consume the whole board; callers check ``is_degenerate``.

    Args:
        board: Board in the packing frame.

    Returns:
        UsableArea whose offsets are the left and top trims.
    """
    return UsableArea(
        width=board.width - board.trim_left - board.trim_right,
        height=board.height - board.trim_top - board.trim_bottom,
        offset_x=board.trim_left,
        offset_y=board.trim_top,
    )
