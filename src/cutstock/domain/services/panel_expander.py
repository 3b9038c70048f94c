"""Quantity expansion and ordering of panels."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Iterable, Sequence

from ..value_objects import Panel, PartSpec

logger = logging.getLogger(__name__)


class PanelSortOrder(str, Enum):
    """Order in which expanded panels are handed to the fitter."""

    AREA_DESC = "area_desc"
    INPUT = "input"


def expand_parts(parts: Iterable[PartSpec]) -> list[Panel]:
    """Expand parts into one panel per unit of quantity.

    Instance numbers start at 1 for each part and follow input order.
    A part with quantity 0 contributes nothing.

    Args:
        parts: Parts in request order.

    Returns:
        Flat list of panels, grouped by part in input order.
    """
    panels: list[Panel] = []
    for part in parts:
        for instance in range(1, part.quantity + 1):
            panels.append(
                Panel(
                    part_id=part.id,
                    instance=instance,
                    width=part.width,
                    height=part.height,
                    can_rotate=part.can_rotate,
                )
            )
    logger.debug("Expanded parts into %d panels", len(panels))
    return panels


def order_panels(
    panels: Sequence[Panel],
    order: PanelSortOrder = PanelSortOrder.AREA_DESC,
) -> list[Panel]:
    """Arrange panels for packing.

    ``AREA_DESC`` is a stable sort by area, largest first, so panels of
    equal area keep their expansion order and the result is reproducible.
    """
    if order is PanelSortOrder.INPUT:
        return list(panels)
    return sorted(panels, key=lambda p: p.area, reverse=True)
