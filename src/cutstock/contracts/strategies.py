"""Strategy protocol for panel packing.

The Strategy pattern lets the orchestrator choose between the greedy
baseline and the look-ahead planner at runtime without either knowing
about the other or about the request contract.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, Sequence, runtime_checkable

if TYPE_CHECKING:
    from cutstock.domain.value_objects import Panel, UsableArea
    from cutstock.infrastructure.bin_packing import PackingResult


@runtime_checkable
class PackingStrategy(Protocol):
    """Protocol for packing strategies.

    Implementations place a sequence of panels into as few bins as they
    can and report what could not be placed:
    - GuillotineFitter: best-short-side-fit greedy placement
    - LookAheadPlanner: simulates upcoming panels before committing

    Both must be deterministic for a fixed input and configuration.

    Example:
        ```python
        class GuillotineFitter:
            name = "greedy"

            def pack(self, panels, area) -> PackingResult:
                ...
        ```
    """

    name: str

    def pack(
        self,
        panels: Sequence["Panel"],
        area: "UsableArea",
    ) -> "PackingResult":
        """Pack panels into bins sized to the usable area.

        Args:
            panels: Panels in packing order.
            area: Usable area of one board after trims.

        Returns:
            PackingResult with one layout per bin and the unplaced panels.
        """
        ...


__all__ = [
    "PackingStrategy",
]
