"""Factory for creating packing strategies.

Keeps strategy selection in one place so the orchestrator only ever sees
the ``PackingStrategy`` protocol.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from cutstock.application.config.schema import StrategyConfig, StrategyName
from cutstock.infrastructure.bin_packing import GuillotineFitter
from cutstock.infrastructure.lookahead import LookAheadPlanner

if TYPE_CHECKING:
    from cutstock.contracts.strategies import PackingStrategy

AVAILABLE_STRATEGIES: tuple[str, ...] = tuple(s.value for s in StrategyName)


class PackingStrategyFactory:
    """Creates packing strategy instances from configuration.

    Example:
        ```python
        factory = PackingStrategyFactory(config.strategy, max_bins=config.max_boards)
        strategy = factory.create(kerf=3.0)
        result = strategy.pack(panels, area)
        ```
    """

    def __init__(
        self,
        strategy: StrategyConfig | None = None,
        max_bins: int | None = None,
    ) -> None:
        self._strategy = strategy or StrategyConfig()
        self._max_bins = max_bins

    @property
    def strategy_name(self) -> str:
        return self._strategy.name.value

    def create(self, kerf: float) -> "PackingStrategy":
        """Create a strategy for one material.

        Args:
            kerf: Saw blade width for the material in mm.

        Returns:
            A fresh strategy instance; strategies hold no state between
            materials.
        """
        if self._strategy.name is StrategyName.GREEDY:
            return GuillotineFitter(kerf=kerf, max_bins=self._max_bins)
        return LookAheadPlanner(
            kerf=kerf,
            max_bins=self._max_bins,
            window=self._strategy.window,
            candidate_limit=self._strategy.candidate_limit,
            tie_tolerance=self._strategy.tie_tolerance_mm,
        )
