"""Contracts module - protocols shared across layers.

Example:
    ```python
    from cutstock.contracts import PackingStrategy

    def run(strategy: PackingStrategy, panels, area):
        return strategy.pack(panels, area)
    ```
"""

from .strategies import PackingStrategy as PackingStrategy

__all__ = [
    "PackingStrategy",
]
