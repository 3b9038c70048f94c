"""Pytest configuration and shared fixtures for cutstock tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable

import pytest

from cutstock.domain.value_objects import Panel, UsableArea

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "integration: tests that run the full optimization pipeline"
    )
    config.addinivalue_line("markers", "slow: tests that take a long time to run")


# =============================================================================
# Shared fixtures
# =============================================================================


@pytest.fixture
def panel_factory() -> Callable[..., Panel]:
    """Create panels with sensible defaults."""

    def _make(
        width: float,
        height: float,
        part_id: str = "p",
        instance: int = 1,
        can_rotate: bool = True,
    ) -> Panel:
        return Panel(
            part_id=part_id,
            instance=instance,
            width=width,
            height=height,
            can_rotate=can_rotate,
        )

    return _make


@pytest.fixture
def fixtures_dir() -> Path:
    """Directory holding JSON request and config fixtures."""
    return FIXTURES_DIR


@pytest.fixture
def load_fixture() -> Callable[[str], Any]:
    """Load a JSON fixture by path relative to the fixtures directory."""

    def _load(name: str) -> Any:
        return json.loads((FIXTURES_DIR / name).read_text(encoding="utf-8"))

    return _load


@pytest.fixture
def square_area() -> UsableArea:
    """A 100x100 usable area with no trim offset."""
    return UsableArea(width=100.0, height=100.0)


@pytest.fixture
def material_factory() -> Callable[..., dict[str, Any]]:
    """Build a material request object.

    Defaults to a 100x100 untrimmed board with kerf 2 and no parts.
    """

    def _make(
        material_id: str = "m1",
        parts: list[dict[str, Any]] | None = None,
        board: dict[str, Any] | None = None,
        kerf: float | None = 2.0,
        **extra: Any,
    ) -> dict[str, Any]:
        material: dict[str, Any] = {
            "id": material_id,
            "name": f"Material {material_id}",
            "parts": parts or [],
            "board": board
            or {
                "w_mm": 100,
                "h_mm": 100,
                "trim_top_mm": 0,
                "trim_right_mm": 0,
                "trim_bottom_mm": 0,
                "trim_left_mm": 0,
            },
            "params": {} if kerf is None else {"kerf_mm": kerf},
        }
        material.update(extra)
        return material

    return _make
