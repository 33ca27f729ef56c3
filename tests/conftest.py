"""Shared fixtures for navigation tests."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest
import yaml  # type: ignore[import-untyped]

from pagenav.navigation import (
    MemoryScrollSpy,
    NavigationOptions,
    ScrollSpyCoordinator,
)

SAMPLE_OUTLINE = {
    "sections": [
        {
            "id": "intro",
            "name": "Introduction",
            "children": [
                {"id": "intro-goals", "name": "Goals"},
                {"id": "intro-scope", "name": "Scope"},
            ],
        },
        {"id": "usage", "name": "Usage"},
        {"id": "api", "name": "API"},
    ]
}


class RenderCounter:
    """Render collaborator counting redraw requests."""

    def __init__(self) -> None:
        self.calls = 0

    def __call__(self) -> None:
        self.calls += 1


@pytest.fixture
def spy() -> MemoryScrollSpy:
    """Tracking service handed out by the navigation factory."""
    return MemoryScrollSpy()


@pytest.fixture
def renders() -> RenderCounter:
    return RenderCounter()


@pytest.fixture
def make_navigation(
    spy: MemoryScrollSpy, renders: RenderCounter
) -> Callable[..., ScrollSpyCoordinator]:
    """Return a builder for navigations that use the ``spy`` fixture."""

    def make(**options: object) -> ScrollSpyCoordinator:
        return ScrollSpyCoordinator(
            lambda: spy,
            NavigationOptions(**options),  # type: ignore[arg-type]
            on_change=renders,
        )

    return make


@pytest.fixture
def outline_file(tmp_path: Path) -> Path:
    """Write the sample outline as YAML and return its path."""

    path = tmp_path / "outline.yaml"
    path.write_text(
        yaml.safe_dump(SAMPLE_OUTLINE, allow_unicode=True, sort_keys=False),
        encoding="utf-8",
    )
    return path
