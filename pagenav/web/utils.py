"""Shared navigation state for web routes."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from pagenav.config import load_options
from pagenav.navigation import MemoryScrollSpy, ScrollSpyCoordinator
from pagenav.outline import load_outline, register_outline

logger = logging.getLogger(__name__)

# Outline registered when the navigation is first requested.
OUTLINE_ENV = "PAGENAV_OUTLINE"

_NAVIGATION: ScrollSpyCoordinator | None = None


def create_navigation() -> ScrollSpyCoordinator:
    """Build a navigation from ``$PAGENAV_CONFIG`` and ``$PAGENAV_OUTLINE``.

    Returns:
        A navigation backed by an in-memory tracking service. The outline
        is registered when the environment names one.
    """

    navigation = ScrollSpyCoordinator(MemoryScrollSpy, load_options())

    outline = os.environ.get(OUTLINE_ENV)
    if outline:
        logger.debug(f"Loading outline from {outline}")
        register_outline(navigation, load_outline(Path(outline)))
    return navigation


async def get_navigation() -> ScrollSpyCoordinator:
    """Return the attached navigation served by the application."""

    global _NAVIGATION

    if _NAVIGATION is None:
        _NAVIGATION = create_navigation()
    await _NAVIGATION.attach()
    return _NAVIGATION


async def reset_navigation(
    navigation: ScrollSpyCoordinator | None = None,
) -> None:
    """Dispose the served navigation and optionally install another one."""

    global _NAVIGATION

    if _NAVIGATION is not None:
        await _NAVIGATION.dispose()
    _NAVIGATION = navigation
