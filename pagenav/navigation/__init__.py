"""Section hierarchy, active section tracking and scroll spy coordination."""

from .coordinator import CoordinatorState, ScrollSpyCoordinator
from .errors import (
    CoordinatorStateError,
    DuplicateSectionError,
    InvalidSectionError,
    NavigationError,
    ScrollSpyNotAttachedError,
    UnknownSectionError,
)
from .options import ExpandBehaviour, NavigationOptions
from .registry import ROOT_ORDER_SPACING, SectionRegistry
from .scroll_spy import MemoryScrollSpy, ScrollSpy, SectionCenteredEvent
from .section import Section
from .tracker import ActiveSectionTracker

__all__ = [
    "ROOT_ORDER_SPACING",
    "ActiveSectionTracker",
    "CoordinatorState",
    "CoordinatorStateError",
    "DuplicateSectionError",
    "ExpandBehaviour",
    "InvalidSectionError",
    "MemoryScrollSpy",
    "NavigationError",
    "NavigationOptions",
    "ScrollSpy",
    "ScrollSpyCoordinator",
    "ScrollSpyNotAttachedError",
    "Section",
    "SectionCenteredEvent",
    "SectionRegistry",
]
