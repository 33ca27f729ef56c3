"""Errors raised by the navigation core."""

from __future__ import annotations


class NavigationError(Exception):
    """Base class for navigation errors."""


class InvalidSectionError(NavigationError, ValueError):
    """A section was registered with an empty identifier."""


class DuplicateSectionError(NavigationError, ValueError):
    """A section identifier is already present in the registry."""

    def __init__(self, section_id: str) -> None:
        super().__init__(f"Section {section_id!r} is already registered")
        self.section_id = section_id


class UnknownSectionError(NavigationError, KeyError):
    """A referenced section is not present in the registry."""

    def __init__(self, section_id: str) -> None:
        super().__init__(section_id)
        self.section_id = section_id

    def __str__(self) -> str:
        return f"Section {self.section_id!r} is not registered"


class ScrollSpyNotAttachedError(NavigationError, RuntimeError):
    """The tracking service was used before the navigation was attached."""


class CoordinatorStateError(NavigationError, RuntimeError):
    """The coordinator was used in a state that does not allow the call."""
