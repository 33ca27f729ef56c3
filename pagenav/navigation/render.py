"""Presentation helpers for navigation consumers."""

from __future__ import annotations

from .options import ExpandBehaviour, NavigationOptions
from .registry import SectionRegistry
from .section import Section

NAVLINK_CLASS = "page-content-navigation-navlink"
PANEL_CLASS = "page-content-navigation"


def _join_classes(*classes: str | None) -> str:
    """Join non-empty class names with single spaces."""

    return " ".join(c.strip() for c in classes if c and c.strip())


def nav_link_class(section: Section) -> str:
    """Return the CSS classes for the navigation link of ``section``."""

    return _join_classes(
        NAVLINK_CLASS,
        "active" if section.is_active else None,
        f"navigation-level-{section.level}",
    )


def panel_class(extra: str | None = None) -> str:
    """Return the CSS classes for the navigation panel."""

    return _join_classes(PANEL_CLASS, extra)


def mapped_level(options: NavigationOptions, level_class: str) -> int | None:
    """Translate a level class such as "second-level" into a depth.

    Args:
        options: Options holding the hierarchy mapper.
        level_class: Class name found on the observed element.

    Returns:
        The mapped depth or ``None`` when the class is not mapped.
    """

    return options.hierarchy_mapper.get(level_class)


def is_expanded(
    registry: SectionRegistry,
    section: Section,
    options: NavigationOptions,
) -> bool:
    """Return whether the children of ``section`` should be shown.

    With ``WHEN_ACTIVE`` a section is expanded when it or one of its
    descendants is the active section.
    """

    if options.expand_behaviour is ExpandBehaviour.ALWAYS:
        return True
    if options.expand_behaviour is ExpandBehaviour.NEVER:
        return False

    current = registry.active_section
    while current is not None:
        if current.section_id == section.section_id:
            return True
        current = registry.get(current.parent)
    return False


def is_visible(
    registry: SectionRegistry,
    section: Section,
    options: NavigationOptions,
) -> bool:
    """Return whether ``section`` is shown, i.e. every ancestor is expanded."""

    parent = registry.get(section.parent)
    while parent is not None:
        if not is_expanded(registry, parent, options):
            return False
        parent = registry.get(parent.parent)
    return True
