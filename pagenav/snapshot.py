"""Plain data view of a navigation."""

from __future__ import annotations

from typing import Any

from pagenav.navigation import ScrollSpyCoordinator, Section
from pagenav.navigation.render import is_visible, nav_link_class, panel_class

JSONDict = dict[str, Any]


def section_to_dict(section: Section) -> JSONDict:
    """Return the serializable fields of ``section``."""

    return {
        "id": section.section_id,
        "name": section.name,
        "parent": section.parent,
        "level": section.level,
        "order": section.order,
        "active": section.is_active,
        "class": nav_link_class(section),
    }


def snapshot(navigation: ScrollSpyCoordinator) -> JSONDict:
    """Describe the navigation as it would be rendered.

    Sections are listed in outline order and carry a ``visible`` flag
    derived from the expand behaviour.
    """

    registry = navigation.registry
    active = navigation.active_section

    sections = []
    for section in registry.ordered():
        data = section_to_dict(section)
        data["visible"] = is_visible(registry, section, navigation.options)
        sections.append(data)

    return {
        "headline": navigation.options.headline,
        "class": panel_class(),
        "state": navigation.state.value,
        "active": active.section_id if active else None,
        "sections": sections,
    }
