"""Options controlling the navigation panel."""

from __future__ import annotations

from enum import Enum

from attrs import define, field

from .types import HierarchyMapper


class ExpandBehaviour(str, Enum):
    """Visibility of nested levels in the navigation panel."""

    ALWAYS = "always"
    NEVER = "never"
    WHEN_ACTIVE = "when_active"


def _to_expand_behaviour(value: ExpandBehaviour | str) -> ExpandBehaviour:
    """Accept enum members as well as their (case-insensitive) values."""

    if isinstance(value, ExpandBehaviour):
        return value
    return ExpandBehaviour(str(value).lower())


@define(slots=True)
class NavigationOptions:
    """Options controlling the navigation panel.

    Attributes:
        headline: Text displayed above the section links.
        section_selector: Selector for the elements the tracking service
            observes. Empty means observation never starts.
        hierarchy_mapper: Mapping between level class names such as
            "second-level" and the depth they represent.
        expand_behaviour: Visibility of nested levels.
        activate_first_as_default: Activate the first added section when
            nothing else indicates an active one.
        strict: Raise instead of deferring when the tracking service is used
            before the navigation is attached.
    """

    headline: str = "Contents"
    section_selector: str = ""
    hierarchy_mapper: HierarchyMapper = field(factory=dict)
    expand_behaviour: ExpandBehaviour = field(
        default=ExpandBehaviour.ALWAYS, converter=_to_expand_behaviour
    )
    activate_first_as_default: bool = False
    strict: bool = False
