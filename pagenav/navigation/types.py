"""Common type aliases for navigation structures."""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from .scroll_spy import ScrollSpy, SectionCenteredEvent  # noqa: F401
    from .section import Section  # noqa: F401


SectionList = list["Section"]
SectionIndex = dict[str, "Section"]
HierarchyMapper = dict[str, int]

# Render collaborator: "state changed, please redraw".
ChangeCallback = Callable[[], None]
CenteredHandler = Callable[["SectionCenteredEvent"], None]
ScrollSpyFactory = Callable[[], "ScrollSpy"]
