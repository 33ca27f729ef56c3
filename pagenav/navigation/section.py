"""Navigable region of a page."""

from __future__ import annotations

from attrs import define, field


@define(slots=True)
class Section:
    """Navigable region of a page.

    Attributes:
        section_id: Stable identifier shared with the tracking service and
            URL fragments.
        name: Label displayed in the navigation panel.
        parent: Identifier of the parent section, ``None`` for roots.
        level: Depth in the hierarchy, ``0`` for roots.
        order: Position key used to keep sections in outline order.
        is_active: Whether this is the section currently highlighted.
    """

    section_id: str
    name: str
    parent: str | None = None
    level: int = 0
    order: int = 0
    is_active: bool = field(default=False, repr=False)

    @property
    def is_root(self) -> bool:
        """Return ``True`` when the section has no parent."""

        return self.parent is None

    def activate(self) -> None:
        self.is_active = True

    def deactivate(self) -> None:
        self.is_active = False
