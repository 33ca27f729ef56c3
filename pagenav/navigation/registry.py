"""Registry owning section identity, hierarchy and ordering."""

from __future__ import annotations

import logging
from typing import Iterator

from .errors import (
    DuplicateSectionError,
    InvalidSectionError,
    UnknownSectionError,
)
from .section import Section
from .types import ChangeCallback, SectionIndex, SectionList

logger = logging.getLogger(__name__)

# Distance between the order keys of two successive root sections. Children
# are keyed inside their parent's window so roots never need renumbering.
ROOT_ORDER_SPACING = 1_000_000


def _noop() -> None:
    pass


class SectionRegistry:
    """Flat, insertion-ordered collection of sections.

    The hierarchy is kept as parent identifiers on each section; children are
    discovered by filtering. Level and order keys are recomputed after every
    structural change.
    """

    def __init__(self, on_change: ChangeCallback | None = None) -> None:
        self._sections: SectionList = []
        self._index: SectionIndex = {}
        self._on_change = on_change or _noop

    def __len__(self) -> int:
        return len(self._sections)

    def __iter__(self) -> Iterator[Section]:
        return iter(tuple(self._sections))

    def __contains__(self, section_id: object) -> bool:
        return section_id in self._index

    @property
    def sections(self) -> tuple[Section, ...]:
        """Sections in registration order."""

        return tuple(self._sections)

    @property
    def active_section(self) -> Section | None:
        """First active section, ``None`` when nothing is active."""

        return next((s for s in self._sections if s.is_active), None)

    def get(self, section_id: str | None) -> Section | None:
        """Return the section registered as ``section_id`` if any."""

        if not section_id:
            return None
        return self._index.get(section_id)

    def children(self, section_id: str) -> SectionList:
        """Return the direct children of ``section_id`` in insertion order."""

        return [s for s in self._sections if s.parent == section_id]

    def ordered(self) -> SectionList:
        """Return the sections sorted by their order key (outline order)."""

        return sorted(self._sections, key=lambda s: s.order)

    def add_section(
        self,
        name: str,
        section_id: str,
        parent: Section | str | None = None,
        notify: bool = True,
    ) -> Section:
        """Register a new section.

        Args:
            name: Label displayed in the navigation.
            section_id: Unique identifier of the section.
            parent: Parent section or its identifier. It must already be
                registered.
            notify: Signal the change to the render collaborator.

        Returns:
            The registered section with its level and order computed.

        Throws:
            InvalidSectionError: If ``section_id`` is empty.
            DuplicateSectionError: If ``section_id`` is already registered.
            UnknownSectionError: If ``parent`` is not registered.
        """

        if not section_id:
            raise InvalidSectionError("Section identifier must not be empty")
        if section_id in self._index:
            raise DuplicateSectionError(section_id)

        if isinstance(parent, Section):
            parent_id: str | None = parent.section_id
        else:
            parent_id = parent
        if parent_id is not None and parent_id not in self._index:
            raise UnknownSectionError(parent_id)

        section = Section(section_id=section_id, name=name, parent=parent_id)
        self._sections.append(section)
        self._index[section_id] = section
        self._recompute()
        logger.debug(
            f"Added section {section_id!r} at level {section.level} "
            f"with order {section.order}"
        )

        if notify:
            self._on_change()
        return section

    def remove_section(
        self, section_id: str, notify: bool = True
    ) -> SectionList:
        """Remove a section together with all of its descendants.

        Removed sections are deactivated. No remaining section is promoted
        to active in their place.

        Args:
            section_id: Identifier of the section to remove.
            notify: Signal the change to the render collaborator.

        Returns:
            The removed sections, empty when ``section_id`` is unknown.
        """

        root = self.get(section_id)
        if root is None:
            return []

        # Collect the whole subtree before touching the list.
        doomed = {root.section_id}
        changed = True
        while changed:
            changed = False
            for item in self._sections:
                if item.parent in doomed and item.section_id not in doomed:
                    doomed.add(item.section_id)
                    changed = True

        removed = [s for s in self._sections if s.section_id in doomed]
        for item in removed:
            item.deactivate()
            del self._index[item.section_id]
        self._sections = [
            s for s in self._sections if s.section_id not in doomed
        ]
        self._recompute()
        logger.debug(f"Removed sections {[s.section_id for s in removed]}")

        if notify:
            self._on_change()
        return removed

    def _recompute(self) -> None:
        """Assign level and order keys to every registered section."""

        children: dict[str | None, SectionList] = {}
        for item in self._sections:
            children.setdefault(item.parent, []).append(item)

        order = 0
        for item in children.get(None, []):
            self._assign(children, item, order, ROOT_ORDER_SPACING, 0)
            order += ROOT_ORDER_SPACING

    def _assign(
        self,
        children: dict[str | None, SectionList],
        section: Section,
        order: int,
        window: int,
        level: int,
    ) -> None:
        section.order = order
        section.level = level

        # Split the window evenly, keeping the first slot for the parent.
        own = children.get(section.section_id, [])
        child_window = window // (len(own) + 1)
        for idx, child in enumerate(own, start=1):
            self._assign(
                children,
                child,
                order + idx * child_window,
                child_window,
                level + 1,
            )
