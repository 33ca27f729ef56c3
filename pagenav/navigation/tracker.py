"""Single active section bookkeeping."""

from __future__ import annotations

import logging

from .registry import SectionRegistry
from .section import Section
from .types import ChangeCallback

logger = logging.getLogger(__name__)


class ActiveSectionTracker:
    """Keep at most one section of a registry active.

    Every activation, whether it comes from a click or from the tracking
    service, goes through :meth:`select_active`.
    """

    def __init__(
        self,
        registry: SectionRegistry,
        on_change: ChangeCallback | None = None,
    ) -> None:
        self.registry = registry
        self._on_change = on_change

    @property
    def active_section(self) -> Section | None:
        return self.registry.active_section

    def select_active(self, section_id: str | None) -> bool:
        """Make ``section_id`` the only active section.

        Args:
            section_id: Identifier of the section to activate.

        Returns:
            ``True`` when the section exists and is now active, ``False``
            when the identifier is empty or unknown and nothing changed.
        """

        target = self.registry.get(section_id)
        if target is None:
            # Fragments often point at sections that are not mounted yet.
            logger.debug(f"Ignoring activation of unknown {section_id!r}")
            return False

        for item in self.registry:
            item.deactivate()
        target.activate()

        self._signal()
        return True

    def clear(self) -> bool:
        """Deactivate every section.

        Returns:
            ``True`` if a section was active before the call.
        """

        current = self.active_section
        if current is None:
            return False

        for item in self.registry:
            item.deactivate()

        self._signal()
        return True

    def _signal(self) -> None:
        if self._on_change is not None:
            self._on_change()
