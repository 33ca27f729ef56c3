"""Contract of the viewport tracking service and an in-memory version."""

from __future__ import annotations

import logging
from typing import Protocol, runtime_checkable
from urllib.parse import urlsplit

from attrs import define, field

from .types import CenteredHandler

logger = logging.getLogger(__name__)


@define(slots=True, frozen=True)
class SectionCenteredEvent:
    """Raised when the viewport settles on a section.

    Attributes:
        section_id: Identifier of the centered section.
    """

    section_id: str


def fragment_of(uri: str) -> str:
    """Return the fragment of ``uri`` or an empty string."""

    return urlsplit(uri).fragment


@runtime_checkable
class ScrollSpy(Protocol):
    """Service observing the viewport and reporting the centered section."""

    @property
    def centered_section(self) -> str | None: ...

    async def start_observing(self, selector: str) -> None: ...

    async def scroll_to_section(self, section_id: str) -> None: ...

    async def set_active(self, section_id: str) -> None: ...

    def add_centered_handler(self, handler: CenteredHandler) -> None: ...

    def remove_centered_handler(self, handler: CenteredHandler) -> None: ...

    async def dispose(self) -> None: ...


@define(slots=True)
class MemoryScrollSpy:
    """Tracking service without a viewport.

    Scrolling settles immediately: the target becomes the centered section
    and the centered event is raised. :meth:`center` simulates the user
    scrolling a section into view.

    Attributes:
        centered_section: Identifier of the section currently centered.
        selector: Selector passed to :meth:`start_observing`.
        active_section: Last identifier passed to :meth:`set_active`.
        scrolled: Every identifier scrolled to, in request order.
        disposed: Whether :meth:`dispose` was called.
    """

    centered_section: str | None = None
    selector: str | None = None
    active_section: str | None = None
    scrolled: list[str] = field(factory=list)
    disposed: bool = False
    _handlers: list[CenteredHandler] = field(factory=list, repr=False)

    @property
    def observing(self) -> bool:
        return self.selector is not None and not self.disposed

    @property
    def handler_count(self) -> int:
        return len(self._handlers)

    async def start_observing(self, selector: str) -> None:
        logger.debug(f"Observing elements matching {selector!r}")
        self.selector = selector

    async def scroll_to_section(self, section_id: str) -> None:
        self.scrolled.append(section_id)
        self.center(section_id)

    async def set_active(self, section_id: str) -> None:
        self.active_section = section_id

    def add_centered_handler(self, handler: CenteredHandler) -> None:
        self._handlers.append(handler)

    def remove_centered_handler(self, handler: CenteredHandler) -> None:
        if handler in self._handlers:
            self._handlers.remove(handler)

    def center(self, section_id: str) -> None:
        """Report ``section_id`` as the section centered in the viewport."""

        if self.disposed or section_id == self.centered_section:
            return

        self.centered_section = section_id
        event = SectionCenteredEvent(section_id)
        for handler in list(self._handlers):
            handler(event)

    async def dispose(self) -> None:
        self._handlers.clear()
        self.disposed = True
