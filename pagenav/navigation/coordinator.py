"""Coordination between navigation clicks and the viewport tracking service."""

from __future__ import annotations

import asyncio
import logging
from enum import Enum

from .errors import CoordinatorStateError, ScrollSpyNotAttachedError
from .options import NavigationOptions
from .registry import SectionRegistry
from .scroll_spy import ScrollSpy, SectionCenteredEvent, fragment_of
from .section import Section
from .tracker import ActiveSectionTracker
from .types import ChangeCallback, ScrollSpyFactory

logger = logging.getLogger(__name__)


class CoordinatorState(str, Enum):
    """Lifecycle of a :class:`ScrollSpyCoordinator`."""

    UNINITIALIZED = "uninitialized"
    SPYING = "spying"
    DISPOSED = "disposed"


class ScrollSpyCoordinator:
    """Page content navigation backed by a viewport tracking service.

    The coordinator owns the section registry and the active section
    tracker. It reconciles the two sources of activation: clicks on
    navigation links (activate, then scroll) and centered notifications from
    the tracking service (activate only).

    Args:
        scroll_spy_factory: Callable creating the tracking service. It is
            called once, by :meth:`attach`.
        options: Navigation options. Defaults are used when omitted.
        on_change: Render collaborator invoked whenever the state changes.
    """

    def __init__(
        self,
        scroll_spy_factory: ScrollSpyFactory,
        options: NavigationOptions | None = None,
        on_change: ChangeCallback | None = None,
    ) -> None:
        self.options = options or NavigationOptions()
        self._on_change = on_change
        self.registry = SectionRegistry(on_change=self._signal)
        self.tracker = ActiveSectionTracker(
            self.registry, on_change=self._signal
        )

        self._factory = scroll_spy_factory
        self._scroll_spy: ScrollSpy | None = None
        self._state = CoordinatorState.UNINITIALIZED

        # Sections ever added; the default rule only applies to the first.
        self._added_count = 0

        # Work that could not reach the tracking service yet.
        self._pending_active: str | None = None
        self._pending_scroll: str | None = None

        # Fire-and-forget calls still in flight.
        self._background: set[asyncio.Task[None]] = set()

    @property
    def state(self) -> CoordinatorState:
        return self._state

    @property
    def scroll_spy(self) -> ScrollSpy | None:
        """The tracking service, ``None`` until attached or once disposed."""

        return self._scroll_spy

    @property
    def sections(self) -> tuple[Section, ...]:
        return self.registry.sections

    @property
    def active_section(self) -> Section | None:
        return self.registry.active_section

    def update(self) -> None:
        """Ask the render collaborator to redraw."""

        self._signal()

    def select_active(self, section_id: str | None) -> bool:
        """Activate ``section_id``; unknown identifiers are ignored."""

        return self.tracker.select_active(section_id)

    def add_section(
        self,
        name: str,
        section_id: str,
        parent: Section | str | None = None,
        notify: bool = True,
    ) -> Section:
        """Register a section and apply the default activation rules.

        A section that the tracking service already reports as centered is
        activated right away. Otherwise, when ``activate_first_as_default``
        is set and this is the first section ever added, it is activated
        and the tracking service is told to treat it as active.

        Args:
            name: Label displayed in the navigation.
            section_id: Unique identifier of the section.
            parent: Parent section or its identifier.
            notify: Signal the change to the render collaborator.

        Returns:
            The registered section.
        """

        section = self.registry.add_section(
            name, section_id, parent=parent, notify=False
        )

        self._added_count += 1
        first = self._added_count == 1

        spy = self._scroll_spy
        centered = spy.centered_section if spy is not None else None

        if centered and section.section_id == centered:
            self.tracker.select_active(section.section_id)
        elif first and self.options.activate_first_as_default:
            self.tracker.select_active(section.section_id)
            self._announce_active(section.section_id)

        if notify:
            self._signal()
        return section

    def remove_section(
        self, section_id: str, notify: bool = True
    ) -> list[Section]:
        """Remove a section and its descendants from the navigation."""

        return self.registry.remove_section(section_id, notify=notify)

    async def attach(self) -> None:
        """Create the tracking service and start following the viewport.

        Called once the navigation has been rendered for the first time.
        Subsequent calls while spying do nothing.

        Throws:
            CoordinatorStateError: If the coordinator was disposed.
        """

        if self._state is CoordinatorState.DISPOSED:
            raise CoordinatorStateError("Cannot attach a disposed navigation")
        if self._state is CoordinatorState.SPYING:
            return

        spy = self._factory()
        spy.add_centered_handler(self._on_section_centered)
        self._scroll_spy = spy
        self._state = CoordinatorState.SPYING
        logger.debug("Scroll spy attached")

        if self.options.section_selector:
            await spy.start_observing(self.options.section_selector)

        await self._flush_pending_active(spy)

        # Align with whatever is already in view (e.g. back navigation).
        self.tracker.select_active(spy.centered_section)

        if self._pending_scroll is not None:
            pending, self._pending_scroll = self._pending_scroll, None
            await spy.scroll_to_section(pending)

    async def click(self, section_id: str) -> None:
        """Handle a click on the navigation link of ``section_id``.

        The section is highlighted before the scroll starts. The returned
        coroutine completes when the scroll has finished.
        """

        self.tracker.select_active(section_id)
        await self.scroll_to_section(section_id)

    async def scroll_to_section(self, section_id: str) -> None:
        """Scroll to the section registered as ``section_id``."""

        if not section_id:
            return

        spy = self._require_scroll_spy(section_id)
        if spy is not None:
            await self._flush_pending_active(spy)
            await spy.scroll_to_section(section_id)

    async def scroll_to_uri(self, uri: str) -> None:
        """Scroll to the section named by the fragment of ``uri``.

        A URI without a fragment does not scroll.
        """

        await self.scroll_to_section(fragment_of(uri))

    async def settle(self) -> None:
        """Deliver deferred announcements and wait for calls in flight."""

        if self._scroll_spy is not None:
            await self._flush_pending_active(self._scroll_spy)

        while self._background:
            tasks = list(self._background)
            await asyncio.gather(*tasks, return_exceptions=True)
            self._background.difference_update(tasks)

    async def dispose(self) -> None:
        """Release the tracking service. Safe to call more than once."""

        if self._state is CoordinatorState.DISPOSED:
            return

        spy = self._scroll_spy
        self._state = CoordinatorState.DISPOSED
        if spy is None:
            return

        await self.settle()
        self._scroll_spy = None
        spy.remove_centered_handler(self._on_section_centered)
        await spy.dispose()
        logger.debug("Scroll spy disposed")

    async def __aenter__(self) -> ScrollSpyCoordinator:
        await self.attach()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.dispose()

    def _on_section_centered(self, event: SectionCenteredEvent) -> None:
        self.tracker.select_active(event.section_id)

    def _require_scroll_spy(self, section_id: str) -> ScrollSpy | None:
        """Return the tracking service, deferring the scroll when missing."""

        if self._scroll_spy is not None:
            return self._scroll_spy

        if self.options.strict or self._state is CoordinatorState.DISPOSED:
            raise ScrollSpyNotAttachedError(
                f"Cannot scroll to {section_id!r}: navigation is "
                f"{self._state.value}"
            )

        logger.warning(
            f"Scroll to {section_id!r} deferred until the navigation attaches"
        )
        self._pending_scroll = section_id
        return None

    def _announce_active(self, section_id: str) -> None:
        """Tell the tracking service about ``section_id`` without waiting."""

        spy = self._scroll_spy
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            loop = None

        if spy is None or loop is None:
            self._pending_active = section_id
            return

        task = loop.create_task(self._send_active(spy, section_id))
        self._background.add(task)
        task.add_done_callback(self._background.discard)

    async def _flush_pending_active(self, spy: ScrollSpy) -> None:
        """Send the deferred default announcement if it still holds.

        A registered centered section wins over the default, and so does
        any activation that happened since the default was chosen.
        """

        pending, self._pending_active = self._pending_active, None
        if pending is None:
            return

        active = self.active_section
        if spy.centered_section in self.registry or active is None:
            return
        if active.section_id != pending:
            return

        await self._send_active(spy, pending)

    async def _send_active(self, spy: ScrollSpy, section_id: str) -> None:
        try:
            await spy.set_active(section_id)
        except Exception:
            # Nobody awaits this call, so the failure is only logged.
            logger.exception(f"Failed to mark {section_id!r} as active")

    def _signal(self) -> None:
        if self._on_change is not None:
            self._on_change()
