"""Register sections described by outline files."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Iterator

from pagenav.config import load_structured_file
from pagenav.navigation import ScrollSpyCoordinator, Section

JSONDict = dict[str, Any]
OutlineEntry = tuple[str, str, str | None]

logger = logging.getLogger(__name__)


def iter_outline(
    entries: list[JSONDict], parent: str | None = None
) -> Iterator[OutlineEntry]:
    """Flatten nested outline entries depth-first.

    Args:
        entries: Outline entries, each with ``id``, ``name`` and optional
            ``children``.
        parent: Identifier of the enclosing entry.

    Yields:
        ``(name, id, parent_id)`` tuples, parents before their children.

    Throws:
        ValueError: If an entry is not a mapping or lacks an ``id``.
    """

    for entry in entries:
        if not isinstance(entry, dict) or not entry.get("id"):
            raise ValueError(f"Outline entry without an id: {entry!r}")

        section_id = str(entry["id"])
        name = str(entry.get("name") or section_id)
        yield name, section_id, parent

        yield from iter_outline(entry.get("children") or [], section_id)


def load_outline(path: Path) -> list[JSONDict]:
    """Return the ``sections`` list of an outline file."""

    data = load_structured_file(path)
    sections = data.get("sections") or []
    if not isinstance(sections, list):
        raise ValueError(f"{path}: 'sections' must be a list")
    return sections


def register_outline(
    navigation: ScrollSpyCoordinator, entries: list[JSONDict]
) -> list[Section]:
    """Add every outline entry to ``navigation``.

    The render collaborator is signalled once, after the last section.
    """

    added = [
        navigation.add_section(name, section_id, parent=parent, notify=False)
        for name, section_id, parent in iter_outline(entries)
    ]
    logger.debug(f"Registered {len(added)} sections from outline")

    navigation.update()
    return added
