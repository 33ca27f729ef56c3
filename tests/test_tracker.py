"""Tests for the active section tracker."""

from __future__ import annotations

import random

from pagenav.navigation import ActiveSectionTracker, SectionRegistry


def _tracker(*ids: str) -> tuple[ActiveSectionTracker, list[str]]:
    """Return a tracker over root sections ``ids`` and its render log."""

    calls: list[str] = []
    registry = SectionRegistry()
    for section_id in ids:
        registry.add_section(section_id.upper(), section_id)
    tracker = ActiveSectionTracker(
        registry, on_change=lambda: calls.append("render")
    )
    return tracker, calls


def _active_ids(tracker: ActiveSectionTracker) -> list[str]:
    return [s.section_id for s in tracker.registry if s.is_active]


def test_select_active_switches_single_section() -> None:
    tracker, calls = _tracker("s1", "s2", "s3")

    assert tracker.select_active("s1") is True
    assert tracker.select_active("s3") is True

    assert _active_ids(tracker) == ["s3"]
    assert tracker.active_section.section_id == "s3"  # type: ignore
    assert calls == ["render", "render"]


def test_select_active_is_idempotent() -> None:
    tracker, _ = _tracker("s1", "s2")

    tracker.select_active("s2")
    tracker.select_active("s2")

    assert _active_ids(tracker) == ["s2"]


def test_unknown_ids_change_nothing() -> None:
    """Empty and unknown identifiers are ignored without raising."""

    tracker, calls = _tracker("s1", "s2")
    tracker.select_active("s1")
    calls.clear()

    assert tracker.select_active("") is False
    assert tracker.select_active(None) is False
    assert tracker.select_active("nonexistent") is False

    assert _active_ids(tracker) == ["s1"]
    assert calls == []


def test_at_most_one_active_under_random_selection() -> None:
    """Any sequence of selections leaves at most one active section."""

    ids = ["a", "b", "c", "d"]
    tracker, _ = _tracker(*ids)
    rng = random.Random(7)

    for _ in range(200):
        tracker.select_active(rng.choice(ids + ["", "zzz"]))
        assert len(_active_ids(tracker)) <= 1


def test_clear_deactivates_everything() -> None:
    tracker, calls = _tracker("s1", "s2")

    assert tracker.clear() is False
    tracker.select_active("s2")
    assert tracker.clear() is True

    assert tracker.active_section is None
    assert calls == ["render", "render"]
