"""Cyclic next/previous navigation over the ordered slot set."""

from __future__ import annotations

from ..models import BookmarkEntry
from .slot_manager import SlotManager


def _step(entries: list[BookmarkEntry], current: str, offset: int) -> int | None:
    ordered = SlotManager(entries).list_ordered()
    if not ordered:
        return None
    files = [e.filepath for e in ordered]
    index = files.index(current) if current in files else -1
    return ordered[(index + offset) % len(ordered)].number


def next_slot(entries: list[BookmarkEntry], current: str) -> int | None:
    """Slot after *current*; the lowest slot when *current* is not pinned."""
    return _step(entries, current, 1)


def prev_slot(entries: list[BookmarkEntry], current: str) -> int | None:
    """Slot before *current*; the highest slot when *current* is not pinned."""
    return _step(entries, current, -1)
