"""Short display labels for the quick menu."""

from __future__ import annotations

from dataclasses import dataclass

from ..constants import QUICK_MENU_LIMIT
from ..models import BookmarkEntry
from .slot_manager import SlotManager


@dataclass(frozen=True)
class MenuItem:
    """One quick-menu row."""

    number: int
    label: str
    filepath: str


def _basename(filepath: str) -> str:
    return filepath.rsplit("/", 1)[-1]


def format_label(filepath: str, peers: list[str]) -> str:
    """Return the basename of *filepath*, plus its directory if a peer shares it.

    ``/x/util.py`` next to ``/y/util.py`` becomes ``util.py at x``.
    """
    if "/" not in filepath:
        return filepath
    basename = _basename(filepath)
    if any(_basename(peer) == basename for peer in peers):
        dirs = [part for part in filepath.split("/")[:-1] if part]
        return f"{basename} at {'/'.join(dirs)}"
    return basename


def menu_items(
    entries: list[BookmarkEntry], limit: int = QUICK_MENU_LIMIT
) -> list[MenuItem]:
    """Label the first *limit* slots by number, disambiguating within them."""
    window = SlotManager(entries).list_ordered()[:limit]
    items: list[MenuItem] = []
    for i, entry in enumerate(window):
        peers = [e.filepath for j, e in enumerate(window) if j != i]
        items.append(
            MenuItem(entry.number, format_label(entry.filepath, peers), entry.filepath)
        )
    return items
