"""In-memory operations on one loaded slot set."""

from __future__ import annotations

from dataclasses import dataclass

from ..models import BookmarkEntry


@dataclass(frozen=True)
class AddResult:
    """Outcome of ``SlotManager.add_file``."""

    number: int
    already_present: bool = False


class SlotManager:
    """Mutate a slot set loaded by ``SlotStore``.

    The manager never touches disk; the caller saves ``entries`` back.
    """

    def __init__(self, entries: list[BookmarkEntry] | None = None) -> None:
        self._entries: list[BookmarkEntry] = list(entries or [])

    @property
    def entries(self) -> list[BookmarkEntry]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, number: int) -> str | None:
        for entry in self._entries:
            if entry.number == number:
                return entry.filepath
        return None

    def set(self, number: int, filepath: str) -> None:
        """Point slot *number* at *filepath*, appending the slot if new."""
        if number < 1:
            raise ValueError(f"slot numbers start at 1, got {number}")
        for i, entry in enumerate(self._entries):
            if entry.number == number:
                self._entries[i] = BookmarkEntry(number, filepath)
                return
        self._entries.append(BookmarkEntry(number, filepath))

    def remove(self, number: int) -> None:
        self._entries = [e for e in self._entries if e.number != number]

    def next_available_number(self) -> int:
        """One past the highest slot; freed numbers are not reused."""
        if not self._entries:
            return 1
        return max(e.number for e in self._entries) + 1

    def find(self, filepath: str) -> int | None:
        """Return the slot holding *filepath*, if any."""
        for entry in self._entries:
            if entry.filepath == filepath:
                return entry.number
        return None

    def add_file(self, filepath: str) -> AddResult:
        existing = self.find(filepath)
        if existing is not None:
            return AddResult(number=existing, already_present=True)
        number = self.next_available_number()
        self.set(number, filepath)
        return AddResult(number=number)

    def list_ordered(self) -> list[BookmarkEntry]:
        return sorted(self._entries, key=lambda e: e.number)
