"""Slot service used by the CLI and the quick menu.

Every public method is one full cycle: resolve the scope, load its slot
set from disk, change it, write it back.  No slot data is kept between
calls, so each call sees whatever is on disk when it starts.  Inside
``pinned_scope()`` the scope itself is resolved only once.
"""

from __future__ import annotations

import os
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from .constants import MAX_ASSIGNABLE_SLOT, QUICK_MENU_LIMIT
from .features.labels import MenuItem, menu_items
from .features.navigator import next_slot, prev_slot
from .features.scope import ScopeResolution, ScopeResolver
from .features.slot_manager import SlotManager
from .log import logger
from .models import Outcome, Problem
from .persistence import SlotStore


class Harpoon:
    """Pin, list and jump between files of the current project."""

    def __init__(
        self,
        store: SlotStore,
        resolver: ScopeResolver,
        *,
        start: Path | None = None,
    ) -> None:
        self.store = store
        self.resolver = resolver
        self.start = start
        self._pinned: ScopeResolution | None = None

    # -- scope ----------------------------------------------------------------

    def scope(self) -> ScopeResolution:
        if self._pinned is not None:
            return self._pinned
        return self.resolver.resolve(self.start)

    @contextmanager
    def pinned_scope(self) -> Iterator[ScopeResolution]:
        """Resolve the scope once and reuse it for every call in the block.

        Only the scope is reused; slot files are still read on every call.
        """
        self._pinned = None
        self._pinned = self.scope()
        try:
            yield self._pinned
        finally:
            self._pinned = None

    def _load(self) -> tuple[ScopeResolution, SlotManager, list[Problem]]:
        scope = self.scope()
        entries, problem = self.store.load_checked(scope.key)
        notices = list(scope.problems)
        if problem is not None:
            notices.append(problem)
        return scope, SlotManager(entries), notices

    def _save(self, scope: ScopeResolution, manager: SlotManager) -> bool:
        return self.store.save(scope.key, manager.entries)

    # -- path normalisation ---------------------------------------------------

    @staticmethod
    def to_stored(path: str | Path, root: Path | None) -> str:
        """Stored form of *path*: root-relative when inside *root*, else absolute."""
        absolute = Path(os.path.abspath(os.path.expanduser(str(path))))
        if root is None:
            return absolute.as_posix()
        # git reports a symlink-free root, so also compare with the directory
        # resolved; the file itself is left alone in case it is a link.
        candidates = (
            (absolute, Path(os.path.abspath(root))),
            (absolute.parent.resolve() / absolute.name, Path(root).resolve()),
        )
        for candidate, base in candidates:
            try:
                return candidate.relative_to(base).as_posix()
            except ValueError:
                continue
        return absolute.as_posix()

    @staticmethod
    def to_absolute(stored: str, root: Path | None) -> Path:
        path = Path(stored)
        if path.is_absolute() or root is None:
            return path
        return Path(root) / path

    # -- operations -----------------------------------------------------------

    def assign(self, slot: int, path: str | Path) -> Outcome:
        """Put *path* in *slot* (1-9), replacing whatever was there."""
        if not 1 <= slot <= MAX_ASSIGNABLE_SLOT:
            return Outcome.failure(
                Problem.INVALID_SLOT,
                f"Slot must be between 1 and {MAX_ASSIGNABLE_SLOT}, got {slot}",
            )
        scope, manager, notices = self._load()
        stored = self.to_stored(path, scope.project_root)
        manager.set(slot, stored)
        return self._finish(scope, manager, notices, slot, f"{stored} -> slot {slot}")

    def goto_slot(self, slot: int) -> Outcome:
        """Return the absolute path pinned at *slot*, checking it still exists."""
        scope, manager, notices = self._load()
        stored = manager.get(slot)
        if stored is None:
            return self._with(
                Outcome.failure(Problem.SLOT_EMPTY, f"Slot {slot} is empty"), notices
            )
        target = self.to_absolute(stored, scope.project_root)
        if not target.exists():
            return self._with(
                Outcome.failure(
                    Problem.SLOT_FILE_MISSING,
                    f"{stored} not found",
                    value=target,
                ),
                notices,
            )
        return self._with(Outcome.success(target, str(target)), notices)

    def delete_slot(self, slot: int) -> Outcome:
        scope, manager, notices = self._load()
        if manager.get(slot) is None:
            return self._with(Outcome.success(None, f"Slot {slot} was empty"), notices)
        manager.remove(slot)
        return self._finish(scope, manager, notices, slot, f"Slot {slot} deleted")

    def add_current_file(self, path: str | Path) -> Outcome:
        """Pin *path* in the next free slot unless it is pinned already."""
        scope, manager, notices = self._load()
        stored = self.to_stored(path, scope.project_root)
        result = manager.add_file(stored)
        if result.already_present:
            return self._with(
                Outcome.failure(
                    Problem.DUPLICATE_ADD,
                    f"{stored} is already in slot {result.number}",
                    value=result.number,
                ),
                notices,
            )
        return self._finish(
            scope, manager, notices, result.number, f"{stored} -> slot {result.number}"
        )

    def next(self, current: str | Path) -> Outcome:
        return self._navigate(current, forward=True)

    def prev(self, current: str | Path) -> Outcome:
        return self._navigate(current, forward=False)

    def _navigate(self, current: str | Path, *, forward: bool) -> Outcome:
        scope, manager, notices = self._load()
        stored = self.to_stored(current, scope.project_root)
        step = next_slot if forward else prev_slot
        number = step(manager.entries, stored)
        if number is None:
            return self._with(
                Outcome.failure(Problem.NO_SLOTS, "No files pinned"), notices
            )
        target = self.to_absolute(manager.get(number) or "", scope.project_root)
        return self._with(
            Outcome.success((number, target), f"slot {number}: {target}"), notices
        )

    def list_for_menu(self, limit: int = QUICK_MENU_LIMIT) -> list[MenuItem]:
        _scope, manager, _notices = self._load()
        return menu_items(manager.entries, limit)

    def clear_all(self) -> Outcome:
        scope = self.scope()
        if not self.store.save(scope.key, []):
            return Outcome.failure(Problem.SAVE_FAILED, "Could not clear slots")
        return self._with(Outcome.success(None, "All slots cleared"), scope.problems)

    def open_raw_store_file(self) -> Outcome:
        """Return the backing file for the current scope, creating it if absent."""
        scope = self.scope()
        path = self.store.ensure_file(scope.key)
        if path is None:
            return self._with(
                Outcome.failure(Problem.SAVE_FAILED, f"Could not create {scope.key}"),
                scope.problems,
            )
        return self._with(Outcome.success(path, str(path)), scope.problems)

    # -- helpers --------------------------------------------------------------

    def _finish(
        self,
        scope: ScopeResolution,
        manager: SlotManager,
        notices: list[Problem],
        value: object,
        message: str,
    ) -> Outcome:
        if not self._save(scope, manager):
            return self._with(
                Outcome.failure(Problem.SAVE_FAILED, f"Could not write {scope.key}"),
                notices,
            )
        logger.debug("%s [%s]", message, scope.key)
        return self._with(Outcome.success(value, message), notices)

    @staticmethod
    def _with(outcome: Outcome, notices: list[Problem]) -> Outcome:
        outcome.notices = list(notices)
        return outcome
