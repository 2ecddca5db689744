"""Plain data types passed between the store, the features and the UIs."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


@dataclass(frozen=True)
class BookmarkEntry:
    """One pinned file: slot *number* and its stored *filepath*."""

    number: int
    filepath: str


class Problem(str, Enum):
    """Why an operation fell back instead of doing the obvious thing."""

    PROJECT_NOT_DETECTED = "project_not_detected"
    BRANCH_LOOKUP_FAILED = "branch_lookup_failed"
    STORE_FILE_CORRUPT = "store_file_corrupt"
    SLOT_FILE_MISSING = "slot_file_missing"
    DUPLICATE_ADD = "duplicate_add"
    SLOT_EMPTY = "slot_empty"
    INVALID_SLOT = "invalid_slot"
    NO_SLOTS = "no_slots"
    SAVE_FAILED = "save_failed"


@dataclass
class Outcome:
    """Result of a service call.

    ``ok`` is False only when the requested action did not happen.
    Degradations that still produced a value (fallback scope, empty set
    after a corrupt file) keep ``ok`` True and are listed in ``notices``.
    """

    ok: bool
    value: Any = None
    problem: Problem | None = None
    message: str = ""
    notices: list[Problem] | None = None

    @classmethod
    def success(cls, value: Any = None, message: str = "") -> Outcome:
        return cls(ok=True, value=value, message=message)

    @classmethod
    def failure(cls, problem: Problem, message: str, value: Any = None) -> Outcome:
        return cls(ok=False, value=value, problem=problem, message=message)
