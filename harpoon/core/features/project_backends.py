"""Project detection backends.

A backend answers one question: given a starting directory, which project
(if any) is it in?  The backend is picked by name from preferences.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from ..constants import PROJECT_MARKERS
from ..log import logger
from . import git_integration


@dataclass(frozen=True)
class ProjectInfo:
    """A detected project: display *name* and absolute *root*."""

    name: str
    root: Path


class ProjectBackend(Protocol):
    name: str

    def detect(self, start: Path) -> ProjectInfo | None: ...


class GitProjectBackend:
    """Projects are git work trees, named after their top-level directory."""

    name = "git"

    def detect(self, start: Path) -> ProjectInfo | None:
        top = git_integration.toplevel(cwd=str(start))
        if not top:
            return None
        root = Path(top)
        return ProjectInfo(name=root.name, root=root)


class MarkerProjectBackend:
    """Walk upwards until a directory holds one of the root *markers*."""

    name = "markers"

    def __init__(self, markers: tuple[str, ...] = PROJECT_MARKERS) -> None:
        self.markers = markers

    def detect(self, start: Path) -> ProjectInfo | None:
        start = start if start.is_dir() else start.parent
        for candidate in (start, *start.parents):
            if any((candidate / marker).exists() for marker in self.markers):
                return ProjectInfo(name=candidate.name, root=candidate)
        return None


class NullProjectBackend:
    """Never finds a project; every file lands in the fallback scope."""

    name = "none"

    def detect(self, start: Path) -> ProjectInfo | None:  # noqa: ARG002
        return None


BACKENDS: dict[str, type] = {
    GitProjectBackend.name: GitProjectBackend,
    MarkerProjectBackend.name: MarkerProjectBackend,
    NullProjectBackend.name: NullProjectBackend,
}


def get_backend(name: str) -> ProjectBackend:
    """Instantiate the backend registered under *name* (``none`` if unknown)."""
    cls = BACKENDS.get((name or "").strip().lower())
    if cls is None:
        logger.warning("unknown project backend %r, using 'none'", name)
        cls = NullProjectBackend
    return cls()
