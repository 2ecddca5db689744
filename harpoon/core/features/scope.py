"""Scope key resolution.

A scope key picks which slot file applies: the project name, optionally
joined with the current branch, flattened into a safe file name.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Callable

from ..constants import (
    BRANCH_DELIMITER,
    DEFAULT_FALLBACK_NAME,
    NO_PROJECT_NAMES,
    PATH_SEPARATORS,
    SEPARATOR_TOKEN,
)
from ..log import logger
from ..models import Problem

if TYPE_CHECKING:
    from .project_backends import ProjectBackend

BranchProvider = Callable[[Path], "str | None"]


def sanitize(text: str) -> str:
    """Replace every path separator in *text* so it is a flat file name."""
    for sep in PATH_SEPARATORS:
        text = text.replace(sep, SEPARATOR_TOKEN)
    return text


@dataclass
class ScopeResolution:
    """The resolved scope plus what had to be guessed along the way."""

    key: str
    project_name: str | None = None
    project_root: Path | None = None
    branch: str = ""
    problems: list[Problem] = field(default_factory=list)


class ScopeResolver:
    """Turn the current working context into a scope key.

    Parameters
    ----------
    backend:
        Project detection backend.
    branch_provider:
        Called with the project root; returns the branch name or None.
        Exceptions from it are treated as a failed lookup.
    separate_by_branch:
        Give every branch its own slot set.
    fallback_name:
        Called for the scope name when no project is detected.
    """

    def __init__(
        self,
        backend: ProjectBackend,
        branch_provider: BranchProvider,
        *,
        separate_by_branch: bool = True,
        fallback_name: Callable[[], str] = lambda: DEFAULT_FALLBACK_NAME,
    ) -> None:
        self.backend = backend
        self.branch_provider = branch_provider
        self.separate_by_branch = separate_by_branch
        self.fallback_name = fallback_name

    def resolve(self, start: Path | None = None) -> ScopeResolution:
        start = Path(start) if start is not None else Path.cwd()
        project = self.backend.detect(start)

        if project is None or (project.name or "").strip().lower() in NO_PROJECT_NAMES:
            logger.debug("no project detected from %s, using fallback scope", start)
            return ScopeResolution(
                key=sanitize(self.fallback_name()),
                problems=[Problem.PROJECT_NOT_DETECTED],
            )

        resolution = ScopeResolution(
            key=sanitize(project.name),
            project_name=project.name,
            project_root=project.root,
        )
        if self.separate_by_branch:
            branch = self._branch(project.root)
            if branch is None:
                resolution.problems.append(Problem.BRANCH_LOOKUP_FAILED)
                branch = ""
            resolution.branch = branch
            resolution.key = f"{resolution.key}{BRANCH_DELIMITER}{sanitize(branch)}"
        return resolution

    def resolve_key(self, start: Path | None = None) -> str:
        return self.resolve(start).key

    def _branch(self, root: Path) -> str | None:
        try:
            return self.branch_provider(root) or None
        except Exception:
            logger.debug("branch lookup failed for %s", root, exc_info=True)
            return None
