"""Shared helpers used by the CLI and the quick menu."""

from __future__ import annotations

from pathlib import Path

from .core.features import git_integration
from .core.features.project_backends import get_backend
from .core.features.scope import ScopeResolver
from .core.harpoon import Harpoon
from .core.persistence import SlotStore
from .preferences import Preferences


def _branch_for(root: Path) -> str | None:
    return git_integration.current_branch(cwd=str(root))


def build_harpoon(prefs: Preferences, start: Path | None = None) -> Harpoon:
    """Wire a ``Harpoon`` service from *prefs*, detecting the project from *start*."""
    resolver = ScopeResolver(
        get_backend(prefs.project_backend),
        _branch_for,
        separate_by_branch=prefs.separate_by_branch,
        fallback_name=prefs.fallback_name_provider(),
    )
    return Harpoon(SlotStore(prefs.cache_root), resolver, start=start)


def start_for(path: str | Path | None) -> Path | None:
    """Directory to detect the project from when acting on *path*."""
    if path is None:
        return None
    p = Path(path).expanduser()
    return p if p.is_dir() else p.parent.resolve()
