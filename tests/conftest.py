"""Shared test fixtures for the harpoon test suite."""

from __future__ import annotations

from pathlib import Path

import pytest

from harpoon.core.features.project_backends import ProjectInfo
from harpoon.core.features.scope import ScopeResolver
from harpoon.core.harpoon import Harpoon
from harpoon.core.persistence import SlotStore


class FixedBackend:
    """Project backend that always reports the same project (or none)."""

    name = "fixed"

    def __init__(self, info: ProjectInfo | None) -> None:
        self.info = info

    def detect(self, start: Path) -> ProjectInfo | None:  # noqa: ARG002
        return self.info


@pytest.fixture
def tmp_dir(tmp_path: Path) -> Path:
    """Provide a temporary directory for file-based tests."""
    return tmp_path


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """A project tree with a few files in it."""
    root = tmp_path / "proj"
    for rel in ("a.txt", "b.txt", "c.txt", "x/util.py", "y/util.py"):
        (root / rel).parent.mkdir(parents=True, exist_ok=True)
        (root / rel).write_text(rel)
    return root


@pytest.fixture
def store(tmp_path: Path) -> SlotStore:
    return SlotStore(tmp_path / "cache")


@pytest.fixture
def harpoon(store: SlotStore, project_root: Path) -> Harpoon:
    """Service bound to ``proj`` on branch ``main``."""
    resolver = ScopeResolver(
        FixedBackend(ProjectInfo(name="proj", root=project_root)),
        lambda root: "main",
    )
    return Harpoon(store, resolver)
