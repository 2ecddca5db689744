"""Constants shared by the core and the front-ends."""

from __future__ import annotations

from pathlib import Path

HARPOON_HOME = Path.home() / ".harpoon"
DEFAULT_CACHE_ROOT = HARPOON_HOME / "cache"

# Scope keys become flat file names, so separators are swapped for this token.
SEPARATOR_TOKEN = "---"
PATH_SEPARATORS = ("/", "\\")
BRANCH_DELIMITER = "#"

DEFAULT_FALLBACK_NAME = "harpoon"

# Names a project backend may report that mean "no project here".
NO_PROJECT_NAMES = frozenset({"", "none", "-"})

# Quick menu shows at most this many slots (one per digit key).
QUICK_MENU_LIMIT = 9
MAX_ASSIGNABLE_SLOT = 9

STORE_SUFFIX = ".json"
NUMBER_KEY = "harpoon_number"
FILEPATH_KEY = "filepath"

GIT_TIMEOUT = 10

PROJECT_MARKERS = (
    ".git",
    ".hg",
    ".projectile",
    ".project",
    "pyproject.toml",
    "setup.py",
    "package.json",
    "Cargo.toml",
    "go.mod",
)
