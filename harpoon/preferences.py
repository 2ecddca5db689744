"""User preferences for Harpoon.

Loads settings from ~/.harpoon/preferences.yaml (or $HARPOON_PREFERENCES).
Falls back to sensible defaults if the file doesn't exist or is invalid.
Creates a default file on first run so users can discover and edit it.
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

import yaml

from .core.constants import DEFAULT_CACHE_ROOT, DEFAULT_FALLBACK_NAME, HARPOON_HOME
from .core.features.project_backends import BACKENDS
from .core.log import logger

PREFS_PATH = HARPOON_HOME / "preferences.yaml"
PREFS_ENV = "HARPOON_PREFERENCES"

# Fallback name that means "use the current directory's name".
CWD_FALLBACK = "cwd"

_DEFAULT_YAML = """\
# Harpoon Preferences
# Delete this file to reset to defaults.

storage:
  cache_root: "~/.harpoon/cache"   # one JSON file per project (and branch)

scope:
  separate_by_branch: true         # keep a separate slot set per git branch
  project_backend: "git"           # git | markers | none
  fallback_name: "harpoon"         # scope used outside any project ("cwd" = directory name)

menu:
  limit: 9                         # slots shown in the quick menu
"""


@dataclass
class Preferences:
    """Top-level Harpoon preferences."""

    cache_root: Path = field(default_factory=lambda: DEFAULT_CACHE_ROOT)
    separate_by_branch: bool = True
    project_backend: str = "git"
    fallback_name: str = DEFAULT_FALLBACK_NAME
    menu_limit: int = 9

    def fallback_name_provider(self) -> Callable[[], str]:
        """Return the function that names the scope when no project is found."""
        if self.fallback_name == CWD_FALLBACK:
            return lambda: Path.cwd().name or DEFAULT_FALLBACK_NAME
        name = self.fallback_name or DEFAULT_FALLBACK_NAME
        return lambda: name


def default_path() -> Path:
    env = os.environ.get(PREFS_ENV)
    return Path(env).expanduser() if env else PREFS_PATH


def load_preferences(path: Path | None = None) -> Preferences:
    """Load preferences from YAML file.

    Falls back to sensible defaults if the file doesn't exist or is invalid.
    Creates a default preferences file on first run.
    """
    path = path or default_path()
    prefs = Preferences()

    if path.exists():
        try:
            data = yaml.safe_load(path.read_text()) or {}
        except (OSError, yaml.YAMLError):
            logger.debug("invalid preferences file %s", path, exc_info=True)
            return prefs
        if not isinstance(data, dict):
            return prefs
        if isinstance(data.get("storage"), dict):
            root = data["storage"].get("cache_root")
            if isinstance(root, str) and root.strip():
                prefs.cache_root = Path(root).expanduser()
        if isinstance(data.get("scope"), dict):
            sdata = data["scope"]
            if "separate_by_branch" in sdata:
                prefs.separate_by_branch = bool(sdata["separate_by_branch"])
            backend = sdata.get("project_backend")
            if isinstance(backend, str) and backend.strip().lower() in BACKENDS:
                prefs.project_backend = backend.strip().lower()
            elif backend is not None:
                logger.warning("unknown project_backend %r in %s", backend, path)
            if isinstance(sdata.get("fallback_name"), str):
                prefs.fallback_name = sdata["fallback_name"].strip()
        if isinstance(data.get("menu"), dict):
            limit = data["menu"].get("limit")
            if isinstance(limit, int) and not isinstance(limit, bool) and limit > 0:
                prefs.menu_limit = min(limit, 9)
    else:
        # Create default file for user to customize
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(_DEFAULT_YAML)
        except OSError:
            logger.debug("could not write default preferences to %s", path)

    return prefs


def _save_scope_value(key: str, value: str, path: Path | None) -> None:
    """Surgically update *key* under ``scope:``, preserving comments."""
    path = path or default_path()
    try:
        if path.exists():
            text = path.read_text()
        else:
            path.parent.mkdir(parents=True, exist_ok=True)
            text = _DEFAULT_YAML

        if re.search(rf"^\s+{key}:", text, re.MULTILINE):
            text = re.sub(
                rf'^(\s+{key}:)\s*(?:"[^"]*"|\S+)(.*?)$',
                lambda m: f"{m.group(1)} {value}{m.group(2)}",
                text,
                count=1,
                flags=re.MULTILINE,
            )
        elif re.search(r"^scope:", text, re.MULTILINE):
            # scope section exists but this key is missing
            text = re.sub(
                r"^(scope:.*)$",
                lambda m: f"{m.group(1)}\n  {key}: {value}",
                text,
                count=1,
                flags=re.MULTILINE,
            )
        else:
            # No scope section at all — append it
            text = text.rstrip() + f"\n\nscope:\n  {key}: {value}\n"

        path.write_text(text)
    except OSError:
        logger.debug("could not update %s in %s", key, path, exc_info=True)


def save_separate_by_branch(enabled: bool, path: Path | None = None) -> None:
    """Persist the separate_by_branch preference."""
    _save_scope_value("separate_by_branch", "true" if enabled else "false", path)


def save_project_backend(name: str, path: Path | None = None) -> None:
    """Persist the project_backend preference (ignored if *name* is unknown)."""
    if name not in BACKENDS:
        return
    _save_scope_value("project_backend", f'"{name}"', path)
