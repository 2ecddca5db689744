"""Per-scope slot persistence store."""

from __future__ import annotations

import json
from pathlib import Path

from ..constants import FILEPATH_KEY, NUMBER_KEY, STORE_SUFFIX
from ..features.scope import sanitize
from ..log import logger
from ..models import BookmarkEntry, Problem


class SlotStore:
    """One JSON file per scope key under *cache_root*.

    On-disk format: ``[{"harpoon_number": 1, "filepath": "src/app.py"}, ...]``

    Nothing is cached between calls; every ``load`` reads the file again.
    """

    def __init__(self, cache_root: Path) -> None:
        self.cache_root = Path(cache_root)

    def path_for(self, key: str) -> Path:
        """Return the backing file for *key* (separators already replaced)."""
        return self.cache_root / f"{sanitize(key)}{STORE_SUFFIX}"

    def load(self, key: str) -> list[BookmarkEntry]:
        """Load the slot set for *key*; missing or corrupt files yield ``[]``."""
        entries, _problem = self.load_checked(key)
        return entries

    def load_checked(self, key: str) -> tuple[list[BookmarkEntry], Problem | None]:
        """Like ``load`` but also report whether an existing file was unusable."""
        path = self.path_for(key)
        if not path.exists():
            return [], None
        entries = _read_entries(path)
        if entries is None:
            logger.warning(
                "ignoring unreadable slot file %s; it will be replaced on next save",
                path,
            )
            return [], Problem.STORE_FILE_CORRUPT
        return entries, None

    def save(self, key: str, entries: list[BookmarkEntry]) -> bool:
        """Replace the stored set for *key*.  Returns False if the write failed.

        The whole file is rewritten with no locking, so the last writer wins.
        """
        path = self.path_for(key)
        try:
            _write_records(
                path, [{NUMBER_KEY: e.number, FILEPATH_KEY: e.filepath} for e in entries]
            )
        except OSError:
            logger.warning("failed to write slot file %s", path, exc_info=True)
            return False
        return True

    def ensure_file(self, key: str) -> Path | None:
        """Create an empty slot file for *key* if there is none yet.

        Returns the path, or None when it could not be created.
        """
        path = self.path_for(key)
        if path.exists():
            return path
        try:
            _write_records(path, [])
        except OSError:
            logger.warning("failed to create slot file %s", path, exc_info=True)
            return None
        return path


def _write_records(path: Path, records: list[dict]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(records, indent=2, ensure_ascii=False), encoding="utf-8")


def _read_entries(path: Path) -> list[BookmarkEntry] | None:
    """Parse *path*; None when it is unreadable or not a valid slot list."""
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError):
        logger.debug("failed to load slot file %s", path, exc_info=True)
        return None
    if not isinstance(raw, list):
        return None
    entries: list[BookmarkEntry] = []
    seen: set[int] = set()
    for record in raw:
        entry = _parse_record(record)
        if entry is None or entry.number in seen:
            return None
        seen.add(entry.number)
        entries.append(entry)
    return entries


def _parse_record(record: object) -> BookmarkEntry | None:
    if not isinstance(record, dict):
        return None
    number = record.get(NUMBER_KEY)
    filepath = record.get(FILEPATH_KEY)
    # bool is an int subclass; reject it explicitly
    if not isinstance(number, int) or isinstance(number, bool) or number < 1:
        return None
    if not isinstance(filepath, str) or not filepath:
        return None
    return BookmarkEntry(number=number, filepath=filepath)
