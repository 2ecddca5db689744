"""Tests for quick-menu label disambiguation."""

from __future__ import annotations

from harpoon.core.features.labels import MenuItem, format_label, menu_items
from harpoon.core.models import BookmarkEntry


class TestFormatLabel:
    def test_no_separator_unchanged(self):
        assert format_label("README.md", ["docs/README.md"]) == "README.md"

    def test_unique_basename(self):
        assert format_label("src/app/main.py", ["src/util.py"]) == "main.py"

    def test_collision_adds_directory(self):
        assert format_label("/x/util.py", ["/y/util.py"]) == "util.py at x"
        assert format_label("/y/util.py", ["/x/util.py"]) == "util.py at y"

    def test_collision_with_nested_dirs(self):
        assert format_label("a/b/util.py", ["c/util.py"]) == "util.py at a/b"

    def test_collision_with_bare_peer(self):
        assert format_label("lib/setup.py", ["setup.py"]) == "setup.py at lib"


class TestMenuItems:
    def test_scenario_util(self):
        entries = [BookmarkEntry(1, "/x/util.py"), BookmarkEntry(2, "/y/util.py")]
        assert menu_items(entries) == [
            MenuItem(1, "util.py at x", "/x/util.py"),
            MenuItem(2, "util.py at y", "/y/util.py"),
        ]

    def test_ordered_and_limited(self):
        entries = [BookmarkEntry(n, f"d{n}/f{n}.py") for n in range(12, 0, -1)]
        items = menu_items(entries)
        assert [i.number for i in items] == list(range(1, 10))

    def test_collisions_only_checked_inside_window(self):
        entries = [BookmarkEntry(n, f"d{n}/f{n}.py") for n in range(1, 10)]
        entries.append(BookmarkEntry(10, "other/f1.py"))
        assert menu_items(entries)[0].label == "f1.py"

    def test_custom_limit(self):
        entries = [BookmarkEntry(1, "a/x.py"), BookmarkEntry(2, "b/x.py")]
        assert menu_items(entries, limit=1) == [MenuItem(1, "x.py", "a/x.py")]
