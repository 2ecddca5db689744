"""Entry point for the Harpoon CLI."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from . import __version__
from ._utils import build_harpoon, start_for
from .core.features.project_backends import BACKENDS
from .core.log import enable_console_logging, logger
from .core.models import Outcome, Problem
from .preferences import (
    default_path,
    load_preferences,
    save_project_backend,
    save_separate_by_branch,
)

console = Console(highlight=False, soft_wrap=True)
err_console = Console(stderr=True, highlight=False, soft_wrap=True)

# Degradations worth telling the user about even when the command worked.
_NOTICE_TEXT = {
    Problem.PROJECT_NOT_DETECTED: "no project detected, using fallback scope",
    Problem.BRANCH_LOOKUP_FAILED: "could not read branch name",
    Problem.STORE_FILE_CORRUPT: "slot file was unreadable and has been ignored",
}

_ON_OFF = {"on": True, "true": True, "off": False, "false": False}


def _report(outcome: Outcome, verbose: bool = False) -> int:
    for notice in outcome.notices or []:
        if notice is Problem.STORE_FILE_CORRUPT or verbose:
            text = _NOTICE_TEXT.get(notice, notice.value)
            err_console.print(f"[yellow]note:[/yellow] {text}")
    if outcome.ok:
        if outcome.message:
            console.print(escape(outcome.message))
        return 0
    err_console.print(f"[red]{escape(outcome.message)}[/red]")
    return 1


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="harpoon", description="Pin files per project and jump between them"
    )
    parser.add_argument(
        "--version",
        "-V",
        action="version",
        version=f"harpoon {__version__}",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Preferences file (default: ~/.harpoon/preferences.yaml)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Show debug logging and scope notices",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("add", help="Pin a file in the next free slot")
    p.add_argument("path")

    p = sub.add_parser("assign", help="Pin a file in a specific slot (1-9)")
    p.add_argument("slot", type=int)
    p.add_argument("path")

    p = sub.add_parser("goto", help="Print the file pinned at a slot")
    p.add_argument("slot", type=int)

    p = sub.add_parser("rm", help="Delete a slot")
    p.add_argument("slot", type=int)

    for name, help_text in (
        ("next", "Slot after a file"),
        ("prev", "Slot before a file"),
    ):
        p = sub.add_parser(name, help=help_text)
        p.add_argument("path", help="The file currently open")

    sub.add_parser("list", help="List pinned files")
    sub.add_parser("clear", help="Remove every slot in this scope")
    sub.add_parser("edit", help="Print (and create) the raw slot file")
    sub.add_parser("key", help="Print the current scope key")
    sub.add_parser("menu", help="Pick a slot from the quick menu")

    p = sub.add_parser("config", help="Change a preference")
    p.add_argument("setting", choices=["separate-by-branch", "backend"])
    p.add_argument("value", help="on|off for separate-by-branch, or a backend name")
    return parser


def _print_list(harpoon, limit: int) -> int:
    items = harpoon.list_for_menu(limit)
    if not items:
        console.print("No files pinned")
        return 0
    table = Table(show_header=False, box=None, pad_edge=False)
    table.add_column(justify="right", style="bold")
    table.add_column()
    table.add_column(style="dim")
    for item in items:
        table.add_row(str(item.number), escape(item.label), escape(item.filepath))
    console.print(table)
    return 0


def _run_menu(harpoon, limit: int, verbose: bool) -> int:
    from .widgets.quick_menu import run_quick_menu

    items = harpoon.list_for_menu(limit)
    if not items:
        console.print("No files pinned")
        return 0
    choice = run_quick_menu(items, title=f"Harpoon - {harpoon.scope().key}")
    if choice is None:
        return 0
    return _report(harpoon.goto_slot(choice), verbose)


def _run_config(args) -> int:
    path = args.config or default_path()
    if args.setting == "separate-by-branch":
        value = args.value.strip().lower()
        if value not in _ON_OFF:
            err_console.print(
                f"[red]Expected on or off, got {escape(args.value)}[/red]"
            )
            return 1
        save_separate_by_branch(_ON_OFF[value], path)
    else:
        name = args.value.strip().lower()
        if name not in BACKENDS:
            choices = ", ".join(sorted(BACKENDS))
            err_console.print(
                f"[red]Unknown backend {escape(args.value)} (choose {choices})[/red]"
            )
            return 1
        save_project_backend(name, path)
    console.print(f"{args.setting} = {escape(args.value)}")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Run the Harpoon CLI and return the exit status."""
    args = _build_parser().parse_args(argv)
    if args.verbose:
        enable_console_logging()

    prefs = load_preferences(args.config)
    if args.command == "config":
        return _run_config(args)

    path = getattr(args, "path", None)
    harpoon = build_harpoon(prefs, start_for(path))
    with harpoon.pinned_scope() as scope:
        logger.debug("scope %s", scope.key)
        return _dispatch(args, harpoon, prefs.menu_limit)


def _dispatch(args, harpoon, menu_limit: int) -> int:
    cmd, path = args.command, getattr(args, "path", None)
    if cmd == "add":
        return _report(harpoon.add_current_file(path), args.verbose)
    if cmd == "assign":
        return _report(harpoon.assign(args.slot, path), args.verbose)
    if cmd == "goto":
        return _report(harpoon.goto_slot(args.slot), args.verbose)
    if cmd == "rm":
        return _report(harpoon.delete_slot(args.slot), args.verbose)
    if cmd == "next":
        return _report(harpoon.next(path), args.verbose)
    if cmd == "prev":
        return _report(harpoon.prev(path), args.verbose)
    if cmd == "list":
        return _print_list(harpoon, menu_limit)
    if cmd == "clear":
        return _report(harpoon.clear_all(), args.verbose)
    if cmd == "edit":
        return _report(harpoon.open_raw_store_file(), args.verbose)
    if cmd == "key":
        console.print(escape(harpoon.scope().key))
        return 0
    if cmd == "menu":
        return _run_menu(harpoon, menu_limit, args.verbose)
    return 2


if __name__ == "__main__":
    sys.exit(main())
