"""Textual widgets for Harpoon."""

from .quick_menu import QuickMenuApp, QuickMenuScreen, run_quick_menu

__all__ = ["QuickMenuApp", "QuickMenuScreen", "run_quick_menu"]
