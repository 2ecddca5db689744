"""Quick menu: pick one of the first nine slots."""

from __future__ import annotations

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.screen import ModalScreen
from textual.widgets import OptionList, Static
from textual.widgets.option_list import Option

from ..core.features.labels import MenuItem


class QuickMenuScreen(ModalScreen["int | None"]):
    """Modal list of slots.  Dismisses with the chosen slot number or None."""

    BINDINGS = [
        Binding("escape", "cancel", show=False),
        *[Binding(str(n), f"pick({n})", show=False) for n in range(1, 10)],
    ]

    DEFAULT_CSS = """
    QuickMenuScreen {
        align: center middle;
    }
    #quick-menu {
        width: 60;
        height: auto;
        max-height: 16;
        border: round $accent;
        padding: 0 1;
    }
    """

    def __init__(self, items: list[MenuItem], title: str = "Harpoon") -> None:
        super().__init__()
        self._items = items
        self._title = title

    def compose(self) -> ComposeResult:
        with Vertical(id="quick-menu"):
            yield Static(self._title, id="quick-menu-title")
            if self._items:
                yield OptionList(
                    *[
                        Option(f"{item.number}  {item.label}", id=str(item.number))
                        for item in self._items
                    ],
                    id="quick-menu-options",
                )
            else:
                yield Static("No files pinned", id="quick-menu-empty")

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        self.dismiss(int(event.option.id))

    def action_pick(self, position: int) -> None:
        """Digit keys pick by position in the menu, not by slot number."""
        if 1 <= position <= len(self._items):
            self.dismiss(self._items[position - 1].number)

    def action_cancel(self) -> None:
        self.dismiss(None)


class QuickMenuApp(App["int | None"]):
    """Tiny host app: shows the quick menu and exits with the choice."""

    def __init__(self, items: list[MenuItem], title: str = "Harpoon") -> None:
        super().__init__()
        self._items = items
        self._title = title

    def on_mount(self) -> None:
        self.push_screen(QuickMenuScreen(self._items, self._title), self.exit)


def run_quick_menu(items: list[MenuItem], title: str = "Harpoon") -> int | None:
    """Show the quick menu and return the chosen slot number."""
    return QuickMenuApp(items, title).run()
