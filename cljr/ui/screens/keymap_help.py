"""Screen listing the refactor key sequences."""

from __future__ import annotations

from rich.markup import escape
from textual.app import ComposeResult
from textual.binding import Binding
from textual.screen import ModalScreen
from textual.widgets import Static

from ...core.keymap import CommandKeymap


class KeymapHelpScreen(ModalScreen):
    """Modal screen showing the refactor command bindings."""

    BINDINGS = [
        Binding("escape", "dismiss", "Close", show=False),
        Binding("f1", "dismiss", "Close", show=False),
    ]

    CSS = """
    KeymapHelpScreen {
        align: right bottom;
        background: rgba(0, 0, 0, 0);
        overlay: none;
    }

    #keymap-help {
        width: auto;
        height: auto;
        max-width: 60;
        background: $surface;
        border: solid $primary;
        padding: 1;
        margin: 1 2;
    }
    """

    def __init__(self, keymap: CommandKeymap):
        super().__init__()
        self._keymap = keymap

    def compose(self) -> ComposeResult:
        lines = ["[bold $text-muted]Refactor[/]"]
        for keys, label in self._keymap.describe():
            lines.append(f"  [bold $warning]{escape(keys)}[/] {escape(label)}")
        lines.append("")
        lines.append("[$primary]Close: <esc>[/]")
        yield Static("\n".join(lines), id="keymap-help", markup=True)

    def action_dismiss(self) -> None:
        self.dismiss(None)
