"""A modal single-line prompt."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.screen import ModalScreen
from textual.widgets import Input, Static


class PromptScreen(ModalScreen[str | None]):
    """Modal screen asking for one value. Dismisses with None on escape."""

    BINDINGS = [
        Binding("escape", "cancel", "Cancel", show=False),
    ]

    CSS = """
    PromptScreen {
        align: center middle;
        background: transparent;
    }

    #prompt-dialog {
        width: 70;
        max-width: 90%;
        height: auto;
        border: solid $primary;
        border-title-color: $primary;
        padding: 0 1;
    }

    #prompt-label {
        padding: 1 0 0 0;
    }
    """

    def __init__(self, title: str, label: str, value: str = ""):
        super().__init__()
        self._title = title
        self._label = label
        self._value = value

    def compose(self) -> ComposeResult:
        with Vertical(id="prompt-dialog") as dialog:
            dialog.border_title = self._title
            yield Static(self._label, id="prompt-label")
            yield Input(value=self._value, id="prompt-input")

    def on_mount(self) -> None:
        self.query_one("#prompt-input", Input).focus()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        value = event.value.strip()
        self.dismiss(value or None)

    def action_cancel(self) -> None:
        self.dismiss(None)
