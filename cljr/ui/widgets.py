"""Editor widgets for cljr."""

from __future__ import annotations

from textual.events import Key
from textual.widgets import TextArea


class EditorTextArea(TextArea):
    """TextArea that offers every key to the app's plugins first."""

    async def _on_key(self, event: Key) -> None:
        """Let plugins consume keys before default TextArea handling."""
        dispatch = getattr(self.app, "dispatch_plugin_key", None)
        if dispatch is not None and dispatch(event):
            event.prevent_default()
            event.stop()
            return

        await super()._on_key(event)
