"""Refactor plugin for cljr.

Key sequences are collected here and matched against the app's command
keymap. A complete sequence runs the bound app action; a partial one
waits for more keys.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from textual.events import Key

from ...core.keymap import KeySequence, RefactorCommand, format_key_sequence
from ...refactor.bootstrap import add_ns_if_blank_clj_file
from .. import Plugin

if TYPE_CHECKING:
    from ...editing.buffer import Buffer
    from ...ui.app import CljrApp

SNIPPET_NEXT_KEYS = ("tab",)
SNIPPET_PREVIOUS_KEYS = ("shift+tab",)
SNIPPET_EXIT_KEYS = ("escape",)


class RefactorPlugin(Plugin):
    """Plugin providing the refactor commands.

    Features:
    - Prefix or modifier key sequences for rename file and add
      :require / :use / :import
    - Namespace declaration for blank .clj files
    - Snippet field navigation (tab, shift+tab, escape to finish)
    """

    name = "refactor"

    def __init__(self) -> None:
        self._pending: list[str] = []
        self._app: "CljrApp | None" = None

    @property
    def pending_keys(self) -> KeySequence:
        return tuple(self._pending)

    def register(self, app: "CljrApp") -> None:
        self._app = app
        self._pending = []

    def on_key(self, app: "CljrApp", event: Any) -> bool:
        """Route keys to the active snippet or the command keymap.

        Returns True if the key was consumed.
        """
        if not isinstance(event, Key):
            return False

        key = self._convert_key(event)

        session = app.snippet_session
        if session is not None and session.active and not self._pending:
            if self._handle_snippet_key(app, key):
                return True

        return self._handle_command_key(app, key)

    def _convert_key(self, event: Key) -> str:
        """Convert a Textual Key event to keymap key format."""
        key = event.key
        if "+" not in key and event.character and len(event.character) == 1 and event.is_printable:
            return event.character
        return key

    def _handle_snippet_key(self, app: "CljrApp", key: str) -> bool:
        session = app.snippet_session
        if key in SNIPPET_NEXT_KEYS:
            session.next_field()
        elif key in SNIPPET_PREVIOUS_KEYS:
            session.previous_field()
        elif key in SNIPPET_EXIT_KEYS:
            session.exit()
        else:
            return False
        if not session.active:
            app.snippet_session = None
        return True

    def _handle_command_key(self, app: "CljrApp", key: str) -> bool:
        keymap = app.keymap
        self._pending.append(key)
        sequence = tuple(self._pending)

        command = keymap.lookup(sequence)
        if command is not None:
            self._pending = []
            self.run_command(app, command)
            return True

        if keymap.is_prefix(sequence):
            return True

        self._pending = []
        if len(sequence) > 1:
            app.notify(f"{format_key_sequence(sequence)} is undefined", severity="warning")
            return True
        return False

    def run_command(self, app: "CljrApp", command: RefactorCommand) -> None:
        """Run the app action bound to a refactor command."""
        action = getattr(app, f"action_{command.action}", None)
        if action is None:
            app.notify(f"Unknown action: {command.action}", severity="error")
            return
        action()

    def on_file_open(self, app: "CljrApp", buffer: "Buffer") -> None:
        """Add a namespace declaration to blank .clj files."""
        result = add_ns_if_blank_clj_file(buffer, app.config)
        if result.failed:
            app.notify(result.message, severity="warning")
