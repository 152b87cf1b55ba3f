"""Main Textual application for cljr."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer, Static

from ..config import RefactorConfig, SettingsStore, SettingsStoreProtocol
from ..core.keymap import CommandKeymap
from ..core.keymap_manager import KeymapManager
from ..editing.buffer import Buffer
from ..editing.snippets import SnippetSession
from ..editing.workspace import Workspace
from ..exceptions import CljrError
from ..plugins import Plugin, discover_plugins
from ..refactor.ns_clauses import add_import_to_ns, add_require_to_ns, add_use_to_ns
from ..refactor.rename import RenameResult, rename_file
from .screens import KeymapHelpScreen, PromptScreen
from .text_area_buffer import TextAreaBuffer
from .widgets import EditorTextArea


class CljrApp(App):
    """Single-file Clojure editor with the refactor commands."""

    TITLE = "cljr"

    CSS = """
    Screen {
        background: $surface;
    }

    #editor {
        height: 1fr;
        border: none;
    }

    #status-bar {
        height: 1;
        background: $panel;
        color: $text-muted;
        padding: 0 1;
    }
    """

    BINDINGS = [
        Binding("ctrl+s", "save", "Save"),
        Binding("f1", "show_keymap", "Keys"),
        Binding("ctrl+q", "quit", "Quit", priority=True),
    ]

    def __init__(
        self,
        path: Path | None = None,
        config: RefactorConfig | None = None,
        keymap: CommandKeymap | None = None,
        settings_store: SettingsStoreProtocol | None = None,
    ) -> None:
        super().__init__()
        self._settings_store = settings_store or SettingsStore()
        self._initial_path = path
        self._settings: dict[str, Any] = {}
        self._keymap = keymap
        self._config = config
        self.config = config or RefactorConfig()
        self.workspace = Workspace()
        self.buffer: TextAreaBuffer | None = None
        self.snippet_session: SnippetSession | None = None
        self.plugins: list[Plugin] = []

    @property
    def keymap(self) -> CommandKeymap:
        if self._keymap is None:
            manager = KeymapManager(self._settings_store)
            manager.load_custom_keymap(self._settings)
            self._keymap = manager.build_keymap(self._settings)
        return self._keymap

    @property
    def editor(self) -> EditorTextArea:
        return self.query_one("#editor", EditorTextArea)

    def compose(self) -> ComposeResult:
        yield EditorTextArea(id="editor", show_line_numbers=True, tab_behavior="indent")
        yield Static("", id="status-bar", markup=False)
        yield Footer()

    def on_mount(self) -> None:
        self._load_settings()
        self._load_plugins()
        if self._initial_path is not None:
            self.open_file(self._initial_path)
        self.editor.focus()
        self._update_status_bar()

    def _load_settings(self) -> None:
        try:
            self._settings = self._settings_store.load_all()
        except ValueError as exc:
            self.notify(str(exc), severity="error")
            self._settings = {}
        if self._config is None:
            self.config = RefactorConfig.from_settings(self._settings)

    def _load_plugins(self) -> None:
        for plugin_cls in discover_plugins():
            plugin = plugin_cls()
            plugin.register(self)
            plugin.on_settings_load(self, self._settings)
            self.plugins.append(plugin)

    # ─────────────────────────────────────────────────────────────────
    # Files and keys
    # ─────────────────────────────────────────────────────────────────

    def open_file(self, path: Path) -> Buffer:
        """Visit path in the editor and run file-open hooks."""
        path = path.expanduser().resolve()
        if self.buffer is not None:
            self.workspace.kill_buffer(self.buffer)
        buffer = TextAreaBuffer(self.editor, path.name)
        buffer.load(path)
        self.buffer = buffer
        self.snippet_session = None
        self.workspace.add_buffer(buffer)
        for plugin in self.plugins:
            plugin.on_file_open(self, buffer)
        self._update_status_bar()
        return buffer

    def dispatch_plugin_key(self, event: Any) -> bool:
        """Offer a key event to plugins. Returns True if one consumed it."""
        for plugin in self.plugins:
            if plugin.on_key(self, event):
                self._update_status_bar()
                return True
        return False

    def _update_status_bar(self) -> None:
        try:
            status = self.query_one("#status-bar", Static)
        except Exception:
            return
        if self.buffer is None:
            status.update("No file")
            return
        parts = [str(self.buffer.file_path or self.buffer.name)]
        if self.buffer.modified:
            parts.append("(modified)")
        if self.snippet_session is not None and self.snippet_session.active:
            parts.append(f"snippet field ${self.snippet_session.current_field}")
        status.update("  ".join(parts))

    def _require_buffer(self) -> Buffer | None:
        if self.buffer is None:
            self.notify("No file is open", severity="error")
        return self.buffer

    # ─────────────────────────────────────────────────────────────────
    # Actions
    # ─────────────────────────────────────────────────────────────────

    def action_save(self) -> None:
        buffer = self._require_buffer()
        if buffer is None:
            return
        try:
            buffer.save()
        except (OSError, ValueError) as exc:
            self.notify(f"Save failed: {exc}", severity="error")
            return
        self.notify(f"Wrote {buffer.file_path}")
        self._update_status_bar()

    def action_show_keymap(self) -> None:
        self.push_screen(KeymapHelpScreen(self.keymap))

    def action_cljr_rename_file(self) -> None:
        buffer = self._require_buffer()
        if buffer is None:
            return
        current = str(buffer.file_path or "")

        def on_name(new_name: str | None) -> None:
            if new_name:
                self.rename_current_file(new_name)

        self.push_screen(PromptScreen("Rename file", "New name:", current), on_name)

    def rename_current_file(self, new_name: str) -> RenameResult | None:
        """Rename the visited file and report the outcome."""
        buffer = self._require_buffer()
        if buffer is None:
            return None
        try:
            result = rename_file(self.workspace, buffer, new_name, self.config)
        except (CljrError, OSError) as exc:
            self.notify(str(exc), severity="error")
            return None

        self.notify(result.message)
        if result.replace.failed:
            self.notify(result.replace.message, severity="warning")
        self._update_status_bar()
        return result

    def action_cljr_add_require(self) -> None:
        self._start_snippet(add_require_to_ns)

    def action_cljr_add_use(self) -> None:
        self._start_snippet(add_use_to_ns)

    def action_cljr_add_import(self) -> None:
        self._start_snippet(add_import_to_ns)

    def _start_snippet(self, command) -> None:
        buffer = self._require_buffer()
        if buffer is None:
            return
        if self.snippet_session is not None:
            self.snippet_session.exit()
            self.snippet_session = None
        try:
            session = command(buffer)
        except CljrError as exc:
            self.notify(str(exc), severity="error")
            return
        self.snippet_session = session if session.active else None
        self._update_status_bar()
