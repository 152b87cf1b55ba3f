"""Tests for the refactor plugin's key routing."""

from __future__ import annotations

from pathlib import Path

from textual.events import Key

from cljr.config import RefactorConfig
from cljr.core.keymap import CommandKeymap
from cljr.editing.buffer import TextBuffer
from cljr.editing.snippets import expand_snippet
from cljr.plugins import discover_plugins
from cljr.plugins.refactor import RefactorPlugin


class FakeApp:
    """Minimal app surface used by the plugin."""

    def __init__(self, keymap: CommandKeymap | None = None):
        if keymap is None:
            keymap = CommandKeymap()
            keymap.add_keybindings_with_prefix("ctrl+c")
        self.keymap = keymap
        self.config = RefactorConfig()
        self.snippet_session = None
        self.actions: list[str] = []
        self.notifications: list[tuple[str, str]] = []

    def notify(self, message: str, severity: str = "information") -> None:
        self.notifications.append((message, severity))

    def action_cljr_rename_file(self) -> None:
        self.actions.append("rename_file")

    def action_cljr_add_require(self) -> None:
        self.actions.append("add_require")

    def action_cljr_add_use(self) -> None:
        self.actions.append("add_use")

    def action_cljr_add_import(self) -> None:
        self.actions.append("add_import")


def _key(key: str, character: str | None = None) -> Key:
    return Key(key, character)


def _press(plugin: RefactorPlugin, app: FakeApp, *keys: Key) -> list[bool]:
    return [plugin.on_key(app, key) for key in keys]


def test_plugin_is_discovered():
    assert RefactorPlugin in discover_plugins()


class TestCommandKeys:
    def test_prefix_sequence_runs_action(self):
        app = FakeApp()
        plugin = RefactorPlugin()
        plugin.register(app)

        consumed = _press(plugin, app, _key("ctrl+c"), _key("a", "a"), _key("r", "r"))

        assert consumed == [True, True, True]
        assert app.actions == ["add_require"]
        assert plugin.pending_keys == ()

    def test_modifier_sequence_runs_action(self):
        keymap = CommandKeymap()
        keymap.add_keybindings_with_modifier("ctrl")
        app = FakeApp(keymap)
        plugin = RefactorPlugin()

        _press(plugin, app, _key("ctrl+a"), _key("tab", "\t"))

        assert app.actions == ["add_import"]

    def test_unbound_single_key_passes_through(self):
        app = FakeApp()
        plugin = RefactorPlugin()

        assert not plugin.on_key(app, _key("x", "x"))
        assert plugin.pending_keys == ()
        assert app.notifications == []

    def test_unbound_sequence_is_reported(self):
        app = FakeApp()
        plugin = RefactorPlugin()

        consumed = _press(plugin, app, _key("ctrl+c"), _key("z", "z"))

        assert consumed == [True, True]
        assert app.actions == []
        assert app.notifications == [("<ctrl+c> z is undefined", "warning")]
        assert plugin.pending_keys == ()

    def test_shifted_characters_use_the_character(self):
        app = FakeApp()
        plugin = RefactorPlugin()

        assert not plugin.on_key(app, _key("question_mark", "?"))
        assert plugin.pending_keys == ()

    def test_non_key_events_are_ignored(self):
        app = FakeApp()
        plugin = RefactorPlugin()
        assert not plugin.on_key(app, object())


class TestSnippetKeys:
    def _app_with_session(self) -> tuple[FakeApp, TextBuffer]:
        app = FakeApp()
        buffer = TextBuffer("core.clj", "(:require )")
        buffer.goto_char(10)
        app.snippet_session = expand_snippet(buffer, "[$1 :as $2]")
        return app, buffer

    def test_tab_moves_between_fields_and_exits(self):
        app, _ = self._app_with_session()
        plugin = RefactorPlugin()
        session = app.snippet_session

        assert plugin.on_key(app, _key("tab", "\t"))
        assert session.current_field == 2
        assert plugin.on_key(app, _key("tab", "\t"))

        assert not session.active
        assert app.snippet_session is None

    def test_shift_tab_goes_back(self):
        app, _ = self._app_with_session()
        plugin = RefactorPlugin()
        session = app.snippet_session
        session.next_field()

        plugin.on_key(app, _key("shift+tab"))

        assert session.current_field == 1

    def test_escape_exits(self):
        app, buffer = self._app_with_session()
        plugin = RefactorPlugin()

        assert plugin.on_key(app, _key("escape"))

        assert app.snippet_session is None
        assert buffer.point == len("(:require [ :as ]")

    def test_other_keys_reach_the_editor(self):
        app, _ = self._app_with_session()
        plugin = RefactorPlugin()

        assert not plugin.on_key(app, _key("a", "a"))
        assert app.snippet_session is not None

    def test_commands_still_work_during_a_snippet(self):
        app, _ = self._app_with_session()
        plugin = RefactorPlugin()

        _press(plugin, app, _key("ctrl+c"), _key("a", "a"), _key("u", "u"))

        assert app.actions == ["add_use"]


def test_on_file_open_bootstraps_blank_files(clojure_project: Path):
    app = FakeApp()
    plugin = RefactorPlugin()
    buffer = TextBuffer.from_file(clojure_project / "src" / "my_app" / "fresh.clj")

    plugin.on_file_open(app, buffer)

    assert buffer.text == "(ns my-app.fresh)\n\n"
    assert app.notifications == []


def test_on_file_open_respects_config(clojure_project: Path):
    app = FakeApp()
    app.config = RefactorConfig(add_ns_to_blank_clj_files=False)
    plugin = RefactorPlugin()
    buffer = TextBuffer.from_file(clojure_project / "src" / "my_app" / "fresh.clj")

    plugin.on_file_open(app, buffer)

    assert buffer.is_empty
