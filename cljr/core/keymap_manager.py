"""Keymap management utilities for cljr."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any

from cljr.config import CONFIG_DIR, DEFAULT_PREFIX, SettingsStore, SettingsStoreProtocol

from .keymap import DEFAULT_COMMANDS, CommandKeymap, RefactorCommand

CUSTOM_KEYMAP_SETTINGS_KEY = "custom_keymap"
CUSTOM_KEYMAP_DIR = CONFIG_DIR / "keymaps"


class KeymapManager:
    """Builds the command keymap from settings."""

    def __init__(
        self,
        settings_store: SettingsStoreProtocol | None = None,
    ) -> None:
        self._settings_store = settings_store or SettingsStore()
        self._commands: tuple[RefactorCommand, ...] = DEFAULT_COMMANDS
        self._custom_keymap_name: str | None = None
        self._custom_keymap_path: Path | None = None

    def initialize(self) -> CommandKeymap:
        """Load settings and build the keymap.

        Returns:
            The command keymap with prefix or modifier bindings applied.
        """
        settings = self._settings_store.load_all()
        self.load_custom_keymap(settings)
        return self.build_keymap(settings)

    def build_keymap(self, settings: dict) -> CommandKeymap:
        """Build a keymap from prefix/modifier settings.

        A prefix wins over a modifier. With neither set the default
        prefix is used.
        """
        keymap = CommandKeymap(self._commands)
        prefix = settings.get("keybinding_prefix")
        modifier = settings.get("keybinding_modifier")
        if isinstance(prefix, str) and prefix.strip():
            keymap.add_keybindings_with_prefix(prefix.strip())
        elif isinstance(modifier, str) and modifier.strip():
            keymap.add_keybindings_with_modifier(modifier.strip())
        else:
            keymap.add_keybindings_with_prefix(DEFAULT_PREFIX)
        return keymap

    def load_custom_keymap(self, settings: dict) -> None:
        """Load custom mnemonics from settings if specified.

        Args:
            settings: Settings dictionary containing custom_keymap key.
        """
        keymap_name = settings.get(CUSTOM_KEYMAP_SETTINGS_KEY)
        if not keymap_name or not isinstance(keymap_name, str):
            return
        if keymap_name.strip() in ("", "default"):
            return

        try:
            path = self._resolve_keymap_path(keymap_name.strip())
            self._register_custom_keymap(path, keymap_name.strip())
        except Exception as exc:
            print(
                f"[cljr] Failed to load custom keymap '{keymap_name}': {exc}",
                file=sys.stderr,
            )

    def _resolve_keymap_path(self, keymap_name: str) -> Path:
        """Resolve keymap name to file path."""
        if keymap_name.startswith(("~", "/")) or Path(keymap_name).is_absolute():
            return Path(keymap_name).expanduser()

        name = Path(keymap_name).stem
        return CUSTOM_KEYMAP_DIR / f"{name}.json"

    def _register_custom_keymap(self, path: Path, keymap_name: str) -> None:
        """Load custom mnemonics from file.

        Raises:
            ValueError: If the keymap file is invalid.
        """
        path = path.expanduser()
        if not path.exists():
            raise ValueError(f"Keymap file not found: {path}")

        self._commands = self._load_commands_from_file(path)
        self._custom_keymap_name = keymap_name
        self._custom_keymap_path = path.resolve()

    def _load_commands_from_file(self, path: Path) -> tuple[RefactorCommand, ...]:
        """Load mnemonic overrides from a JSON file.

        Raises:
            ValueError: If the JSON is invalid or a mnemonic is malformed.
        """
        try:
            payload = json.loads(path.read_text(encoding="utf-8"))
        except Exception as exc:
            raise ValueError(f"Failed to read keymap JSON: {exc}") from exc

        if not isinstance(payload, dict):
            raise ValueError("Keymap file must contain a JSON object.")

        mnemonics = payload.get("mnemonics", {})
        if not isinstance(mnemonics, dict):
            raise ValueError('"mnemonics" must be a JSON object.')

        return self._apply_mnemonics(mnemonics)

    def _apply_mnemonics(self, mnemonics: dict[str, Any]) -> tuple[RefactorCommand, ...]:
        actions = {command.action.removeprefix("cljr_"): command for command in DEFAULT_COMMANDS}
        unknown = set(mnemonics) - set(actions)
        if unknown:
            raise ValueError(f"Unknown commands in keymap: {', '.join(sorted(unknown))}")

        commands = []
        for name, command in actions.items():
            mnemonic = mnemonics.get(name, command.mnemonic)
            if not isinstance(mnemonic, str) or len(mnemonic) != 2:
                raise ValueError(f'Mnemonic for "{name}" must be a two-character string.')
            commands.append(RefactorCommand(mnemonic, command.action, command.label))

        seen = [command.mnemonic for command in commands]
        if len(set(seen)) != len(seen):
            raise ValueError("Mnemonics must be unique.")
        return tuple(commands)

    def get_custom_keymap_name(self) -> str | None:
        """Get the name of the loaded custom keymap, or None."""
        return self._custom_keymap_name

    def get_custom_keymap_path(self) -> Path | None:
        """Get the path of the loaded custom keymap file, or None."""
        return self._custom_keymap_path

    def reset_to_default(self) -> None:
        """Reset to the default mnemonics."""
        self._commands = DEFAULT_COMMANDS
        self._custom_keymap_name = None
        self._custom_keymap_path = None
