"""Configuration management for cljr.

Settings live in a JSON file under CONFIG_DIR (~/.cljr by default,
CLJR_CONFIG_DIR overrides it). RefactorConfig is the typed view the
commands consume.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Protocol

CONFIG_DIR = Path(os.environ.get("CLJR_CONFIG_DIR", "~/.cljr")).expanduser()
SETTINGS_PATH = CONFIG_DIR / "settings.json"

DEFAULT_PREFIX = "ctrl+c"
PROJECT_MARKER = "project.clj"
SOURCE_EXTENSIONS = (".clj", ".cljs")
MAX_PROJECT_FILES = 1000


class SettingsStoreProtocol(Protocol):
    def load_all(self) -> dict: ...

    def save_all(self, settings: dict) -> None: ...


class SettingsStore:
    """JSON backed settings store."""

    def __init__(self, path: Path | None = None) -> None:
        self.path = path or SETTINGS_PATH

    def load_all(self) -> dict:
        """Load settings, returning an empty dict when the file is missing."""
        if not self.path.exists():
            return {}
        try:
            payload = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise ValueError(f"Failed to read settings {self.path}: {exc}") from exc
        if not isinstance(payload, dict):
            raise ValueError(f"Settings file {self.path} must contain a JSON object.")
        return payload

    def save_all(self, settings: dict) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(settings, indent=2) + "\n", encoding="utf-8")


@dataclass
class RefactorConfig:
    """Options for the refactor commands."""

    # Insert a ns form when an empty .clj file is opened
    add_ns_to_blank_clj_files: bool = True
    keybinding_prefix: str | None = DEFAULT_PREFIX
    keybinding_modifier: str | None = None
    project_marker: str = PROJECT_MARKER
    source_extensions: tuple[str, ...] = field(default=SOURCE_EXTENSIONS)
    max_project_files: int = MAX_PROJECT_FILES

    def __post_init__(self) -> None:
        if isinstance(self.source_extensions, list):
            self.source_extensions = tuple(self.source_extensions)

    @classmethod
    def from_settings(cls, settings: dict[str, Any]) -> RefactorConfig:
        """Build a config from a settings dict, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        values = {key: value for key, value in settings.items() if key in known}
        config = cls(**values)
        # An explicit modifier without a prefix switches to modifier bindings
        if "keybinding_modifier" in values and "keybinding_prefix" not in values:
            config.keybinding_prefix = None
        return config

    def to_settings(self) -> dict[str, Any]:
        settings = {f.name: getattr(self, f.name) for f in fields(self)}
        settings["source_extensions"] = list(self.source_extensions)
        return settings


def load_config(store: SettingsStoreProtocol | None = None) -> RefactorConfig:
    """Load the refactor config from the settings store."""
    store = store or SettingsStore()
    return RefactorConfig.from_settings(store.load_all())


def save_config(config: RefactorConfig, store: SettingsStoreProtocol | None = None) -> None:
    """Persist config values, keeping unrelated settings intact."""
    store = store or SettingsStore()
    settings = store.load_all()
    settings.update(config.to_settings())
    store.save_all(settings)
