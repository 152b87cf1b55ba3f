"""Plugin system for cljr.

Plugins extend the editor with optional features like the refactor
commands. Each plugin is a self-contained module that registers hooks
with the app.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ..editing.buffer import Buffer
    from ..ui.app import CljrApp


class Plugin(ABC):
    """Base class for cljr plugins.

    Plugins extend cljr with optional features. They:
    - Register themselves with the app at startup
    - Can intercept and handle key events
    - Can react to files being opened
    - Can read settings
    """

    name: str = "unnamed"  # Unique plugin identifier

    @abstractmethod
    def register(self, app: "CljrApp") -> None:
        """Called when app initializes. Set up the plugin here.

        Args:
            app: The main application instance
        """
        pass

    def on_key(self, app: "CljrApp", event: Any) -> bool:
        """Handle a key event.

        Args:
            app: The main application instance
            event: The key event from Textual

        Returns:
            True if the key was consumed, False to let it propagate
        """
        return False

    def on_file_open(self, app: "CljrApp", buffer: "Buffer") -> None:
        """Called after a file is opened into a buffer.

        Args:
            app: The main application instance
            buffer: The buffer visiting the opened file
        """
        pass

    def on_settings_load(self, app: "CljrApp", settings: dict[str, Any]) -> None:
        """Called when settings are loaded.

        Args:
            app: The main application instance
            settings: The loaded settings dictionary
        """
        pass


# Plugin registry
_plugins: list[type[Plugin]] = []


def register_plugin(plugin_cls: type[Plugin]) -> type[Plugin]:
    """Decorator to register a plugin class.

    Usage:
        @register_plugin
        class MyPlugin(Plugin):
            ...
    """
    if plugin_cls not in _plugins:
        _plugins.append(plugin_cls)
    return plugin_cls


def discover_plugins() -> list[type[Plugin]]:
    """Discover and return all registered plugin classes.

    This imports plugin modules which triggers their registration.

    Returns:
        List of plugin classes
    """
    from . import refactor  # noqa: F401

    return _plugins.copy()


def get_registered_plugins() -> list[type[Plugin]]:
    """Get already registered plugins without triggering discovery.

    Returns:
        List of registered plugin classes
    """
    return _plugins.copy()
