"""Refactor plugin for cljr.

Binds the refactor commands to key sequences, adds a namespace to blank
.clj files on open and drives snippet fields with tab/escape.
"""

from .. import register_plugin
from .plugin import RefactorPlugin

# Register the plugin
register_plugin(RefactorPlugin)

__all__ = ["RefactorPlugin"]
