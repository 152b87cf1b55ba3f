"""Modal screens for cljr."""

from .keymap_help import KeymapHelpScreen
from .prompt import PromptScreen

__all__ = ["KeymapHelpScreen", "PromptScreen"]
