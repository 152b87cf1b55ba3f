"""Core, UI-agnostic models and helpers for cljr."""

from .keymap import (
    DEFAULT_COMMANDS,
    CommandKeymap,
    KeySequence,
    RefactorCommand,
    format_key_sequence,
    key_pairs_with_modifier,
    key_pairs_with_prefix,
    read_key_sequence,
)
from .keymap_manager import KeymapManager
from .results import Outcome, StepResult

__all__ = [
    "DEFAULT_COMMANDS",
    "CommandKeymap",
    "KeySequence",
    "KeymapManager",
    "Outcome",
    "RefactorCommand",
    "StepResult",
    "format_key_sequence",
    "key_pairs_with_modifier",
    "key_pairs_with_prefix",
    "read_key_sequence",
]
