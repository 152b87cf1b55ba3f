"""Key sequences and the refactor command table.

Key names follow Textual's key syntax ("ctrl+c", "tab", "r"). A key
sequence is a tuple of key names, pressed one after another.

Bindings are built from a fixed table of two-character mnemonics, either
after a prefix ("ctrl+c" then "r" "f") or chorded with a modifier
("ctrl+r" then "ctrl+f").
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

KeySequence = tuple[str, ...]

# Named keys are single keys even though they are longer than one char
NAMED_KEYS = frozenset(
    {
        "backspace",
        "delete",
        "down",
        "end",
        "enter",
        "escape",
        "home",
        "insert",
        "left",
        "pagedown",
        "pageup",
        "right",
        "space",
        "tab",
        "up",
    }
    | {f"f{n}" for n in range(1, 25)}
)

# Chords terminals cannot tell apart from another key
SPECIAL_MODIFIER_COMBINATIONS = {
    "ctrl+i": "tab",
    "ctrl+m": "enter",
}


@dataclass(frozen=True)
class RefactorCommand:
    """A refactor command bindable through a mnemonic."""

    mnemonic: str  # Two chars, e.g. "rf"
    action: str  # App action name, e.g. "cljr_rename_file"
    label: str  # Display label


DEFAULT_COMMANDS: tuple[RefactorCommand, ...] = (
    RefactorCommand("rf", "cljr_rename_file", "Rename file"),
    RefactorCommand("ar", "cljr_add_require", "Add :require to ns"),
    RefactorCommand("au", "cljr_add_use", "Add :use to ns"),
    RefactorCommand("ai", "cljr_add_import", "Add :import to ns"),
)


def _is_key_name(token: str) -> bool:
    return "+" in token or token.lower() in NAMED_KEYS


def read_key_sequence(text: str) -> KeySequence:
    """Parse a space separated key description into a key sequence.

    Named keys and chords ("tab", "ctrl+c") are one key each. Any other
    word is typed out, one key per character, so "ctrl+c rf" is
    ("ctrl+c", "r", "f").
    """
    keys: list[str] = []
    for token in text.split():
        if _is_key_name(token):
            keys.append(token)
        else:
            keys.extend(token)
    return tuple(keys)


def fix_special_modifier_combinations(key: str) -> str:
    """Map the reserved chords to the key names they arrive as."""
    return SPECIAL_MODIFIER_COMBINATIONS.get(key, key)


def key_pairs_with_prefix(prefix: str, keys: str) -> KeySequence:
    """Key sequence for a mnemonic typed after a prefix."""
    return read_key_sequence(f"{prefix} {keys}")


def key_pairs_with_modifier(modifier: str, keys: str) -> KeySequence:
    """Key sequence chording every mnemonic character with a modifier."""
    if modifier and not modifier.endswith("+"):
        modifier = f"{modifier}+"
    return read_key_sequence(
        " ".join(fix_special_modifier_combinations(f"{modifier}{char}") for char in keys)
    )


def format_key_sequence(sequence: KeySequence) -> str:
    """Human-readable form of a key sequence."""
    return " ".join(f"<{key}>" if len(key) > 1 else key for key in sequence)


class CommandKeymap:
    """Owns the key sequence to command table for one editing session."""

    def __init__(self, commands: tuple[RefactorCommand, ...] = DEFAULT_COMMANDS) -> None:
        self._commands = commands
        self._bindings: dict[KeySequence, RefactorCommand] = {}

    @property
    def commands(self) -> tuple[RefactorCommand, ...]:
        return self._commands

    def add_keybindings(self, key_fn: Callable[[str], KeySequence]) -> None:
        """Bind every command to the sequence key_fn builds from its mnemonic."""
        for command in self._commands:
            self._bindings[key_fn(command.mnemonic)] = command

    def add_keybindings_with_prefix(self, prefix: str) -> None:
        self.add_keybindings(lambda keys: key_pairs_with_prefix(prefix, keys))

    def add_keybindings_with_modifier(self, modifier: str) -> None:
        self.add_keybindings(lambda keys: key_pairs_with_modifier(modifier, keys))

    def clear(self) -> None:
        self._bindings.clear()

    def lookup(self, sequence: KeySequence) -> RefactorCommand | None:
        """Get the command bound to exactly this sequence."""
        return self._bindings.get(tuple(sequence))

    def is_prefix(self, sequence: KeySequence) -> bool:
        """True if sequence is the start of a longer bound sequence."""
        sequence = tuple(sequence)
        size = len(sequence)
        return any(
            len(bound) > size and bound[:size] == sequence for bound in self._bindings
        )

    def bindings(self) -> dict[KeySequence, RefactorCommand]:
        return dict(self._bindings)

    def describe(self) -> list[tuple[str, str]]:
        """(keys, label) rows for display, in command table order."""
        rows = []
        for command in self._commands:
            for sequence, bound in self._bindings.items():
                if bound == command:
                    rows.append((format_key_sequence(sequence), command.label))
        return rows
