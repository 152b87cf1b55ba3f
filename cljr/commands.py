"""Headless command implementations for the cljr CLI."""

from __future__ import annotations

import sys
from argparse import Namespace
from pathlib import Path
from typing import Callable

from .config import RefactorConfig, load_config
from .core.keymap import CommandKeymap
from .core.keymap_manager import KeymapManager
from .core.results import Outcome
from .editing.buffer import Buffer
from .editing.snippets import SnippetSession
from .editing.workspace import Workspace
from .exceptions import CljrError
from .refactor.bootstrap import add_ns_if_blank_clj_file
from .refactor.ns_clauses import add_import_to_ns, add_require_to_ns, add_use_to_ns
from .refactor.rename import rename_file


def _error(message: str) -> int:
    print(f"Error: {message}", file=sys.stderr)
    return 1


def _load_config() -> RefactorConfig:
    try:
        return load_config()
    except ValueError as exc:
        print(f"[cljr] {exc}; using defaults", file=sys.stderr)
        return RefactorConfig()


def _open(path_arg: str) -> tuple[Workspace, Buffer]:
    workspace = Workspace()
    buffer = workspace.find_file(Path(path_arg).expanduser().resolve())
    return workspace, buffer


def cmd_rename_file(args: Namespace) -> int:
    """Rename a file and propagate its namespace."""
    path = Path(args.file).expanduser().resolve()
    workspace = Workspace()
    buffer = workspace.find_file(path)
    try:
        result = rename_file(workspace, buffer, args.new_name, _load_config())
    except (CljrError, OSError) as exc:
        return _error(str(exc))

    print(result.message)
    print(f"Namespace {result.old_ns} -> {result.new_ns}")
    if result.replace.outcome == Outcome.FAILED:
        print(f"Warning: {result.replace.message}", file=sys.stderr)
    elif result.replace.message:
        print(result.replace.message)
    return 0


def _add_entry(
    args: Namespace,
    command: Callable[[Buffer], SnippetSession],
    values: list[str],
) -> int:
    path = Path(args.file)
    if not path.exists():
        return _error(f"File not found: {path}")
    _, buffer = _open(args.file)
    try:
        session = command(buffer)
    except CljrError as exc:
        return _error(str(exc))
    session.fill(values)
    buffer.save()
    print(f"Updated {buffer.file_path}")
    return 0


def cmd_add_require(args: Namespace) -> int:
    """Add a :require entry to a file's ns declaration."""
    return _add_entry(args, add_require_to_ns, [args.lib, args.alias])


def cmd_add_use(args: Namespace) -> int:
    """Add a :use entry to a file's ns declaration."""
    return _add_entry(args, add_use_to_ns, [args.lib, " ".join(args.names)])


def cmd_add_import(args: Namespace) -> int:
    """Add an :import entry to a file's ns declaration."""
    return _add_entry(args, add_import_to_ns, [args.class_name])


def cmd_bootstrap(args: Namespace) -> int:
    """Insert a namespace declaration into an empty file."""
    _, buffer = _open(args.file)
    result = add_ns_if_blank_clj_file(buffer, _load_config())
    if result.failed:
        return _error(result.message)
    if result.skipped:
        print(f"Skipped: {result.message}")
        return 0
    buffer.save()
    print(f"{result.message} to {buffer.file_path}")
    return 0


def cmd_keys(args: Namespace) -> int:
    """Print the refactor key bindings."""
    if args.prefix:
        keymap = CommandKeymap()
        keymap.add_keybindings_with_prefix(args.prefix)
    elif args.modifier:
        keymap = CommandKeymap()
        keymap.add_keybindings_with_modifier(args.modifier)
    else:
        try:
            keymap = KeymapManager().initialize()
        except ValueError as exc:
            return _error(str(exc))

    width = max((len(keys) for keys, _ in keymap.describe()), default=0)
    for keys, label in keymap.describe():
        print(f"{keys.ljust(width)}  {label}")
    return 0
