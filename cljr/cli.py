#!/usr/bin/env python3
"""cljr - Clojure namespace refactoring for the terminal."""

from __future__ import annotations

import argparse
import logging
import sys


def main(argv: list[str] | None = None) -> int:
    """Entry point for the CLI."""
    parser = argparse.ArgumentParser(
        prog="cljr",
        description="Clojure namespace refactoring for the terminal",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Log debug output to stderr")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # edit
    edit_parser = subparsers.add_parser("edit", help="Open a file in the editor")
    edit_parser.add_argument("file", help="File to edit")

    # rename-file
    rename_parser = subparsers.add_parser(
        "rename-file", help="Rename a file and update its namespace across the project"
    )
    rename_parser.add_argument("file", help="File to rename")
    rename_parser.add_argument("new_name", help="New file name or path")

    # add-require / add-use / add-import
    require_parser = subparsers.add_parser("add-require", help="Add a [lib :as alias] :require entry")
    require_parser.add_argument("file", help="Clojure source file")
    require_parser.add_argument("lib", help="Namespace to require")
    require_parser.add_argument("alias", help="Alias for the namespace")

    use_parser = subparsers.add_parser("add-use", help="Add a [lib :only (names)] :use entry")
    use_parser.add_argument("file", help="Clojure source file")
    use_parser.add_argument("lib", help="Namespace to use")
    use_parser.add_argument("names", nargs="+", help="Names to refer")

    import_parser = subparsers.add_parser("add-import", help="Add an :import entry")
    import_parser.add_argument("file", help="Clojure source file")
    import_parser.add_argument("class_name", metavar="class", help="Class or (package Class ...) form")

    # bootstrap
    bootstrap_parser = subparsers.add_parser(
        "bootstrap", help="Insert a namespace declaration into an empty .clj file"
    )
    bootstrap_parser.add_argument("file", help="Clojure source file (created if missing)")

    # keys
    keys_parser = subparsers.add_parser("keys", help="Show the refactor key bindings")
    keys_group = keys_parser.add_mutually_exclusive_group()
    keys_group.add_argument("--prefix", help="Prefix key, e.g. ctrl+c")
    keys_group.add_argument("--modifier", help="Modifier chorded with each key, e.g. ctrl")

    # Allow "cljr FILE" as a shortcut for "cljr edit FILE"
    raw = sys.argv[1:] if argv is None else argv
    commands = set(subparsers.choices)
    if raw and not raw[0].startswith("-") and raw[0] not in commands:
        raw = ["edit", *raw]

    args = parser.parse_args(raw)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    # No command = launch the editor without a file
    if args.command in (None, "edit"):
        from pathlib import Path

        from .ui.app import CljrApp

        path = Path(args.file) if args.command == "edit" else None
        app = CljrApp(path=path)
        app.run()
        return 0

    # Import commands lazily to speed up --help
    from .commands import (
        cmd_add_import,
        cmd_add_require,
        cmd_add_use,
        cmd_bootstrap,
        cmd_keys,
        cmd_rename_file,
    )

    handlers = {
        "rename-file": cmd_rename_file,
        "add-require": cmd_add_require,
        "add-use": cmd_add_use,
        "add-import": cmd_add_import,
        "bootstrap": cmd_bootstrap,
        "keys": cmd_keys,
    }
    handler = handlers.get(args.command)
    if handler is None:
        parser.print_help()
        return 1
    return handler(args)


if __name__ == "__main__":
    sys.exit(main())
