"""Namespace declarations: finding, reading and deriving ns names."""

from __future__ import annotations

import re
from pathlib import Path, PurePath

from cljr.editing import sexp
from cljr.editing.buffer import Buffer
from cljr.exceptions import NamespaceNotFoundError

# (ns name ...), (in-ns 'name), (clojure.core/ns ^:meta name ...)
NAMESPACE_NAME_RE = re.compile(
    r"^\((?:clojure\.core/)?(?:in-)?ns\+?\s+"
    r"(?:(?:#?\^\{[^}]*\}|\^:\S+)\s*)*"
    r"['\:]?([^()\s\"]+)",
    re.MULTILINE,
)

TEST_FILE_SUFFIX = "_test.clj"
TEST_NS_SUFFIX = "-test"


def find_ns(text: str) -> str | None:
    """Namespace declared in text, or None."""
    match = NAMESPACE_NAME_RE.search(text)
    return match.group(1) if match else None


def goto_ns(buffer: Buffer) -> int:
    """Move point to the opening paren of the namespace declaration.

    Raises:
        NamespaceNotFoundError: If the buffer declares no namespace.
    """
    buffer.goto_char(buffer.point_min)
    match = buffer.re_search_forward(NAMESPACE_NAME_RE)
    if match is None:
        raise NamespaceNotFoundError()
    return buffer.goto_char(sexp.goto_toplevel(buffer.text, match.end()))


def expected_ns(path: PurePath, project_root: PurePath | None = None) -> str:
    """Namespace a file at path should declare.

    The path is taken relative to the project root and its first
    directory (src, test, ...) dropped: src/my_app/core.clj is
    my-app.core. Without a project root the file stem is used.
    """
    parts: tuple[str, ...] = ()
    if project_root is not None:
        try:
            parts = path.relative_to(project_root).with_suffix("").parts
        except ValueError:
            parts = ()
    names = parts[1:] if len(parts) > 1 else (path.stem,)
    return ".".join(names).replace("_", "-")


def ns_form(ns: str) -> str:
    return f"(ns {ns})"


def insert_ns_form(buffer: Buffer, ns: str) -> None:
    """Insert a namespace declaration at the start of the buffer."""
    buffer.goto_char(buffer.point_min)
    buffer.insert(ns_form(ns))


def update_ns(buffer: Buffer, ns: str) -> bool:
    """Rename the declared namespace. Returns False if none is declared."""
    match = NAMESPACE_NAME_RE.search(buffer.text)
    if match is None:
        return False
    with buffer.save_excursion():
        buffer.replace_region(match.start(1), match.end(1), ns)
    return True


def in_tests_p(path: Path | None) -> bool:
    """True if path names a test file (core_test.clj)."""
    return path is not None and path.name.endswith(TEST_FILE_SUFFIX)


def tested_ns(ns: str) -> str:
    """Namespace under test for a test namespace (foo.core-test is foo.core)."""
    return ns.removesuffix(TEST_NS_SUFFIX)
