"""Adding :require, :use and :import entries to the ns declaration.

Each command moves point into the requested clause (creating the clause
when the declaration lacks it), expands a snippet for the new entry and
returns point to where it was once the snippet is exited.
"""

from __future__ import annotations

import logging
import re

from cljr.clojure.namespace import goto_ns
from cljr.editing import sexp
from cljr.editing.buffer import Buffer
from cljr.editing.snippets import SnippetSession, expand_snippet
from cljr.exceptions import CljrError

logger = logging.getLogger(__name__)

REQUIRE = ":require"
USE = ":use"
IMPORT = ":import"

CLAUSE_TEMPLATES = {
    REQUIRE: "[$1 :as $2]",
    USE: "[$1 :only ($2)]",
    IMPORT: "$1",
}


def _clause_re(kind: str) -> re.Pattern[str]:
    return re.compile(r"\(" + re.escape(kind) + r"(?=[\s)])")


def insert_in_ns(buffer: Buffer, kind: str) -> None:
    """Leave point where a new entry of the kind clause goes.

    An empty clause gets a single space before its close paren. A clause
    with entries gets a new indented line before its close paren. A
    missing clause is added as the last form of the declaration.

    Raises:
        NamespaceNotFoundError: If the buffer declares no namespace.
    """
    ns_start = goto_ns(buffer)
    ns_end = sexp.forward_list(buffer.text, ns_start)

    match = buffer.re_search_forward(_clause_re(kind), bound=ns_end)
    if match is not None:
        empty = re.compile(r"\s*\)")
        if buffer.looking_at(empty):
            buffer.delete_region(buffer.point, buffer.text.index(")", buffer.point))
            buffer.insert(" ")
        else:
            buffer.goto_char(match.start())
            buffer.forward_list()
            buffer.forward_char(-1)
            buffer.newline_and_indent()
        return

    logger.debug("Adding %s clause to ns in %s", kind, buffer.name)
    buffer.goto_char(ns_end - 1)
    buffer.newline_and_indent()
    buffer.insert(f"({kind} )")
    buffer.forward_char(-1)


def add_to_ns(buffer: Buffer, kind: str) -> SnippetSession:
    """Insert into the kind clause and expand its snippet.

    Point returns to its current position when the snippet exits.
    """
    mark = buffer.push_mark()
    try:
        insert_in_ns(buffer, kind)
    except CljrError:
        buffer.pop_mark(mark)
        raise

    def restore_point(session: SnippetSession) -> None:
        session.buffer.pop_mark(mark)

    return expand_snippet(buffer, CLAUSE_TEMPLATES[kind], on_exit=restore_point)


def add_require_to_ns(buffer: Buffer) -> SnippetSession:
    return add_to_ns(buffer, REQUIRE)


def add_use_to_ns(buffer: Buffer) -> SnippetSession:
    return add_to_ns(buffer, USE)


def add_import_to_ns(buffer: Buffer) -> SnippetSession:
    return add_to_ns(buffer, IMPORT)
