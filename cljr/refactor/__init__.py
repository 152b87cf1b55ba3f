"""Refactor commands for Clojure source files."""

from .bootstrap import add_ns_if_blank_clj_file, add_test_use_declarations
from .ns_clauses import (
    CLAUSE_TEMPLATES,
    IMPORT,
    REQUIRE,
    USE,
    add_import_to_ns,
    add_require_to_ns,
    add_to_ns,
    add_use_to_ns,
    insert_in_ns,
)
from .rename import RenameResult, rename_file, replace_in_project

__all__ = [
    "CLAUSE_TEMPLATES",
    "IMPORT",
    "REQUIRE",
    "USE",
    "RenameResult",
    "add_import_to_ns",
    "add_ns_if_blank_clj_file",
    "add_require_to_ns",
    "add_test_use_declarations",
    "add_to_ns",
    "add_use_to_ns",
    "insert_in_ns",
    "rename_file",
    "replace_in_project",
]
