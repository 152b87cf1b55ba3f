"""Namespace declaration for newly created, empty source files."""

from __future__ import annotations

import logging
from pathlib import Path

from cljr.clojure.namespace import expected_ns, in_tests_p, insert_ns_form, tested_ns
from cljr.clojure.project import project_depends_on, project_dir
from cljr.config import RefactorConfig
from cljr.core.results import StepResult
from cljr.editing.buffer import Buffer

from .ns_clauses import USE, insert_in_ns

logger = logging.getLogger(__name__)

BLANK_FILE_EXTENSION = ".clj"
MIDJE = "midje"
MIDJE_NS = "midje.sweet"
CLOJURE_TEST_NS = "clojure.test"


def add_test_use_declarations(buffer: Buffer, ns: str, project_root: Path | None) -> None:
    """Use the namespace under test and the project's test library."""
    with buffer.save_excursion():
        insert_in_ns(buffer, USE)
        buffer.insert(tested_ns(ns))
        insert_in_ns(buffer, USE)
        buffer.insert(MIDJE_NS if project_depends_on(project_root, MIDJE) else CLOJURE_TEST_NS)


def add_ns_if_blank_clj_file(
    buffer: Buffer,
    config: RefactorConfig | None = None,
    project_root: Path | None = None,
) -> StepResult:
    """Insert a ns form into an empty .clj buffer.

    Test files (core_test.clj) also get :use clauses for the namespace
    under test and for midje.sweet or clojure.test. Errors are reported
    as a failed result; the buffer is left as far as it got.
    """
    config = config or RefactorConfig()
    path = buffer.file_path
    if not config.add_ns_to_blank_clj_files:
        return StepResult.skip("Blank file namespaces are disabled")
    if path is None or not path.name.endswith(BLANK_FILE_EXTENSION):
        return StepResult.skip(f"{buffer.name} is not a {BLANK_FILE_EXTENSION} file")
    if not buffer.is_empty:
        return StepResult.skip(f"{buffer.name} is not empty")

    try:
        if project_root is None:
            project_root = project_dir(path, config.project_marker)
        ns = expected_ns(path.resolve(), project_root)
        insert_ns_form(buffer, ns)
        buffer.newline(2)
        if in_tests_p(path):
            add_test_use_declarations(buffer, ns, project_root)
    except Exception as exc:
        logger.debug("Could not add ns to %s: %s", buffer.name, exc)
        return StepResult.failure(exc, f"Could not add ns to {buffer.name}: {exc}")

    logger.debug("Added ns %s to %s", ns, buffer.name)
    return StepResult.success(f"Added (ns {ns})", changed=1)
