"""Tests for adding :require, :use and :import entries."""

from __future__ import annotations

import pytest

from cljr.editing.buffer import TextBuffer
from cljr.exceptions import NamespaceNotFoundError
from cljr.refactor.ns_clauses import (
    REQUIRE,
    add_import_to_ns,
    add_require_to_ns,
    add_use_to_ns,
    insert_in_ns,
)

BODY = "\n\n(defn f [] 1)"


def _buffer(ns_form: str) -> TextBuffer:
    buffer = TextBuffer("core.clj", ns_form + BODY)
    buffer.goto_char(buffer.point_max)
    return buffer


class TestAddRequire:
    def test_creates_missing_clause(self):
        buffer = _buffer("(ns foo)")

        session = add_require_to_ns(buffer)
        assert session.current_field == 1
        session.fill(["a", "b"])

        assert buffer.text == "(ns foo\n  (:require [a :as b]))" + BODY

    def test_appends_to_existing_clause(self):
        buffer = _buffer("(ns foo\n  (:require [a :as b]))")

        add_require_to_ns(buffer).fill(["c", "d"])

        assert buffer.text == (
            "(ns foo\n  (:require [a :as b]\n            [c :as d]))" + BODY
        )
        assert buffer.text.count("(:require") == 1

    @pytest.mark.parametrize("clause", ["(:require)", "(:require   )"])
    def test_fills_empty_clause(self, clause):
        buffer = _buffer(f"(ns foo\n  {clause})")

        add_require_to_ns(buffer).fill(["a", "b"])

        assert buffer.text == "(ns foo\n  (:require [a :as b]))" + BODY

    def test_ignores_clauses_outside_ns(self):
        buffer = TextBuffer("core.clj", "(ns foo)\n(comment (:require x))")

        add_require_to_ns(buffer).fill(["a", "b"])

        assert buffer.text == "(ns foo\n  (:require [a :as b]))\n(comment (:require x))"

    def test_require_macros_is_a_different_clause(self):
        buffer = TextBuffer("core.cljs", "(ns foo\n  (:require-macros [m :as n]))")

        add_require_to_ns(buffer).fill(["a", "b"])

        assert "(:require [a :as b])" in buffer.text
        assert "(:require-macros [m :as n])" in buffer.text

    def test_point_returns_after_snippet_exit(self):
        buffer = _buffer("(ns foo)")

        add_require_to_ns(buffer).fill(["clojure.string", "str"])

        assert buffer.point == buffer.point_max
        assert buffer.mark is None

    def test_point_stays_in_clause_until_exit(self):
        buffer = _buffer("(ns foo)")

        session = add_require_to_ns(buffer)
        buffer.insert("clojure.set")

        assert session.active
        assert buffer.text.startswith("(ns foo\n  (:require [clojure.set :as ]))")

    def test_missing_ns_raises_and_restores_mark(self):
        buffer = TextBuffer("core.clj", "(defn f [] 1)")
        buffer.goto_char(5)

        with pytest.raises(NamespaceNotFoundError):
            add_require_to_ns(buffer)

        assert buffer.point == 5
        assert buffer.mark is None


def test_add_use():
    buffer = _buffer("(ns foo)")
    add_use_to_ns(buffer).fill(["clojure.string", "join split"])
    assert buffer.text == "(ns foo\n  (:use [clojure.string :only (join split)]))" + BODY


def test_add_import():
    buffer = _buffer("(ns foo\n  (:require [a :as b]))")
    add_import_to_ns(buffer).fill(["java.util.Date"])
    assert buffer.text == (
        "(ns foo\n  (:require [a :as b])\n  (:import java.util.Date))" + BODY
    )


def test_insert_in_ns_leaves_point_inside_new_clause():
    buffer = TextBuffer("core.clj", "(ns foo)")
    insert_in_ns(buffer, REQUIRE)
    assert buffer.text == "(ns foo\n  (:require ))"
    assert buffer.text[buffer.point] == ")"
    assert buffer.text[buffer.point - 1] == " "
