"""Tests for the buffer model."""

from __future__ import annotations

from pathlib import Path

import pytest

from cljr.editing.buffer import TextBuffer, location_to_offset, offset_to_location


class TestLocations:
    def test_offset_to_location(self):
        text = "(ns a)\n\n(defn f [])"
        assert offset_to_location(text, 0) == (0, 0)
        assert offset_to_location(text, 7) == (1, 0)
        assert offset_to_location(text, 9) == (2, 1)

    def test_location_to_offset_clamps(self):
        text = "ab\ncd"
        assert location_to_offset(text, (1, 1)) == 4
        assert location_to_offset(text, (5, 9)) == 5
        assert location_to_offset(text, (0, 9)) == 2


class TestEditing:
    def test_insert_moves_point_after_text(self):
        buffer = TextBuffer("a.clj", "()")
        buffer.goto_char(1)
        buffer.insert("ns a")
        assert buffer.text == "(ns a)"
        assert buffer.point == 5

    def test_edits_before_point_shift_it(self):
        buffer = TextBuffer("a.clj", "abc")
        buffer.goto_char(2)
        buffer.replace_region(0, 0, "xx")
        assert buffer.point == 4

    def test_delete_region_returns_deleted_text(self):
        buffer = TextBuffer("a.clj", "hello world")
        buffer.goto_char(11)
        assert buffer.delete_region(5, 11) == " world"
        assert buffer.text == "hello"
        assert buffer.point == 5

    def test_search_forward_respects_bound(self):
        buffer = TextBuffer("a.clj", "(ns a (:require x)) (:use y)")
        assert buffer.search_forward("(:use", bound=19) is None
        assert buffer.point == 0
        assert buffer.search_forward("(:use") == 25

    def test_search_backward(self):
        buffer = TextBuffer("a.clj", "(a (b c))")
        buffer.goto_char(7)
        assert buffer.search_backward("(") == 3

    def test_looking_at(self):
        buffer = TextBuffer("a.clj", "(:require )")
        buffer.goto_char(9)
        assert buffer.looking_at(r"\s*\)")

    def test_forward_list_and_backward_up_list(self):
        buffer = TextBuffer("a.clj", '(ns a (:require [b ")"]))')
        buffer.forward_list()
        assert buffer.point == len(buffer.text)
        buffer.goto_char(17)
        assert buffer.backward_up_list() == 16


class TestIndentation:
    def test_body_form_indents_two(self):
        buffer = TextBuffer("a.clj", "(ns a.b)")
        buffer.goto_char(7)
        buffer.newline_and_indent()
        assert buffer.text == "(ns a.b\n  )"

    def test_aligns_with_first_argument(self):
        buffer = TextBuffer("a.clj", "(ns a\n  (:require [b :as c]))")
        buffer.goto_char(len(buffer.text) - 2)
        buffer.newline_and_indent()
        assert buffer.text == "(ns a\n  (:require [b :as c]\n            ))"

    def test_vector_indents_one(self):
        buffer = TextBuffer("a.clj", "[a b]")
        buffer.goto_char(4)
        buffer.newline_and_indent()
        assert buffer.text == "[a b\n ]"

    def test_trailing_whitespace_is_removed(self):
        buffer = TextBuffer("a.clj", "(ns a   )")
        buffer.goto_char(8)
        buffer.newline_and_indent()
        assert buffer.text == "(ns a\n  )"


class TestMarkers:
    def test_mark_follows_insertions_before_it(self):
        buffer = TextBuffer("a.clj", "(ns a)\n\n(f)")
        buffer.goto_char(9)
        buffer.push_mark()
        buffer.goto_char(5)
        buffer.insert(" (:use b)")
        assert buffer.pop_mark() == 18
        assert buffer.text[buffer.point] == "f"

    def test_pop_mark_on_empty_ring(self):
        buffer = TextBuffer("a.clj", "x")
        assert buffer.pop_mark() is None

    def test_pop_specific_mark(self):
        buffer = TextBuffer("a.clj", "abcdef")
        first = buffer.push_mark(1)
        buffer.push_mark(4)
        assert buffer.pop_mark(first) == 1
        assert buffer.mark == 4

    def test_insertion_type_marker_advances(self):
        buffer = TextBuffer("a.clj", "ab")
        stay = buffer.make_marker(1)
        advance = buffer.make_marker(1, insertion_type=True)
        buffer.replace_region(1, 1, "xyz")
        assert stay.position == 1
        assert advance.position == 4

    def test_save_excursion_restores_point(self):
        buffer = TextBuffer("a.clj", "(ns a)\n(f)")
        buffer.goto_char(8)
        with buffer.save_excursion():
            buffer.goto_char(0)
            buffer.insert(";; x\n")
        assert buffer.point == 13


class TestFiles:
    def test_from_file_and_save(self, tmp_path: Path):
        path = tmp_path / "core.clj"
        path.write_text("(ns core)", encoding="utf-8")
        buffer = TextBuffer.from_file(path)

        assert buffer.name == "core.clj"
        assert not buffer.modified
        buffer.goto_char(buffer.point_max)
        buffer.insert("\n")
        assert buffer.modified
        buffer.save()
        assert not buffer.modified
        assert path.read_text(encoding="utf-8") == "(ns core)\n"

    def test_missing_file_is_empty(self, tmp_path: Path):
        buffer = TextBuffer.from_file(tmp_path / "new.clj")
        assert buffer.is_empty
        assert not buffer.modified

    def test_save_without_file_raises(self):
        with pytest.raises(ValueError):
            TextBuffer("scratch").save()
