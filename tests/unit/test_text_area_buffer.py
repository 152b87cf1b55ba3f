"""Tests for inferring edits typed directly into the TextArea."""

from __future__ import annotations

from cljr.editing.buffer import location_to_offset, offset_to_location
from cljr.editing.snippets import expand_snippet
from cljr.ui.text_area_buffer import TextAreaBuffer, infer_edit


class FakeTextArea:
    """Just enough of TextArea for the buffer adapter."""

    def __init__(self, text: str = "") -> None:
        self.text = text
        self.cursor_location = (0, 0)

    def move_cursor(self, location: tuple[int, int]) -> None:
        self.cursor_location = location

    def replace(self, insert: str, start: tuple[int, int], end: tuple[int, int]) -> None:
        start_offset = location_to_offset(self.text, start)
        end_offset = location_to_offset(self.text, end)
        self.text = self.text[:start_offset] + insert + self.text[end_offset:]
        self.cursor_location = offset_to_location(self.text, start_offset + len(insert))

    def type(self, chars: str) -> None:
        """Insert at the cursor the way key presses do, bypassing the buffer."""
        offset = location_to_offset(self.text, self.cursor_location)
        self.text = self.text[:offset] + chars + self.text[offset:]
        self.cursor_location = offset_to_location(self.text, offset + len(chars))


def test_typed_character():
    assert infer_edit("ab", "aXb", cursor=2) == (1, 1, 1)


def test_cursor_disambiguates_repeated_text():
    assert infer_edit("aa", "aaa", cursor=1) == (0, 0, 1)
    assert infer_edit("aa", "aaa", cursor=3) == (2, 2, 1)


def test_backspace():
    assert infer_edit("abc", "ac", cursor=1) == (1, 2, 0)


def test_replacement_falls_back_to_diff():
    assert infer_edit("abc", "aXc", cursor=0) == (1, 2, 1)


def test_insertion_away_from_cursor():
    assert infer_edit("abc", "abXYc", cursor=0) == (2, 2, 2)


def test_snippet_fields_follow_typed_text():
    text_area = FakeTextArea("(:require )")
    buffer = TextAreaBuffer(text_area, "core.clj")
    buffer.goto_char(10)
    session = expand_snippet(buffer, "[$1 :as $2]")

    text_area.type("walk")
    assert session.field_text(1) == "walk"
    assert session.next_field() == 2
    text_area.type("w")
    session.next_field()

    assert text_area.text == "(:require [walk :as w])"
    assert not session.active
    assert buffer.point == len(text_area.text) - 1


def test_previous_field_after_typing():
    text_area = FakeTextArea("(:require )")
    buffer = TextAreaBuffer(text_area, "core.clj")
    buffer.goto_char(10)
    session = expand_snippet(buffer, "[$1 :as $2]")
    session.next_field()

    text_area.type("s")
    assert session.previous_field() == 1
    text_area.type("str")

    assert text_area.text == "(:require [str :as s])"
    assert buffer.point == len("(:require [str")


def test_marks_follow_typed_text():
    text_area = FakeTextArea("(ns a)\n(defn f [])")
    buffer = TextAreaBuffer(text_area, "a.clj")
    buffer.push_mark(7)

    text_area.type(";; hi\n")

    assert buffer.mark == 13
    assert buffer.pop_mark() == 13
    assert buffer.text[buffer.point :].startswith("(defn")
