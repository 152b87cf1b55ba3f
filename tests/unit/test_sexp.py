"""Tests for balanced expression navigation."""

from __future__ import annotations

import pytest

from cljr.editing import sexp
from cljr.exceptions import UnbalancedError


def test_brackets_in_strings_comments_and_chars_are_skipped():
    text = '(a "(" ; )\n \\) [b])'
    brackets = [char for _, char in sexp.iter_brackets(text)]
    assert brackets == ["(", "[", "]", ")"]


def test_forward_list_skips_leading_text():
    assert sexp.forward_list("x (a [b] c) d", 0) == 11


def test_forward_list_raises_on_unclosed_list():
    with pytest.raises(UnbalancedError):
        sexp.forward_list("(ns a (:require", 0)


def test_forward_list_raises_on_stray_close():
    with pytest.raises(UnbalancedError):
        sexp.forward_list("a) (b)", 0)


def test_forward_list_raises_on_mismatched_brackets():
    with pytest.raises(UnbalancedError) as exc_info:
        sexp.forward_list("(a]", 0)
    assert exc_info.value.position == 2


def test_enclosing_lists_outermost_first():
    text = "(ns a (:use [b]))"
    assert sexp.enclosing_lists(text, 13) == [0, 6, 12]
    assert sexp.enclosing_lists(text, len(text)) == []


def test_backward_up_list_at_top_level():
    with pytest.raises(UnbalancedError):
        sexp.backward_up_list("(a) b", 4)


def test_goto_toplevel():
    text = "(a)\n(defn f [x] (inc x))"
    assert sexp.goto_toplevel(text, 18) == 4
    assert sexp.goto_toplevel(text, 3) == 3
