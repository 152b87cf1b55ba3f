"""Balanced expression navigation for Clojure source.

Brackets inside strings, ; comments and character literals (\\( etc.)
are not structural and are skipped.
"""

from __future__ import annotations

from collections.abc import Iterator

from cljr.exceptions import UnbalancedError

OPEN_BRACKETS = "([{"
CLOSE_BRACKETS = ")]}"
MATCHING = {"(": ")", "[": "]", "{": "}"}


def iter_brackets(text: str, start: int = 0, end: int | None = None) -> Iterator[tuple[int, str]]:
    """Yield (index, char) for every structural bracket in text[start:end]."""
    end = len(text) if end is None else min(end, len(text))
    i = start
    while i < end:
        char = text[i]
        if char == "\\":
            i += 2
            continue
        if char == ";":
            newline = text.find("\n", i)
            i = end if newline == -1 else newline + 1
            continue
        if char == '"':
            i += 1
            while i < end and text[i] != '"':
                i += 2 if text[i] == "\\" else 1
            i += 1
            continue
        if char in OPEN_BRACKETS or char in CLOSE_BRACKETS:
            yield i, char
        i += 1


def forward_list(text: str, pos: int) -> int:
    """Position just after the next balanced list starting at or after pos.

    Raises:
        UnbalancedError: If a list closes before one opens, or never closes.
    """
    stack: list[str] = []
    for index, char in iter_brackets(text, pos):
        if char in OPEN_BRACKETS:
            stack.append(char)
            continue
        if not stack or MATCHING[stack[-1]] != char:
            raise UnbalancedError(index)
        stack.pop()
        if not stack:
            return index + 1
    raise UnbalancedError(len(text) if stack else pos)


def enclosing_lists(text: str, pos: int) -> list[int]:
    """Positions of the open brackets enclosing pos, outermost first."""
    stack: list[int] = []
    for index, char in iter_brackets(text, 0, pos):
        if char in OPEN_BRACKETS:
            stack.append(index)
        elif stack:
            stack.pop()
    return stack


def backward_up_list(text: str, pos: int) -> int:
    """Position of the open bracket of the list enclosing pos.

    Raises:
        UnbalancedError: If pos is at top level.
    """
    stack = enclosing_lists(text, pos)
    if not stack:
        raise UnbalancedError(pos)
    return stack[-1]


def goto_toplevel(text: str, pos: int) -> int:
    """Position of the outermost list containing pos, or pos at top level."""
    stack = enclosing_lists(text, pos)
    return stack[0] if stack else pos
