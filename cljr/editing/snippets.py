"""Snippet templates with numbered fields.

Template syntax:
    $1, $2, ...      empty fields, visited in number order
    ${1:default}     field with default text
    $0               exit point (end of the snippet when absent)
    \\$               literal dollar sign

Usage:
    session = expand_snippet(buffer, "[$1 :as $2]", on_exit=restore)
    session.fill(["clojure.string", "str"])  # or next_field() per field

Field positions are buffer markers, so text typed into a field moves the
fields after it. Exiting calls on_exit exactly once.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Callable

from .buffer import Buffer, Marker

logger = logging.getLogger(__name__)

_TOKEN_RE = re.compile(r"\\\$|\$\{(\d+):([^}]*)\}|\$(\d+)")


@dataclass
class SnippetField:
    number: int
    start: int
    end: int


@dataclass
class ParsedSnippet:
    """Expanded template text with field offsets relative to its start."""

    text: str
    fields: list[SnippetField]
    exit_offset: int


def parse_template(template: str) -> ParsedSnippet:
    """Expand a template into plain text and field offsets."""
    parts: list[str] = []
    fields: dict[int, SnippetField] = {}
    exit_offset: int | None = None
    length = 0
    last = 0

    for match in _TOKEN_RE.finditer(template):
        literal = template[last : match.start()]
        parts.append(literal)
        length += len(literal)
        last = match.end()

        if match.group(0) == "\\$":
            parts.append("$")
            length += 1
            continue

        number = int(match.group(1) or match.group(3))
        default = match.group(2) or ""
        if number == 0:
            exit_offset = length
            continue
        parts.append(default)
        if number not in fields:
            fields[number] = SnippetField(number, length, length + len(default))
        length += len(default)

    tail = template[last:]
    parts.append(tail)
    length += len(tail)

    ordered = [fields[number] for number in sorted(fields)]
    return ParsedSnippet("".join(parts), ordered, length if exit_offset is None else exit_offset)


class SnippetSession:
    """An expanded snippet whose fields are being filled in."""

    def __init__(
        self,
        buffer: Buffer,
        fields: list[tuple[int, Marker, Marker]],
        exit_marker: Marker,
        on_exit: Callable[[SnippetSession], None] | None = None,
    ) -> None:
        self.buffer = buffer
        self._fields = fields
        self._exit_marker = exit_marker
        self._on_exit = on_exit
        self._index = -1
        self.active = True

    @property
    def field_count(self) -> int:
        return len(self._fields)

    @property
    def current_field(self) -> int | None:
        """Number of the field being edited, or None when exited."""
        if not self.active or not 0 <= self._index < len(self._fields):
            return None
        return self._fields[self._index][0]

    def field_text(self, number: int) -> str:
        self.buffer.sync()
        for field_number, start, end in self._fields:
            if field_number == number:
                return self.buffer.text[start.position : end.position]
        raise KeyError(number)

    def start(self) -> None:
        """Move to the first field, or exit if there are none."""
        self._index = -1
        self.next_field()

    def next_field(self) -> int | None:
        """Advance to the next field. Exits after the last one."""
        if not self.active:
            return None
        self.buffer.sync()
        self._index += 1
        if self._index >= len(self._fields):
            self.exit()
            return None
        _, _, end = self._fields[self._index]
        self.buffer.goto_char(end.position)
        return self.current_field

    def previous_field(self) -> int | None:
        if not self.active or self._index <= 0:
            return self.current_field
        self.buffer.sync()
        self._index -= 1
        _, _, end = self._fields[self._index]
        self.buffer.goto_char(end.position)
        return self.current_field

    def set_field_text(self, text: str) -> None:
        """Replace the current field's text and leave point after it."""
        if self.current_field is None:
            return
        self.buffer.sync()
        _, start, end = self._fields[self._index]
        self.buffer.replace_region(start.position, end.position, text)
        self.buffer.goto_char(end.position)

    def fill(self, values: Sequence[str]) -> None:
        """Fill remaining fields in order with values, then exit.

        Fields without a value keep their current text.
        """
        if self._index < 0:
            self.start()
        for value in values:
            if not self.active:
                break
            self.set_field_text(value)
            self.next_field()
        while self.active:
            self.next_field()

    def exit(self) -> None:
        """Leave the snippet, move to its exit point and notify."""
        if not self.active:
            return
        self.buffer.sync()
        self.active = False
        self.buffer.goto_char(self._exit_marker.position)
        for _, start, end in self._fields:
            self.buffer.release_marker(start)
            self.buffer.release_marker(end)
        self.buffer.release_marker(self._exit_marker)
        logger.debug("Snippet exited in %s", self.buffer.name)
        if self._on_exit is not None:
            callback, self._on_exit = self._on_exit, None
            callback(self)


def expand_snippet(
    buffer: Buffer,
    template: str,
    on_exit: Callable[[SnippetSession], None] | None = None,
) -> SnippetSession:
    """Insert template at point and start a session on its first field."""
    parsed = parse_template(template)
    origin = buffer.point
    buffer.insert(parsed.text)

    fields = [
        (
            field.number,
            buffer.make_marker(origin + field.start),
            buffer.make_marker(origin + field.end, insertion_type=True),
        )
        for field in parsed.fields
    ]
    exit_marker = buffer.make_marker(origin + parsed.exit_offset, insertion_type=True)
    session = SnippetSession(buffer, fields, exit_marker, on_exit)
    session.start()
    return session
