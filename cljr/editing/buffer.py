"""Editor buffer model.

A buffer holds text, a point (cursor offset) and markers, and optionally
visits a file. Commands work on the Buffer interface so they run the same
against an in-memory TextBuffer or a Textual TextArea adapter.

Positions are character offsets into the text, 0 based.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from . import sexp

# Heads whose body is indented two columns instead of aligned
BODY_FORMS = frozenset(
    {
        "ns",
        "def",
        "defn",
        "defn-",
        "defmacro",
        "defmethod",
        "defmulti",
        "defprotocol",
        "defrecord",
        "deftype",
        "deftest",
        "fn",
        "let",
        "letfn",
        "loop",
        "binding",
        "when",
        "when-not",
        "when-let",
        "if-let",
        "doseq",
        "dotimes",
        "for",
        "try",
        "catch",
        "finally",
        "testing",
        "facts",
        "fact",
        "with-open",
        "comment",
    }
)

_HEAD_RE = re.compile(r"[(\[{]\s*([^\s()\[\]{}\"]+)([ \t]+)([^\s;])?")


def offset_to_location(text: str, offset: int) -> tuple[int, int]:
    """Convert a character offset to (row, col)."""
    offset = max(0, min(offset, len(text)))
    row = text.count("\n", 0, offset)
    line_start = text.rfind("\n", 0, offset) + 1
    return (row, offset - line_start)


def location_to_offset(text: str, location: tuple[int, int]) -> int:
    """Convert (row, col) to a character offset, clamped to the text."""
    row, col = location
    lines = text.split("\n")
    row = max(0, min(row, len(lines) - 1))
    col = max(0, min(col, len(lines[row])))
    return sum(len(line) + 1 for line in lines[:row]) + col


class Marker:
    """A position that follows edits made through its buffer.

    With insertion_type False the marker stays before text inserted at
    its position; with True it advances past it.
    """

    def __init__(self, position: int, insertion_type: bool = False) -> None:
        self.position = position
        self.insertion_type = insertion_type

    def __repr__(self) -> str:
        return f"Marker({self.position})"

    def adjust(self, start: int, end: int, length: int) -> None:
        """Update for text[start:end] replaced with length chars."""
        if start == end and self.position == start:
            if self.insertion_type:
                self.position += length
            return
        if self.position >= end:
            self.position += length - (end - start)
        elif self.position > start:
            self.position = start + length if self.insertion_type else start


class Buffer(ABC):
    """Text being edited, with a point and markers."""

    def __init__(self, name: str, file_path: Path | None = None) -> None:
        self.name = name
        self.file_path = file_path
        self._saved_text = ""
        self._markers: list[Marker] = []
        self._mark_ring: list[Marker] = []

    # ─────────────────────────────────────────────────────────────────
    # Storage (implemented by subclasses)
    # ─────────────────────────────────────────────────────────────────

    @property
    @abstractmethod
    def text(self) -> str:
        """Full buffer text."""

    @abstractmethod
    def _get_point(self) -> int: ...

    @abstractmethod
    def _set_point(self, position: int) -> None: ...

    @abstractmethod
    def _raw_replace(self, start: int, end: int, text: str) -> None:
        """Replace text[start:end] without touching markers."""

    def sync(self) -> None:
        """Bring markers up to date with edits made outside this buffer."""

    # ─────────────────────────────────────────────────────────────────
    # Properties
    # ─────────────────────────────────────────────────────────────────

    @property
    def point(self) -> int:
        return self._get_point()

    @point.setter
    def point(self, position: int) -> None:
        self._set_point(max(0, min(position, len(self.text))))

    @property
    def location(self) -> tuple[int, int]:
        """Point as (row, col)."""
        return offset_to_location(self.text, self.point)

    @property
    def point_min(self) -> int:
        return 0

    @property
    def point_max(self) -> int:
        return len(self.text)

    @property
    def is_empty(self) -> bool:
        return self.point_min == self.point_max

    @property
    def modified(self) -> bool:
        return self.text != self._saved_text

    @property
    def current_column(self) -> int:
        return self.location[1]

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name!r}>"

    # ─────────────────────────────────────────────────────────────────
    # Movement
    # ─────────────────────────────────────────────────────────────────

    def goto_char(self, position: int) -> int:
        self.point = position
        return self.point

    def forward_char(self, count: int = 1) -> int:
        return self.goto_char(self.point + count)

    def line_beginning_position(self) -> int:
        return self.text.rfind("\n", 0, self.point) + 1

    def line_end_position(self) -> int:
        end = self.text.find("\n", self.point)
        return len(self.text) if end == -1 else end

    def forward_list(self) -> int:
        """Move over the next balanced list."""
        return self.goto_char(sexp.forward_list(self.text, self.point))

    def backward_up_list(self) -> int:
        """Move to the open bracket of the enclosing list."""
        return self.goto_char(sexp.backward_up_list(self.text, self.point))

    # ─────────────────────────────────────────────────────────────────
    # Search
    # ─────────────────────────────────────────────────────────────────

    def search_forward(self, needle: str, bound: int | None = None) -> int | None:
        """Move point to the end of the next occurrence of needle.

        Returns the new point, or None (point unchanged) if not found
        before bound.
        """
        end = len(self.text) if bound is None else bound
        index = self.text.find(needle, self.point, end)
        if index == -1:
            return None
        return self.goto_char(index + len(needle))

    def search_backward(self, needle: str, bound: int | None = None) -> int | None:
        """Move point to the start of the previous occurrence of needle."""
        start = 0 if bound is None else bound
        index = self.text.rfind(needle, start, self.point)
        if index == -1:
            return None
        return self.goto_char(index)

    def re_search_forward(self, pattern: str | re.Pattern[str], bound: int | None = None) -> re.Match[str] | None:
        """Move point to the end of the next regex match."""
        regex = re.compile(pattern) if isinstance(pattern, str) else pattern
        end = len(self.text) if bound is None else bound
        match = regex.search(self.text, self.point, end)
        if match is None:
            return None
        self.goto_char(match.end())
        return match

    def looking_at(self, pattern: str | re.Pattern[str]) -> bool:
        regex = re.compile(pattern) if isinstance(pattern, str) else pattern
        return regex.match(self.text, self.point) is not None

    # ─────────────────────────────────────────────────────────────────
    # Editing
    # ─────────────────────────────────────────────────────────────────

    def replace_region(self, start: int, end: int, text: str) -> None:
        """Replace text between start and end, keeping markers in place."""
        if start > end:
            start, end = end, start
        point = Marker(self.point)
        self._raw_replace(start, end, text)
        point.adjust(start, end, len(text))
        for marker in self._markers:
            marker.adjust(start, end, len(text))
        self.point = point.position

    def insert(self, text: str) -> None:
        """Insert text at point and move point after it."""
        position = self.point
        self.replace_region(position, position, text)
        self.goto_char(position + len(text))

    def delete_region(self, start: int, end: int) -> str:
        """Delete text between positions. Returns deleted text."""
        if start > end:
            start, end = end, start
        deleted = self.text[start:end]
        self.replace_region(start, end, "")
        return deleted

    def set_text(self, text: str) -> None:
        """Replace the whole buffer text."""
        self.replace_region(0, len(self.text), text)

    def delete_horizontal_space_backward(self) -> None:
        line_start = self.line_beginning_position()
        start = self.point
        while start > line_start and self.text[start - 1] in " \t":
            start -= 1
        self.delete_region(start, self.point)

    def newline(self, count: int = 1) -> None:
        self.insert("\n" * count)

    def newline_and_indent(self) -> None:
        """Insert a newline and indent the new line for Clojure."""
        self.delete_horizontal_space_backward()
        self.insert("\n")
        self.insert(" " * self.calculate_indent(self.point))

    def calculate_indent(self, position: int) -> int:
        """Indentation column for a line starting at position."""
        text = self.text
        stack = sexp.enclosing_lists(text, position)
        if not stack:
            return 0
        open_pos = stack[-1]
        open_col = offset_to_location(text, open_pos)[1]
        if text[open_pos] != "(":
            return open_col + 1

        line_end = text.find("\n", open_pos)
        line_end = len(text) if line_end == -1 or line_end > position else line_end
        match = _HEAD_RE.match(text, open_pos, line_end)
        if match is None:
            return open_col + 1
        head = match.group(1)
        if head in BODY_FORMS or head.startswith("def"):
            return open_col + 2
        if match.group(3):
            return offset_to_location(text, match.start(3))[1]
        return open_col + 1

    # ─────────────────────────────────────────────────────────────────
    # Markers and the mark ring
    # ─────────────────────────────────────────────────────────────────

    def make_marker(self, position: int, insertion_type: bool = False) -> Marker:
        self.sync()
        marker = Marker(position, insertion_type)
        self._markers.append(marker)
        return marker

    def release_marker(self, marker: Marker) -> None:
        if marker in self._markers:
            self._markers.remove(marker)

    def push_mark(self, position: int | None = None) -> Marker:
        """Record position (point by default) on the mark ring."""
        marker = self.make_marker(self.point if position is None else position)
        self._mark_ring.append(marker)
        return marker

    def pop_mark(self, marker: Marker | None = None) -> int | None:
        """Move point to a mark (the most recent by default) and drop it."""
        if marker is None:
            if not self._mark_ring:
                return None
            marker = self._mark_ring[-1]
        elif marker not in self._mark_ring:
            return None
        self.sync()
        self._mark_ring.remove(marker)
        self.release_marker(marker)
        return self.goto_char(marker.position)

    @property
    def mark(self) -> int | None:
        self.sync()
        return self._mark_ring[-1].position if self._mark_ring else None

    @contextmanager
    def save_excursion(self) -> Iterator[None]:
        """Restore point after the block, following edits made inside it."""
        marker = self.make_marker(self.point)
        try:
            yield
        finally:
            self.sync()
            self.release_marker(marker)
            self.goto_char(marker.position)

    # ─────────────────────────────────────────────────────────────────
    # Files
    # ─────────────────────────────────────────────────────────────────

    def set_visited_file_name(self, path: Path | None) -> None:
        self.file_path = path

    def save(self) -> None:
        """Write the buffer to its file."""
        if self.file_path is None:
            raise ValueError(f"Buffer '{self.name}' has no file to save to")
        text = self.text
        self.file_path.write_text(text, encoding="utf-8")
        self._saved_text = text

    def revert(self) -> None:
        """Replace the buffer text with the file contents."""
        if self.file_path is None:
            raise ValueError(f"Buffer '{self.name}' has no file to revert from")
        text = self.file_path.read_text(encoding="utf-8") if self.file_path.exists() else ""
        point = self.point
        self.set_text(text)
        self._saved_text = text
        self.goto_char(point)


class TextBuffer(Buffer):
    """In-memory buffer, optionally visiting a file."""

    def __init__(self, name: str, text: str = "", file_path: Path | None = None) -> None:
        super().__init__(name, file_path)
        self._text = text
        self._point = 0

    @classmethod
    def from_file(cls, path: Path, name: str | None = None) -> TextBuffer:
        """Visit path, reading it if it exists."""
        buffer = cls(name or path.name, file_path=path)
        if path.exists():
            buffer.revert()
        return buffer

    @property
    def text(self) -> str:
        return self._text

    def _get_point(self) -> int:
        return self._point

    def _set_point(self, position: int) -> None:
        self._point = position

    def _raw_replace(self, start: int, end: int, text: str) -> None:
        self._text = self._text[:start] + text + self._text[end:]
