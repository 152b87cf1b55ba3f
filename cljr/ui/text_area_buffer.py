"""Buffer adapter over Textual's TextArea.

Edits made through the Buffer interface go through TextArea.replace.
Edits the user types directly are picked up lazily by comparing the
text with the last seen version, so markers (snippet fields, the mark
ring) keep following the text.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from ..editing.buffer import Buffer, location_to_offset, offset_to_location

if TYPE_CHECKING:
    from textual.widgets import TextArea


def infer_edit(old: str, new: str, cursor: int) -> tuple[int, int, int]:
    """Guess the single edit turning old into new.

    Returns (start, end, length): old[start:end] was replaced by length
    chars. Typing and deleting happen at the cursor, so that reading is
    tried first.
    """
    delta = len(new) - len(old)
    if delta > 0:
        start = cursor - delta
        if start >= 0 and new[:start] == old[:start] and new[cursor:] == old[start:]:
            return (start, start, delta)
    elif delta < 0:
        end = cursor - delta
        if new[:cursor] == old[:cursor] and new[cursor:] == old[end:]:
            return (cursor, end, 0)

    prefix = 0
    limit = min(len(old), len(new))
    while prefix < limit and old[prefix] == new[prefix]:
        prefix += 1
    suffix = 0
    while suffix < limit - prefix and old[-suffix - 1] == new[-suffix - 1]:
        suffix += 1
    return (prefix, len(old) - suffix, len(new) - suffix - prefix)


class TextAreaBuffer(Buffer):
    """Buffer whose text and cursor live in a TextArea widget."""

    def __init__(self, text_area: TextArea, name: str, file_path: Path | None = None) -> None:
        super().__init__(name, file_path)
        self._ta = text_area
        self._last_text = text_area.text

    @property
    def text_area(self) -> TextArea:
        return self._ta

    @property
    def text(self) -> str:
        self.sync()
        return self._last_text

    def sync(self) -> None:
        """Move markers for edits made directly in the TextArea."""
        current = self._ta.text
        if current == self._last_text:
            return
        cursor = location_to_offset(current, self._ta.cursor_location)
        start, end, length = infer_edit(self._last_text, current, cursor)
        self._last_text = current
        for marker in self._markers:
            marker.adjust(start, end, length)

    def _get_point(self) -> int:
        return location_to_offset(self.text, self._ta.cursor_location)

    def _set_point(self, position: int) -> None:
        self._ta.move_cursor(offset_to_location(self.text, position))

    def _raw_replace(self, start: int, end: int, text: str) -> None:
        current = self.text
        self._ta.replace(
            text,
            offset_to_location(current, start),
            offset_to_location(current, end),
        )
        self._last_text = self._ta.text

    def load(self, path: Path) -> None:
        """Visit path, replacing the widget's text with the file contents."""
        text = path.read_text(encoding="utf-8") if path.exists() else ""
        self._markers.clear()
        self._mark_ring.clear()
        self._ta.load_text(text)
        self._last_text = self._ta.text
        self._saved_text = text
        self.file_path = path
