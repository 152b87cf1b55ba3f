"""The list of open buffers."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable

from .buffer import Buffer, TextBuffer

logger = logging.getLogger(__name__)

BufferFactory = Callable[[Path, str], Buffer]
FileOpenHook = Callable[[Buffer], object]


def _default_factory(path: Path, name: str) -> Buffer:
    return TextBuffer.from_file(path, name=name)


class Workspace:
    """Open buffers keyed by name.

    Commands that touch several files go through the workspace so that
    files already open are edited in their buffers rather than on disk.
    """

    def __init__(self, buffer_factory: BufferFactory | None = None) -> None:
        self._buffers: dict[str, Buffer] = {}
        self._buffer_factory = buffer_factory or _default_factory
        self._file_open_hooks: list[FileOpenHook] = []

    def add_file_open_hook(self, hook: FileOpenHook) -> None:
        """Run hook on every buffer find_file creates."""
        self._file_open_hooks.append(hook)

    @property
    def buffers(self) -> list[Buffer]:
        return list(self._buffers.values())

    def get_buffer(self, name: str) -> Buffer | None:
        return self._buffers.get(name)

    def get_file_buffer(self, path: Path) -> Buffer | None:
        """Buffer visiting path, if one is open."""
        resolved = path.resolve()
        for buffer in self._buffers.values():
            if buffer.file_path is not None and buffer.file_path.resolve() == resolved:
                return buffer
        return None

    def add_buffer(self, buffer: Buffer) -> Buffer:
        """Register a buffer, giving it a unique name."""
        buffer.name = self.generate_new_buffer_name(buffer.name)
        self._buffers[buffer.name] = buffer
        return buffer

    def generate_new_buffer_name(self, name: str) -> str:
        if name not in self._buffers:
            return name
        counter = 2
        while f"{name}<{counter}>" in self._buffers:
            counter += 1
        return f"{name}<{counter}>"

    def find_file(self, path: Path) -> Buffer:
        """Return the buffer visiting path, opening it if needed.

        File-open hooks run only for newly opened buffers.
        """
        existing = self.get_file_buffer(path)
        if existing is not None:
            return existing

        buffer = self.add_buffer(self._buffer_factory(path, path.name))
        logger.debug("Opened %s as %s", path, buffer.name)
        for hook in self._file_open_hooks:
            hook(buffer)
        return buffer

    def rename_buffer(self, buffer: Buffer, new_name: str) -> None:
        if self._buffers.get(buffer.name) is buffer:
            del self._buffers[buffer.name]
        buffer.name = self.generate_new_buffer_name(new_name)
        self._buffers[buffer.name] = buffer

    def kill_buffer(self, buffer: Buffer) -> None:
        if self._buffers.get(buffer.name) is buffer:
            del self._buffers[buffer.name]

    def modified_buffers(self) -> list[Buffer]:
        return [
            buffer
            for buffer in self._buffers.values()
            if buffer.file_path is not None and buffer.modified
        ]

    def save_some_buffers(self) -> list[Buffer]:
        """Save every modified buffer visiting a file."""
        saved = self.modified_buffers()
        for buffer in saved:
            buffer.save()
            logger.debug("Saved %s", buffer.file_path)
        return saved
