"""Project discovery and source file enumeration."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from itertools import islice
from pathlib import Path
from typing import Protocol

from cljr.config import MAX_PROJECT_FILES, PROJECT_MARKER, SOURCE_EXTENSIONS

logger = logging.getLogger(__name__)

VCS_DIRS = frozenset({".git", ".svn", ".hg", "CVS"})


def locate_dominating_file(start: Path, marker: str) -> Path | None:
    """Nearest directory at or above start containing marker."""
    directory = start if start.is_dir() else start.parent
    for candidate in (directory, *directory.parents):
        if (candidate / marker).exists():
            return candidate
    return None


def project_dir(path: Path, marker: str = PROJECT_MARKER) -> Path | None:
    """Resolved project root for path, or None outside any project."""
    root = locate_dominating_file(path.expanduser().resolve(), marker)
    return root.resolve() if root is not None else None


class FileWalker(Protocol):
    """Enumerates the source files of a project."""

    def source_files(self, root: Path) -> Iterator[Path]: ...


class FileSystemWalker:
    """Walks the file system for source files, skipping VCS directories."""

    def __init__(
        self,
        extensions: tuple[str, ...] = SOURCE_EXTENSIONS,
        limit: int = MAX_PROJECT_FILES,
    ) -> None:
        self.extensions = extensions
        self.limit = limit

    def _walk(self, root: Path) -> Iterator[Path]:
        for dirpath, dirnames, filenames in os.walk(root):
            dirnames[:] = sorted(name for name in dirnames if name not in VCS_DIRS)
            for filename in sorted(filenames):
                if filename.endswith(self.extensions):
                    yield Path(dirpath) / filename

    def source_files(self, root: Path) -> Iterator[Path]:
        files = islice(self._walk(root), self.limit)
        for count, path in enumerate(files, start=1):
            if count == self.limit:
                logger.debug("Stopped listing %s at %d files", root, self.limit)
            yield path


def project_depends_on(root: Path | None, package: str, marker: str = PROJECT_MARKER) -> bool:
    """True if the project descriptor mentions package."""
    if root is None:
        return False
    descriptor = root / marker
    try:
        return package in descriptor.read_text(encoding="utf-8")
    except OSError:
        return False
