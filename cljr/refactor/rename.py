"""Renaming a source file and propagating its new namespace."""

from __future__ import annotations

import logging
import os
import re
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from cljr.clojure.namespace import expected_ns, update_ns
from cljr.clojure.project import FileSystemWalker, FileWalker, project_dir
from cljr.config import RefactorConfig
from cljr.core.results import StepResult
from cljr.editing.buffer import Buffer
from cljr.editing.workspace import Workspace
from cljr.exceptions import BufferExistsError, NotVisitingFileError, TargetFileExistsError

logger = logging.getLogger(__name__)

_SYMBOL_CHARS = r"\w.\-*+!?<>="
_SYMBOL_EDGE_BEFORE = rf"(?<![{_SYMBOL_CHARS}/])"
# Qualified references (my-app.core/greet) match too
_SYMBOL_EDGE_AFTER = rf"(?![{_SYMBOL_CHARS}])"


@dataclass
class RenameResult:
    """What a file rename did."""

    old_path: Path
    new_path: Path
    old_ns: str
    new_ns: str
    replace: StepResult
    saved: list[Path] = field(default_factory=list)

    @property
    def message(self) -> str:
        return f"File '{self.old_path.name}' successfully renamed to '{self.new_path.name}'"


def ns_token_pattern(ns: str) -> re.Pattern[str]:
    """Match ns as a whole symbol, not as part of a longer name."""
    return re.compile(_SYMBOL_EDGE_BEFORE + re.escape(ns) + _SYMBOL_EDGE_AFTER)


def replace_in_files(
    workspace: Workspace,
    files: Iterable[Path],
    old: str,
    new: str,
) -> int:
    """Replace old with new in each file. Returns the number changed.

    Files open in the workspace are edited in their buffers and left for
    the caller to save; other files are rewritten on disk.
    """
    pattern = ns_token_pattern(old)
    changed = 0
    for path in files:
        buffer = workspace.get_file_buffer(path)
        text = buffer.text if buffer is not None else path.read_text(encoding="utf-8")
        matches = list(pattern.finditer(text))
        if not matches:
            continue
        if buffer is not None:
            # Back to front so earlier offsets stay valid
            for match in reversed(matches):
                buffer.replace_region(match.start(), match.end(), new)
        else:
            path.write_text(pattern.sub(lambda _: new, text), encoding="utf-8")
        changed += 1
        logger.debug("Replaced %s with %s in %s", old, new, path)
    return changed


def replace_in_project(
    workspace: Workspace,
    project_root: Path | None,
    old: str,
    new: str,
    walker: FileWalker | None = None,
) -> StepResult:
    """Best-effort project-wide replacement of a namespace token."""
    if project_root is None:
        return StepResult.skip("Not inside a project, references were not updated")
    if old == new:
        return StepResult.skip("Namespace unchanged")

    walker = walker or FileSystemWalker()
    try:
        changed = replace_in_files(workspace, walker.source_files(project_root), old, new)
    except Exception as exc:
        logger.debug("Project-wide replace of %s failed: %s", old, exc)
        return StepResult.failure(exc, f"Updating references to {old} failed: {exc}")
    return StepResult.success(f"Updated {old} to {new} in {changed} file(s)", changed=changed)


def rename_file(
    workspace: Workspace,
    buffer: Buffer,
    new_name: str | Path,
    config: RefactorConfig | None = None,
    walker: FileWalker | None = None,
) -> RenameResult:
    """Rename the buffer's file and update its namespace everywhere.

    Raises:
        NotVisitingFileError: If the buffer visits no existing file.
        BufferExistsError: If a buffer with the new name is already open.
        TargetFileExistsError: If another file already exists at the new path.
    """
    config = config or RefactorConfig()
    filename = buffer.file_path
    if filename is None or not filename.exists():
        raise NotVisitingFileError(buffer.name)

    new_path = Path(new_name).expanduser()
    if not new_path.is_absolute():
        new_path = filename.parent / new_path
    for existing in (workspace.get_buffer(new_path.name), workspace.get_file_buffer(new_path)):
        if existing is not None and existing is not buffer:
            raise BufferExistsError(new_path.name)
    if new_path.exists() and new_path.resolve() != filename.resolve():
        raise TargetFileExistsError(new_path.name)

    project_root = project_dir(filename, config.project_marker)
    old_ns = expected_ns(filename.resolve(), project_root)

    new_path.parent.mkdir(parents=True, exist_ok=True)
    os.replace(filename, new_path)
    new_path = new_path.resolve()
    workspace.rename_buffer(buffer, new_path.name)
    buffer.set_visited_file_name(new_path)
    logger.debug("Renamed %s to %s", filename, new_path)

    new_ns = expected_ns(new_path, project_root)
    update_ns(buffer, new_ns)

    walker = walker or FileSystemWalker(config.source_extensions, config.max_project_files)
    replace = replace_in_project(workspace, project_root, old_ns, new_ns, walker)
    saved = [b.file_path for b in workspace.save_some_buffers() if b.file_path is not None]

    return RenameResult(filename, new_path, old_ns, new_ns, replace, saved)
