"""Depth-first enumeration of the copy work for an artefact tree."""

from __future__ import annotations

import dataclasses
import stat
import typing as typ

if typ.TYPE_CHECKING:
    from pathlib import Path

__all__ = ["CopyTask", "TaskKind", "iter_copy_tasks"]

TaskKind = typ.Literal["directory", "file", "skipped", "unreadable"]


@dataclasses.dataclass(slots=True, frozen=True)
class CopyTask:
    """Single unit of mirroring work yielded by :func:`iter_copy_tasks`.

    Attributes
    ----------
    source : Path
        Entry inside the source tree.
    destination : Path
        Corresponding path inside the destination tree.
    kind : TaskKind
        ``"directory"`` and ``"file"`` entries are mirrored. ``"skipped"``
        marks symlinks, sockets, FIFOs and devices. ``"unreadable"`` marks an
        entry that could not be inspected or a directory that could not be
        listed.
    error : OSError | None
        Failure behind an ``"unreadable"`` task.
    """

    source: Path
    destination: Path
    kind: TaskKind
    error: OSError | None = None


def _classify(entry: Path) -> TaskKind:
    mode = entry.lstat().st_mode
    if stat.S_ISDIR(mode):
        return "directory"
    if stat.S_ISREG(mode):
        return "file"
    return "skipped"


def iter_copy_tasks(source_dir: Path, destination_dir: Path) -> typ.Iterator[CopyTask]:
    """Yield copy tasks mirroring ``source_dir`` into ``destination_dir``.

    The walk uses an explicit stack so deeply nested trees do not exhaust the
    interpreter's recursion limit. Entries are visited in name order and a
    directory task is always yielded before any task for its children, so the
    consumer can create the directory before its contents arrive. Symlinks
    are classified with :meth:`Path.lstat` and never followed.

    Examples
    --------
    >>> from pathlib import Path
    >>> [t.kind for t in iter_copy_tasks(Path("/missing"), Path("/out"))]
    ['unreadable']
    """

    pending: list[tuple[Path, Path]] = [(source_dir, destination_dir)]
    while pending:
        current_source, current_destination = pending.pop()
        try:
            entries = sorted(current_source.iterdir())
        except OSError as exc:
            yield CopyTask(current_source, current_destination, "unreadable", exc)
            continue

        directories: list[tuple[Path, Path]] = []
        for entry in entries:
            target = current_destination / entry.name
            try:
                kind = _classify(entry)
            except OSError as exc:
                yield CopyTask(entry, target, "unreadable", exc)
                continue
            yield CopyTask(entry, target, kind)
            if kind == "directory":
                directories.append((entry, target))
        pending.extend(reversed(directories))
