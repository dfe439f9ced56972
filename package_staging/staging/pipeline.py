"""Core package staging pipeline and supporting helpers."""

from __future__ import annotations

import dataclasses
import shutil
import sys
from pathlib import Path

from ..errors import DestinationError
from .tasks import CopyTask, iter_copy_tasks

__all__ = ["StagedPackage", "StagingWarning", "stage_package"]


@dataclasses.dataclass(slots=True, frozen=True)
class StagingWarning:
    """Recoverable problem reported while mirroring an artefact tree."""

    path: Path
    message: str


@dataclasses.dataclass(slots=True)
class StagedPackage:
    """Outcome of :func:`stage_package`.

    Attributes
    ----------
    source_dir:
        Source package directory that was staged.
    destination_dir:
        Namespace directory holding the staged copy.
    manifest_path:
        Staged manifest file.
    copied_files:
        Artefact files copied into the destination artefact directory.
    warnings:
        Recoverable problems encountered while mirroring artefacts.
    """

    source_dir: Path
    destination_dir: Path
    manifest_path: Path
    copied_files: list[Path] = dataclasses.field(default_factory=list)
    warnings: list[StagingWarning] = dataclasses.field(default_factory=list)


def _warn(staged: StagedPackage, path: Path, title: str, message: str) -> None:
    print(f"::warning title={title}::{message}", file=sys.stderr)
    staged.warnings.append(StagingWarning(path, message))


def _ensure_directory(path: Path) -> None:
    """Create ``path`` and any missing parents, raising :class:`DestinationError`."""

    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        message = f"Cannot create destination directory {path}: {exc}"
        raise DestinationError(message) from exc


def _replace_file(source: Path, destination: Path) -> None:
    if destination.exists() or destination.is_symlink():
        destination.unlink()
    shutil.copy2(source, destination)


def stage_package(
    source_dir: Path,
    destination_dir: Path,
    *,
    manifest_name: str = "package.json",
    artefact_dir_name: str = "dist",
) -> StagedPackage:
    """Copy a built package's manifest and artefact tree into ``destination_dir``.

    Parameters
    ----------
    source_dir : Path
        Built source package directory.
    destination_dir : Path
        Namespace directory that receives the staged copy.
    manifest_name : str, default="package.json"
        Manifest file copied verbatim.
    artefact_dir_name : str, default="dist"
        Artefact directory mirrored recursively (regular files only).

    Returns
    -------
    StagedPackage
        Summary of the staged manifest, copied files and any warnings.

    Raises
    ------
    DestinationError
        Raised when the destination directories cannot be created or the
        manifest cannot be copied. Problems with individual artefact entries
        are reported as warnings instead.
    """

    _ensure_directory(destination_dir)

    manifest_source = source_dir / manifest_name
    manifest_destination = destination_dir / manifest_name
    if not manifest_source.is_file():
        message = f"Manifest not found at {manifest_source}"
        raise DestinationError(message)
    try:
        _replace_file(manifest_source, manifest_destination)
    except OSError as exc:
        message = f"Cannot copy manifest {manifest_source}: {exc}"
        raise DestinationError(message) from exc

    staged = StagedPackage(
        source_dir=source_dir,
        destination_dir=destination_dir,
        manifest_path=manifest_destination,
    )

    artefact_destination = destination_dir / artefact_dir_name
    _ensure_directory(artefact_destination)

    artefact_source = source_dir / artefact_dir_name
    if not artefact_source.is_dir():
        _warn(
            staged,
            artefact_source,
            "Artefacts Missing",
            f"Artefact directory {artefact_source} is missing or not a "
            "directory; nothing was mirrored",
        )
        return staged

    for task in iter_copy_tasks(artefact_source, artefact_destination):
        _apply_task(staged, task)
    return staged


def _apply_task(staged: StagedPackage, task: CopyTask) -> None:
    """Perform ``task``, downgrading filesystem failures to warnings."""

    if task.kind == "skipped":
        _warn(
            staged,
            task.source,
            "Entry Skipped",
            f"Skipping {task.source}: not a regular file or directory",
        )
        return
    if task.kind == "unreadable":
        _warn(
            staged,
            task.source,
            "Entry Unreadable",
            f"Cannot read {task.source}: {task.error}",
        )
        return

    try:
        if task.kind == "directory":
            task.destination.mkdir(parents=True, exist_ok=True)
        else:
            _replace_file(task.source, task.destination)
    except OSError as exc:
        _warn(
            staged,
            task.source,
            "Copy Failed",
            f"Failed to copy {task.source} -> {task.destination}: {exc}",
        )
        return

    if task.kind == "file":
        staged.copied_files.append(task.destination)
