"""Shared helpers for the staging test suites."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path

__all__ = [
    "BUILD_DIST_CODE",
    "snapshot_tree",
    "write_source_package",
]

# Writes ``dist/index.js`` in the working directory, standing in for a bundler.
BUILD_DIST_CODE = (
    "import pathlib; "
    "dist = pathlib.Path('dist'); "
    "dist.mkdir(exist_ok=True); "
    "(dist / 'index.js').write_text('x=1', encoding='utf-8')"
)


def write_source_package(
    root: Path,
    name: str,
    manifest: str,
    files: Mapping[str, str] | None = None,
) -> Path:
    """Create a source package directory beneath ``root``.

    Parameters
    ----------
    root : Path
        Repository root holding source packages.
    name : str
        Package directory name.
    manifest : str
        Contents written to ``package.json``.
    files : Mapping[str, str] | None
        Artefact files keyed by path relative to the package directory.

    Returns
    -------
    Path
        The created package directory.
    """

    package_dir = root / name
    package_dir.mkdir(parents=True, exist_ok=True)
    (package_dir / "package.json").write_text(manifest, encoding="utf-8")
    for relative, content in (files or {}).items():
        path = package_dir / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    return package_dir


def snapshot_tree(root: Path) -> dict[str, bytes | None]:
    """Map every entry under ``root`` to its bytes (``None`` for directories)."""

    snapshot: dict[str, bytes | None] = {}
    for path in sorted(root.rglob("*")):
        key = path.relative_to(root).as_posix()
        snapshot[key] = None if path.is_dir() else path.read_bytes()
    return snapshot
