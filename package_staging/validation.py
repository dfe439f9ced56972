"""Precondition checks run before a package is built or staged."""

from __future__ import annotations

import typing as typ

from .errors import PackageNotFoundError

if typ.TYPE_CHECKING:
    from pathlib import Path

    from .config import PackageDescriptor

__all__ = ["require_package_dir"]


def require_package_dir(package: PackageDescriptor, path: Path) -> Path:
    """Return ``path`` when it is an existing directory.

    Parameters
    ----------
    package : PackageDescriptor
        Descriptor whose source directory is being checked.
    path : Path
        Resolved source package directory.

    Raises
    ------
    PackageNotFoundError
        Raised when ``path`` does not exist or is not a directory.
    """

    if not path.is_dir():
        raise PackageNotFoundError(package.name, path)
    return path
