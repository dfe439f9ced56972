"""Error types shared across the package staging helpers."""

from __future__ import annotations

import typing as typ

if typ.TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

__all__ = [
    "BuildError",
    "ConfigError",
    "DestinationError",
    "PackageNotFoundError",
    "StageError",
]


class StageError(RuntimeError):
    """Raised when the staging pipeline cannot continue."""


class ConfigError(StageError):
    """Raised when the staging configuration is malformed."""


class PackageNotFoundError(StageError):
    """Raised when a source package directory does not exist."""

    def __init__(self, package: str, path: Path) -> None:
        self.package = package
        self.path = path
        super().__init__(f"Source package '{package}' not found at {path}")


class BuildError(StageError):
    """Raised when a package build command fails or cannot be started."""

    def __init__(
        self,
        package_dir: Path,
        command: Sequence[str],
        exit_code: int | None,
    ) -> None:
        self.package_dir = package_dir
        self.command = tuple(command)
        self.exit_code = exit_code
        joined = " ".join(self.command)
        if exit_code is None:
            message = f"Build command '{joined}' could not be started in {package_dir}"
        else:
            message = (
                f"Build command '{joined}' failed in {package_dir} "
                f"(exit {exit_code})"
            )
        super().__init__(message)


class DestinationError(StageError):
    """Raised when the destination directories or manifest cannot be written."""
