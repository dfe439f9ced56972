"""Build and stage each configured package in order."""

from __future__ import annotations

import dataclasses
import typing as typ

from .build import run_build
from .staging import StagedPackage, stage_package
from .validation import require_package_dir

if typ.TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from .config import StagingConfig

__all__ = ["StagingRun", "stage_packages"]

BuildRunner = typ.Callable[["Path", "Sequence[str]"], None]


@dataclasses.dataclass(slots=True)
class StagingRun:
    """Outcome of :func:`stage_packages`."""

    destination_root: Path
    staged: list[StagedPackage] = dataclasses.field(default_factory=list)

    @property
    def warning_count(self) -> int:
        """Total number of recoverable warnings across all packages."""
        return sum(len(package.warnings) for package in self.staged)


def stage_packages(
    config: StagingConfig, *, runner: BuildRunner = run_build
) -> StagingRun:
    """Validate, build and stage every package in ``config.packages``.

    Packages are processed strictly in order. A missing source directory,
    failing build or unwritable destination stops the run before any later
    package is touched. Per-entry artefact problems are warnings only.

    Parameters
    ----------
    config : StagingConfig
        Packages to stage and the layout to stage them into.
    runner : BuildRunner, default=run_build
        Callable that builds a package directory with a command.

    Returns
    -------
    StagingRun
        Staged packages in processing order.

    Raises
    ------
    PackageNotFoundError
        Raised when a source package directory does not exist.
    BuildError
        Raised when a build command fails.
    DestinationError
        Raised when a destination directory or manifest cannot be written.
    """

    run = StagingRun(destination_root=config.destination_path())
    for package in config.packages:
        source_dir = require_package_dir(package, config.source_dir(package))

        if config.skip_build:
            print(f"Skipping build of {package.name}")
        else:
            print(f"Building {package.name}...")
            runner(source_dir, config.build_command)
            print(f"{package.name} built successfully")

        staged = stage_package(
            source_dir,
            config.namespace_dir(package),
            manifest_name=config.manifest_name,
            artefact_dir_name=config.artefact_dir_name,
        )
        print(
            f"Copied {package.name} ({len(staged.copied_files)} artefact file(s)) "
            f"from {source_dir} to {staged.destination_dir}"
        )
        run.staged.append(staged)

    print("Staging completed successfully")
    return run
