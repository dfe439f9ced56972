"""Public interface for the package staging helper."""

from .build import run_build
from .config import PackageDescriptor, StagingConfig, load_config
from .errors import (
    BuildError,
    ConfigError,
    DestinationError,
    PackageNotFoundError,
    StageError,
)
from .orchestrator import StagingRun, stage_packages
from .staging import CopyTask, StagedPackage, StagingWarning, stage_package
from .validation import require_package_dir

__all__ = [
    "BuildError",
    "ConfigError",
    "CopyTask",
    "DestinationError",
    "load_config",
    "PackageDescriptor",
    "PackageNotFoundError",
    "require_package_dir",
    "run_build",
    "stage_package",
    "stage_packages",
    "StagedPackage",
    "StageError",
    "StagingConfig",
    "StagingRun",
    "StagingWarning",
]
