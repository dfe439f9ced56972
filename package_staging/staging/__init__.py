"""Staging pipeline package exposing package mirroring utilities."""

from .pipeline import StagedPackage, StagingWarning, stage_package
from .tasks import CopyTask, iter_copy_tasks

__all__ = [
    "CopyTask",
    "StagedPackage",
    "StagingWarning",
    "iter_copy_tasks",
    "stage_package",
]
