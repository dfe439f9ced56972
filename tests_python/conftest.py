"""Shared fixtures for the package staging test suite."""

from __future__ import annotations

import sys
import typing as typ
from pathlib import Path

import pytest

from package_staging import PackageDescriptor, StagingConfig


@pytest.fixture
def workspace(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Create an isolated workspace and point ``STAGE_WORKSPACE`` at it."""
    root = tmp_path / "workspace"
    root.mkdir()
    monkeypatch.setenv("STAGE_WORKSPACE", str(root))
    return root


@pytest.fixture
def python_command() -> typ.Callable[[str], list[str]]:
    """Return a factory building commands that run inline Python code."""

    def factory(code: str) -> list[str]:
        return [sys.executable, "-c", code]

    return factory


@pytest.fixture
def make_config(workspace: Path) -> typ.Callable[..., StagingConfig]:
    """Return a factory for configurations rooted in ``workspace``."""

    def factory(
        packages: list[tuple[str, str]], **overrides: typ.Any
    ) -> StagingConfig:
        return StagingConfig(
            workspace=workspace,
            repo_root="packages",
            destination_root="dest",
            packages=[PackageDescriptor(name, namespace) for name, namespace in packages],
            **overrides,
        )

    return factory
