"""Configuration models and loader for the package staging helper.

This module provides dataclasses describing which sibling packages to stage
and where, plus a loader for the TOML document that records that layout.

Usage
-----
Load the staging configuration shipped with a repository::

    from pathlib import Path
    from package_staging.config import load_config

    config = load_config(Path("package-staging.toml"), Path.cwd())
    print(f"Destination root: {config.destination_path()}")
"""

from __future__ import annotations

import dataclasses
import shlex
import typing as typ
from pathlib import Path

import tomllib

from .errors import ConfigError

__all__ = [
    "DEFAULT_ARTEFACT_DIR",
    "DEFAULT_BUILD_COMMAND",
    "DEFAULT_CONFIG_NAME",
    "DEFAULT_MANIFEST",
    "PackageDescriptor",
    "StagingConfig",
    "load_config",
]

DEFAULT_CONFIG_NAME = "package-staging.toml"
DEFAULT_MANIFEST = "package.json"
DEFAULT_ARTEFACT_DIR = "dist"
DEFAULT_BUILD_COMMAND = ("yarn", "build")


@dataclasses.dataclass(slots=True, frozen=True)
class PackageDescriptor:
    """Identify a source package and its destination namespace.

    Parameters
    ----------
    name : str
        Directory name of the source package beneath the repository root.
    namespace : str
        Directory name of the staged copy beneath the destination root.

    Examples
    --------
    >>> PackageDescriptor(name="tml-parser", namespace="parser").namespace
    'parser'
    """

    name: str
    namespace: str


@dataclasses.dataclass(slots=True)
class StagingConfig:
    """Concrete configuration consumed by :func:`stage_packages`.

    Parameters
    ----------
    workspace : Path
        Directory that relative ``repo_root`` and ``destination_root`` values
        are resolved against.
    repo_root : str
        Directory containing the source packages.
    destination_root : str
        Directory receiving one namespace directory per staged package.
    packages : list[PackageDescriptor]
        Ordered packages to build and stage.
    manifest_name : str, default="package.json"
        Manifest file copied verbatim into each namespace directory.
    artefact_dir_name : str, default="dist"
        Build output directory mirrored into each namespace directory.
    build_command : list[str], default=["yarn", "build"]
        Command run inside each source package before staging.
    skip_build : bool, default=False
        When ``True`` the build command is not run and existing artefacts are
        staged as-is.

    Examples
    --------
    >>> config = StagingConfig(
    ...     workspace=Path("/repo"),
    ...     repo_root="packages",
    ...     destination_root="packages/app/node_modules/@tml",
    ...     packages=[PackageDescriptor("tml-parser", "parser")],
    ... )
    >>> config.namespace_dir(config.packages[0]).as_posix()
    '/repo/packages/app/node_modules/@tml/parser'
    """

    workspace: Path
    repo_root: str
    destination_root: str
    packages: list[PackageDescriptor]
    manifest_name: str = DEFAULT_MANIFEST
    artefact_dir_name: str = DEFAULT_ARTEFACT_DIR
    build_command: list[str] = dataclasses.field(
        default_factory=lambda: list(DEFAULT_BUILD_COMMAND)
    )
    skip_build: bool = False

    def repo_path(self) -> Path:
        """Return the absolute directory holding the source packages."""
        return (self.workspace / self.repo_root).absolute()

    def destination_path(self) -> Path:
        """Return the absolute destination root."""
        return (self.workspace / self.destination_root).absolute()

    def source_dir(self, package: PackageDescriptor) -> Path:
        """Return the source package directory for ``package``."""
        return self.repo_path() / package.name

    def namespace_dir(self, package: PackageDescriptor) -> Path:
        """Return the destination namespace directory for ``package``."""
        return self.destination_path() / package.namespace


def load_config(config_file: Path, workspace: Path) -> StagingConfig:
    """Load staging configuration from ``config_file``.

    Parameters
    ----------
    config_file : Path
        Path to the TOML document describing the packages to stage.
    workspace : Path
        Directory used to resolve relative roots in the configuration.

    Returns
    -------
    StagingConfig
        Configuration ready for use by :func:`stage_packages`.

    Raises
    ------
    FileNotFoundError
        Raised when the configuration file is absent at ``config_file``.
    ConfigError
        Raised when required configuration keys are missing or invalid.
    """
    config_file = Path(config_file)
    if not config_file.is_file():
        message = f"Configuration file not found at {config_file}"
        raise FileNotFoundError(message)

    data = _load_toml(config_file)
    staging = _extract_table(data, "staging", config_file)
    _require_keys(staging, {"repo_root", "destination_root"}, "staging", config_file)
    packages = _make_packages(data.get("packages", []), config_file)

    return StagingConfig(
        workspace=Path(workspace),
        repo_root=_require_text(staging, "repo_root", config_file),
        destination_root=_require_text(staging, "destination_root", config_file),
        packages=packages,
        manifest_name=_optional_text(
            staging, "manifest", DEFAULT_MANIFEST, config_file
        ),
        artefact_dir_name=_optional_text(
            staging, "artefact_dir", DEFAULT_ARTEFACT_DIR, config_file
        ),
        build_command=_normalise_command(
            staging.get("build_command", list(DEFAULT_BUILD_COMMAND)), config_file
        ),
        skip_build=_optional_bool(staging, "skip_build", config_file),
    )


def _load_toml(path: Path) -> dict[str, typ.Any]:
    try:
        with path.open("rb") as handle:
            return tomllib.load(handle)
    except tomllib.TOMLDecodeError as exc:
        message = f"Invalid TOML in {path}: {exc}"
        raise ConfigError(message) from exc


def _extract_table(
    data: dict[str, typ.Any], key: str, config_path: Path
) -> dict[str, typ.Any]:
    try:
        table = data[key]
    except KeyError as exc:
        message = f"Missing configuration key in {config_path}: {exc}"
        raise ConfigError(message) from exc
    if not isinstance(table, dict):
        message = f"[{key}] must be a table in {config_path}"
        raise ConfigError(message)
    return table


def _require_keys(
    section: dict[str, typ.Any], keys: set[str], label: str, config_path: Path
) -> None:
    """Ensure ``section`` defines ``keys``.

    Examples
    --------
    >>> _require_keys(  # doctest: +SKIP
    ...     {'repo_root': 'packages'},
    ...     {'repo_root'},
    ...     'staging',
    ...     Path('cfg'),
    ... )
    """
    if missing := sorted(key for key in keys if key not in section):
        joined = ", ".join(missing)
        message = (
            "Missing required key(s) "
            f"{joined} in [{label}] section of {config_path}"
        )
        raise ConfigError(message)


def _require_text(section: dict[str, typ.Any], key: str, config_path: Path) -> str:
    value = section[key]
    if not isinstance(value, str) or not value:
        message = f"'{key}' must be a non-empty string in {config_path}"
        raise ConfigError(message)
    return value


def _optional_text(
    section: dict[str, typ.Any], key: str, default: str, config_path: Path
) -> str:
    if key not in section:
        return default
    return _require_text(section, key, config_path)


def _optional_bool(section: dict[str, typ.Any], key: str, config_path: Path) -> bool:
    value = section.get(key, False)
    if not isinstance(value, bool):
        message = f"'{key}' must be a boolean in {config_path}"
        raise ConfigError(message)
    return value


def _make_packages(entries: object, config_path: Path) -> list[PackageDescriptor]:
    if not isinstance(entries, list) or not entries:
        message = f"No packages configured to stage in {config_path}"
        raise ConfigError(message)
    packages: list[PackageDescriptor] = []
    seen: dict[str, str] = {}
    for index, entry in enumerate(entries, start=1):
        if not isinstance(entry, dict):
            message = (
                "Package entries must be tables of key/value pairs "
                f"(entry #{index} in {config_path})"
            )
            raise ConfigError(message)
        name = entry.get("name")
        if not isinstance(name, str) or not name:
            message = (
                "Missing required package key 'name' "
                f"in entry #{index} of {config_path}"
            )
            raise ConfigError(message)
        namespace = entry.get("namespace", name)
        if not isinstance(namespace, str) or not namespace:
            message = (
                "Package key 'namespace' must be a non-empty string "
                f"(entry #{index} in {config_path})"
            )
            raise ConfigError(message)
        if previous := seen.get(namespace):
            message = (
                f"Namespace collision: '{namespace}' is used by both "
                f"'{previous}' and '{name}' in {config_path}"
            )
            raise ConfigError(message)
        seen[namespace] = name
        packages.append(PackageDescriptor(name=name, namespace=namespace))
    return packages


def _normalise_command(value: object, config_path: Path) -> list[str]:
    """Return ``value`` as an argument vector."""

    if isinstance(value, str):
        command = shlex.split(value)
    elif isinstance(value, list) and all(isinstance(item, str) for item in value):
        command = list(value)
    else:
        message = (
            "'build_command' must be a string or a list of strings "
            f"in {config_path}"
        )
        raise ConfigError(message)
    if not command:
        message = f"'build_command' must not be empty in {config_path}"
        raise ConfigError(message)
    return command
