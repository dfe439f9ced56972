"""Tests for loading the staging configuration file."""

from __future__ import annotations

from pathlib import Path

import pytest

from package_staging import ConfigError, PackageDescriptor, load_config

REPO_ROOT = Path(__file__).resolve().parent.parent


def write_config(path: Path, text: str) -> Path:
    """Write ``text`` to ``path`` and return it."""
    path.write_text(text, encoding="utf-8")
    return path


def test_load_config_reads_packages_in_order(workspace: Path) -> None:
    """Package tables should become descriptors in declaration order."""

    config_file = write_config(
        workspace / "staging.toml",
        """
[staging]
repo_root = "packages"
destination_root = "consumer/node_modules/@scope"

[[packages]]
name = "tml-parser"
namespace = "parser"

[[packages]]
name = "tml-utils"
namespace = "utils"
""",
    )

    config = load_config(config_file, workspace)

    assert config.packages == [
        PackageDescriptor("tml-parser", "parser"),
        PackageDescriptor("tml-utils", "utils"),
    ], "Descriptors should preserve declaration order"
    assert config.manifest_name == "package.json"
    assert config.artefact_dir_name == "dist"
    assert config.build_command == ["yarn", "build"]
    assert config.skip_build is False
    assert config.source_dir(config.packages[0]) == (
        workspace.absolute() / "packages" / "tml-parser"
    )
    assert config.namespace_dir(config.packages[1]) == (
        workspace.absolute() / "consumer" / "node_modules" / "@scope" / "utils"
    )


def test_load_config_accepts_overrides(workspace: Path) -> None:
    """Optional staging keys should override the defaults."""

    config_file = write_config(
        workspace / "staging.toml",
        """
[staging]
repo_root = "libs"
destination_root = "out"
manifest = "manifest.json"
artefact_dir = "build"
build_command = "npm run build --silent"
skip_build = true

[[packages]]
name = "core"
""",
    )

    config = load_config(config_file, workspace)

    assert config.manifest_name == "manifest.json"
    assert config.artefact_dir_name == "build"
    assert config.build_command == ["npm", "run", "build", "--silent"]
    assert config.skip_build is True
    assert config.packages == [PackageDescriptor("core", "core")], (
        "Namespace should default to the package name"
    )


def test_load_config_missing_file(workspace: Path) -> None:
    """A missing configuration file should raise ``FileNotFoundError``."""

    with pytest.raises(FileNotFoundError):
        load_config(workspace / "absent.toml", workspace)


@pytest.mark.parametrize(
    ("text", "fragment"),
    [
        ("[[packages]]\nname = 'a'\n", "Missing configuration key"),
        ("[staging]\nrepo_root = 'p'\n[[packages]]\nname = 'a'\n", "destination_root"),
        ("[staging]\nrepo_root = 'p'\ndestination_root = 'd'\n", "No packages"),
        (
            "[staging]\nrepo_root = 'p'\ndestination_root = 'd'\n"
            "[[packages]]\nnamespace = 'a'\n",
            "'name'",
        ),
        (
            "[staging]\nrepo_root = 'p'\ndestination_root = 'd'\n"
            "[[packages]]\nname = 'a'\nnamespace = 'x'\n"
            "[[packages]]\nname = 'b'\nnamespace = 'x'\n",
            "Namespace collision",
        ),
        (
            "[staging]\nrepo_root = 'p'\ndestination_root = 'd'\n"
            "build_command = []\n[[packages]]\nname = 'a'\n",
            "must not be empty",
        ),
        (
            "[staging]\nrepo_root = 'p'\ndestination_root = 'd'\n"
            "manifest = 5\n[[packages]]\nname = 'a'\n",
            "'manifest' must be a non-empty string",
        ),
        (
            "[staging]\nrepo_root = 'p'\ndestination_root = 'd'\n"
            "artefact_dir = ''\n[[packages]]\nname = 'a'\n",
            "'artefact_dir' must be a non-empty string",
        ),
        (
            "[staging]\nrepo_root = 'p'\ndestination_root = 'd'\n"
            "skip_build = 'false'\n[[packages]]\nname = 'a'\n",
            "'skip_build' must be a boolean",
        ),
        ("[staging\n", "Invalid TOML"),
    ],
)
def test_load_config_rejects_malformed_documents(
    workspace: Path, text: str, fragment: str
) -> None:
    """Malformed configuration should raise ``ConfigError``."""

    config_file = write_config(workspace / "staging.toml", text)

    with pytest.raises(ConfigError) as exc:
        load_config(config_file, workspace)

    assert fragment in str(exc.value), f"Expected '{fragment}' in '{exc.value}'"


def test_shipped_configuration_loads(workspace: Path) -> None:
    """The repository's own configuration file should be valid."""

    config = load_config(REPO_ROOT / "package-staging.toml", workspace)

    assert config.packages == [PackageDescriptor("tml-parser", "parser")]
    assert config.destination_root == "packages/tml-vscode/node_modules/@tml"
