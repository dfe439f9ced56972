"""Run the build command for a source package.

The command runs in the foreground with the caller's standard streams so the
build output appears directly on the console. Any non-zero exit is fatal.

Examples
--------
Build a package with ``yarn``::

    from pathlib import Path
    from package_staging.build import run_build

    run_build(Path("packages/tml-parser"), ["yarn", "build"])
"""

from __future__ import annotations

import typing as typ

from plumbum import FG, local
from plumbum.commands import CommandNotFound, ProcessExecutionError

from .errors import BuildError, ConfigError

if typ.TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from plumbum.commands.base import BoundCommand

__all__ = ["run_build"]


def _bind_command(command: Sequence[str]) -> BoundCommand:
    executable, *arguments = command
    return local[executable][tuple(arguments)]


def run_build(package_dir: Path, command: Sequence[str]) -> None:
    """Run ``command`` inside ``package_dir`` and wait for it to finish.

    Parameters
    ----------
    package_dir : Path
        Source package directory used as the working directory.
    command : Sequence[str]
        Executable followed by its arguments.

    Raises
    ------
    ConfigError
        If ``command`` is empty.
    BuildError
        If the executable cannot be found or started, or exits with a
        non-zero status. Relative executables resolve against ``package_dir``.
    """
    if not command:
        message = "Build command must not be empty"
        raise ConfigError(message)

    try:
        with local.cwd(str(package_dir)):
            bound = _bind_command(command)
            bound & FG
    except CommandNotFound as exc:
        raise BuildError(package_dir, command, None) from exc
    except ProcessExecutionError as exc:
        raise BuildError(package_dir, command, exc.retcode) from exc
    except OSError as exc:
        raise BuildError(package_dir, command, None) from exc
