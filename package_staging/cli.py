"""Command-line entry point for the package staging helper.

Examples
--------
Build every configured package and stage it into the consumer's
``node_modules``::

    stage-packages package-staging.toml

Stage whatever artefacts already exist without rebuilding::

    STAGE_WORKSPACE="$(pwd)" stage-packages --skip-build
"""

from __future__ import annotations

import sys
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import Parameter

from .config import DEFAULT_CONFIG_NAME, load_config
from .errors import StageError
from .orchestrator import stage_packages

app = cyclopts.App(
    help="Build sibling packages and stage them as installed dependencies."
)


@app.default
def main(
    config_file: Path = Path(DEFAULT_CONFIG_NAME),
    *,
    workspace: typ.Annotated[
        Path | None, Parameter(env_var="STAGE_WORKSPACE")
    ] = None,
    skip_build: bool = False,
) -> None:
    """Build and stage the packages listed in ``config_file``.

    Parameters
    ----------
    config_file:
        TOML file listing the packages to stage.
    workspace:
        Directory that relative paths in ``config_file`` are resolved against.
        Defaults to the current directory.
    skip_build:
        Stage existing artefacts without running the build command.
    """
    try:
        config = load_config(Path(config_file), workspace or Path.cwd())
        if skip_build:
            config.skip_build = True
        run = stage_packages(config)
    except (FileNotFoundError, StageError) as exc:
        print(f"::error title=Staging Failure::{exc}", file=sys.stderr)
        raise SystemExit(1) from exc
    except OSError as exc:
        print(f"::error title=Unexpected Failure::{exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    print(
        f"Staged {len(run.staged)} package(s) into '{run.destination_root}' "
        f"with {run.warning_count} warning(s).",
        file=sys.stderr,
    )


if __name__ == "__main__":
    app()
