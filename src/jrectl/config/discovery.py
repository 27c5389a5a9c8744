"""Config file discovery and loading.

jrectl.toml is found by walking up from the working directory, so a build
script run anywhere inside a project picks up the project's settings.
``JRECTL_CONFIG`` pins an explicit file instead.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

import click

CONFIG_FILENAME = "jrectl.toml"
CONFIG_ENV_VAR = "JRECTL_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Return the nearest jrectl.toml at or above *start* (default: cwd).

    When ``JRECTL_CONFIG`` is set it wins outright; a dangling value means
    no config rather than falling back to the walk-up.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        pinned = Path(env_path)
        return pinned if pinned.is_file() else None

    origin = (start or Path.cwd()).resolve()
    for directory in (origin, *origin.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def read_config(path: Path | None) -> dict[str, Any]:
    """Parse *path* as TOML. Missing file → empty dict.

    Raises:
        click.ClickException: The file exists but is not valid TOML.
    """
    if path is None or not path.is_file():
        return {}
    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        msg = f"Invalid TOML in {path}: {exc}"
        raise click.ClickException(msg) from exc
