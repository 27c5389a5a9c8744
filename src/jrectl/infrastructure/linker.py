"""Runtime image linking via ``jlink``."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from jrectl.domain.modules import join_modules
from jrectl.infrastructure.binaries import ToolBinary
from jrectl.infrastructure.process import ensure_success, run_silently

logger = logging.getLogger(__name__)

DEFAULT_COMPRESS = "2"


def build_link_command(
    jlink: ToolBinary,
    target: Path,
    modules: Sequence[str],
    *,
    compress: str = DEFAULT_COMPRESS,
) -> list[str]:
    """Return the full jlink argv for linking *modules* into *target*."""
    return [
        str(jlink.path),
        "--output",
        str(target),
        "--strip-debug",
        "--no-header-files",
        "--compress",
        compress,
        "--no-man-pages",
        "--add-modules",
        join_modules(modules),
    ]


def link_image(
    command: Sequence[str],
    *,
    timeout: float | None = None,
    check_exit_status: bool = True,
) -> int:
    """Run a jlink *command* built by :func:`build_link_command`.

    Output is discarded. Returns the exit status.

    Raises:
        ExecutionError: Spawning or waiting failed, or (when checked) jlink
            exited non-zero.
    """
    returncode = run_silently(command, phase="link", timeout=timeout)
    if check_exit_status:
        ensure_success(returncode, command, phase="link")
    elif returncode != 0:
        logger.warning("jlink exited with status %d", returncode)
    return returncode
