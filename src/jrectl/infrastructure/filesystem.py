"""Filesystem preparation for the image output directory.

jlink refuses to write into an existing directory, and a stale image mixed
with fresh output is worse than no image. The target is removed completely
before every link.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from jrectl.domain.errors import ExecutionError

logger = logging.getLogger(__name__)


def prepare_destination(target: Path) -> bool:
    """Remove *target* and everything under it. Returns True if anything was removed.

    Directories are removed depth-first (children before parents). Symlinks
    are unlinked, never followed. A failure part-way leaves whatever was not
    yet deleted in place; nothing is rolled back.

    Raises:
        ExecutionError: An entry could not be deleted.
    """
    if not target.exists() and not target.is_symlink():
        return False

    try:
        if target.is_dir() and not target.is_symlink():
            shutil.rmtree(target)
        else:
            target.unlink()
    except OSError as exc:
        failed = exc.filename or target
        msg = f"Could not remove previous output at {failed}: {exc.strerror or exc}"
        raise ExecutionError(msg, phase="prepare", path=str(target)) from exc

    logger.debug("Removed previous output: %s", target)
    return True
