"""Locate the JDK tool binaries the build needs.

Only POSIX binary names are supported (``bin/java``, ``bin/jlink``).
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from jrectl.domain.errors import NotFoundError

logger = logging.getLogger(__name__)

MODULE_LISTER = "module-lister"
LINKER = "linker"

# Role -> path relative to the installation root.
TOOL_SUBPATHS: dict[str, str] = {
    MODULE_LISTER: "bin/java",
    LINKER: "bin/jlink",
}


@dataclass(frozen=True)
class ToolBinary:
    """An absolute tool path that existed and was readable when resolved."""

    role: str
    path: Path

    def __str__(self) -> str:
        return str(self.path)


def locate_binary(java_home: Path, role: str) -> ToolBinary:
    """Resolve the binary for *role* under *java_home*.

    Raises:
        NotFoundError: The file does not exist or cannot be read.
        KeyError: *role* is not a known tool role.
    """
    path = (java_home / TOOL_SUBPATHS[role]).absolute()
    if not (path.is_file() and os.access(path, os.R_OK)):
        name = path.name
        msg = f"The {name} executable ({role}) could not be found at {path}"
        raise NotFoundError(msg, phase="locate", role=role, path=str(path))
    logger.debug("Resolved %s binary: %s", role, path)
    return ToolBinary(role=role, path=path)
