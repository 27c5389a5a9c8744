"""Read JDK metadata from an installation root.

Every JDK since 9 ships a ``release`` file of ``KEY="value"`` lines at its
root; ``JAVA_VERSION`` names the runtime version.
"""

from __future__ import annotations

import logging
from pathlib import Path

from jrectl.domain.errors import ConfigurationError

logger = logging.getLogger(__name__)

RELEASE_FILENAME = "release"
VERSION_KEY = "JAVA_VERSION"


def read_release(java_home: Path) -> dict[str, str]:
    """Parse ``<java_home>/release`` into a dict with quotes stripped.

    Raises:
        ConfigurationError: The file is missing or unreadable.
    """
    path = java_home / RELEASE_FILENAME
    try:
        raw = path.read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        msg = f"Cannot read JDK release metadata at {path}: {exc.strerror or exc}"
        raise ConfigurationError(msg, phase="version", path=str(path)) from exc

    entries: dict[str, str] = {}
    for line in raw.splitlines():
        key, sep, value = line.partition("=")
        if not sep or not key.strip():
            continue
        entries[key.strip()] = value.strip().strip('"')
    return entries


def read_runtime_version(java_home: Path) -> str:
    """Return the ``JAVA_VERSION`` recorded for the JDK at *java_home*."""
    version = read_release(java_home).get(VERSION_KEY)
    if not version:
        msg = f"{VERSION_KEY} is not set in {java_home / RELEASE_FILENAME}"
        raise ConfigurationError(msg, phase="version", path=str(java_home))
    logger.debug("Detected Java runtime %s at %s", version, java_home)
    return version
