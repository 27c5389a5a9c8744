"""Java version parsing and the minimum-version gate.

Pure functions only; reading the version from a JDK lives in
:mod:`jrectl.infrastructure.runtime`.
"""

from __future__ import annotations

import re

from jrectl.domain.errors import ConfigurationError

MINIMUM_FEATURE_VERSION = 15

# "17.0.1", "21", "22-ea", "1.8.0_292", "11.0.2+9"
_VERSION_RE = re.compile(r"^(?P<first>\d+)(?:\.(?P<second>\d+))?")


def parse_feature_version(version: str) -> int:
    """Return the feature (major) release number of a Java version string.

    Legacy ``1.x`` strings map to ``x`` (``"1.8.0_292"`` → 8).

    Raises:
        ConfigurationError: *version* does not start with a number.
    """
    match = _VERSION_RE.match(version.strip())
    if match is None:
        msg = f"Unrecognized Java version string: {version!r}"
        raise ConfigurationError(msg, phase="version", version=version)
    first = int(match.group("first"))
    second = match.group("second")
    if first == 1 and second is not None:
        return int(second)
    return first


def check_feature_version(feature: int, minimum: int = MINIMUM_FEATURE_VERSION) -> None:
    """Raise ConfigurationError unless *feature* >= *minimum*."""
    if feature < minimum:
        msg = f"To build a JRE, the Java version must be at least {minimum} (found {feature})."
        raise ConfigurationError(msg, phase="version", found=feature, minimum=minimum)
