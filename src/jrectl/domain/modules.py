"""Module descriptor parsing for ``java --list-modules`` output.

Each module line has the form ``<name>@<version>``. Anything else (banners,
blank lines, warnings) is not a module and is skipped.
"""

from __future__ import annotations

from collections.abc import Iterable

MODULE_SEPARATOR = "@"


def parse_module_line(line: str) -> str | None:
    """Return the module name from a descriptor line, or None if not one.

    Only the text before the first ``@`` is kept, so the stored name never
    contains the separator.
    """
    name, sep, _version = line.partition(MODULE_SEPARATOR)
    if not sep:
        return None
    return name


def join_modules(modules: Iterable[str]) -> str:
    """Join module names for ``--add-modules`` (comma, no spaces)."""
    return ",".join(modules)
