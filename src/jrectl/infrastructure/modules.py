"""Module discovery via ``java --list-modules``."""

from __future__ import annotations

import logging

from jrectl.domain.modules import parse_module_line
from jrectl.infrastructure.binaries import ToolBinary
from jrectl.infrastructure.process import ensure_success, run_capturing

logger = logging.getLogger(__name__)

LIST_MODULES_FLAG = "--list-modules"


def discover_modules(
    java: ToolBinary,
    *,
    timeout: float | None = None,
    check_exit_status: bool = True,
) -> list[str]:
    """List the modules of the JDK that owns *java*, in the order it reports them.

    Lines without ``@`` are ignored. The returned list is built by a
    collector local to this call and handed back only once both the process
    and its output reader have finished.

    With *check_exit_status* off, a failing lister yields whatever modules
    it printed before exiting (possibly none).

    Raises:
        ExecutionError: Spawning or waiting failed, or (when checked) the
            lister exited non-zero.
    """
    modules: list[str] = []

    def collect(line: str) -> None:
        name = parse_module_line(line)
        if name is not None:
            modules.append(name)

    command = [str(java.path), LIST_MODULES_FLAG]
    returncode = run_capturing(command, collect, phase="discover", timeout=timeout)
    if check_exit_status:
        ensure_success(returncode, command, phase="discover")
    elif returncode != 0:
        logger.warning("%s exited with status %d; module list may be incomplete", java, returncode)

    logger.debug("Discovered %d modules", len(modules))
    return modules
