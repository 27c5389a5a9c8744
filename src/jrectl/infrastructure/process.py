"""Subprocess spawning with concurrent stdout draining.

A child writing to a pipe blocks once the pipe buffer fills. If the parent
only calls ``wait()`` without reading, both sides block forever. Captured
output is therefore drained by a :class:`ProcessOutputReader` running on a
worker thread that is started *before* the parent waits.

Output that nobody reads goes to the null device instead of a pipe, so an
uncaptured child can never block on it.

Every child leads its own session. A timeout kills the whole process group,
so a wrapper script's descendants cannot keep the stdout pipe open.
"""

from __future__ import annotations

import logging
import os
import signal
import subprocess
from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor
from typing import IO

from jrectl.domain.errors import ExecutionError, ToolTimeoutError

logger = logging.getLogger(__name__)

LineHandler = Callable[[str], None]


class ProcessOutputReader:
    """Forward each line of a text stream to a handler until end-of-stream.

    Meant to be submitted to an executor; calling it returns the number of
    lines delivered. Line terminators are stripped. Lines are delivered in
    the order the child wrote them.
    """

    def __init__(self, stream: IO[str], handler: LineHandler) -> None:
        self._stream = stream
        self._handler = handler

    def __call__(self) -> int:
        delivered = 0
        for line in self._stream:
            self._handler(line.rstrip("\r\n"))
            delivered += 1
        return delivered


def spawn(command: Sequence[str], *, phase: str, capture: bool) -> subprocess.Popen[str]:
    """Start *command*; stdout is piped only when *capture* is set.

    Raises:
        ExecutionError: The executable could not be started.
    """
    logger.debug("Spawning: %s", subprocess.list2cmdline(command))
    try:
        return subprocess.Popen(
            list(command),
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE if capture else subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            text=True,
            encoding="utf-8",
            errors="replace",
            start_new_session=True,
        )
    except OSError as exc:
        msg = f"Could not start {command[0]}: {exc.strerror or exc}"
        raise ExecutionError(msg, phase=phase, command=list(command)) from exc


def wait_for_exit(
    process: subprocess.Popen[str],
    *,
    phase: str,
    timeout: float | None = None,
) -> int:
    """Block until *process* exits and return its exit status.

    On timeout the child's process group is killed and the child reaped
    before ToolTimeoutError is raised, so no zombie outlives the call.
    """
    try:
        return process.wait(timeout=timeout)
    except subprocess.TimeoutExpired as exc:
        kill_process_group(process)
        process.wait()
        msg = f"{process.args[0]} did not exit within {timeout} seconds"
        raise ToolTimeoutError(msg, phase=phase, timeout=timeout) from exc
    except OSError as exc:
        msg = f"Waiting for {process.args[0]} failed: {exc}"
        raise ExecutionError(msg, phase=phase) from exc


def kill_process_group(process: subprocess.Popen[str]) -> None:
    """SIGKILL every process in the group *process* leads."""
    try:
        os.killpg(process.pid, signal.SIGKILL)
    except ProcessLookupError:
        logger.debug("Process group %d already gone", process.pid)


def run_capturing(
    command: Sequence[str],
    handler: LineHandler,
    *,
    phase: str,
    timeout: float | None = None,
) -> int:
    """Run *command*, passing each stdout line to *handler*; return exit status.

    Returns only after the child has exited *and* the reader has consumed
    end-of-stream, so everything *handler* saw is final.
    """
    with spawn(command, phase=phase, capture=True) as process:
        assert process.stdout is not None
        with ThreadPoolExecutor(max_workers=1, thread_name_prefix="jrectl-drain") as pool:
            future = pool.submit(ProcessOutputReader(process.stdout, handler))
            returncode = wait_for_exit(process, phase=phase, timeout=timeout)
            try:
                lines = future.result()
            except OSError as exc:
                msg = f"Reading output of {command[0]} failed: {exc}"
                raise ExecutionError(msg, phase=phase) from exc
    logger.debug("%s exited with %d after %d lines", command[0], returncode, lines)
    return returncode


def run_silently(
    command: Sequence[str],
    *,
    phase: str,
    timeout: float | None = None,
) -> int:
    """Run *command* with output discarded; return exit status."""
    with spawn(command, phase=phase, capture=False) as process:
        returncode = wait_for_exit(process, phase=phase, timeout=timeout)
    logger.debug("%s exited with %d", command[0], returncode)
    return returncode


def ensure_success(returncode: int, command: Sequence[str], *, phase: str) -> None:
    """Raise ExecutionError for a non-zero exit status."""
    if returncode != 0:
        msg = f"{command[0]} exited with status {returncode}"
        raise ExecutionError(msg, phase=phase, returncode=returncode, command=list(command))
