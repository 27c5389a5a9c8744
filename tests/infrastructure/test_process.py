"""Tests for subprocess spawning and concurrent output draining."""

from __future__ import annotations

import io
import sys
import threading
import time
from pathlib import Path

import pytest

from jrectl.domain.errors import ExecutionError, ToolTimeoutError
from jrectl.infrastructure.process import (
    ProcessOutputReader,
    ensure_success,
    run_capturing,
    run_silently,
)


def _python(code: str) -> list[str]:
    return [sys.executable, "-c", code]


class TestProcessOutputReader:
    def test_delivers_lines_in_order(self) -> None:
        seen: list[str] = []
        reader = ProcessOutputReader(io.StringIO("a\nb\r\n\nc"), seen.append)
        assert reader() == 4
        assert seen == ["a", "b", "", "c"]

    def test_empty_stream(self) -> None:
        seen: list[str] = []
        assert ProcessOutputReader(io.StringIO(""), seen.append)() == 0
        assert seen == []


class TestRunCapturing:
    def test_collects_all_lines(self) -> None:
        seen: list[str] = []
        code = run_capturing(_python("print('one'); print('two')"), seen.append, phase="t")
        assert code == 0
        assert seen == ["one", "two"]

    def test_output_larger_than_pipe_buffer(self) -> None:
        """A chatty child must not deadlock against the parent's wait."""
        seen: list[str] = []
        code = run_capturing(
            _python("import sys\nfor i in range(100000): sys.stdout.write(f'm{i}@1\\n')"),
            seen.append,
            phase="t",
            timeout=60,
        )
        assert code == 0
        assert len(seen) == 100000
        assert seen[0] == "m0@1"
        assert seen[-1] == "m99999@1"

    def test_handler_runs_off_the_calling_thread(self) -> None:
        threads: set[str] = set()
        run_capturing(
            _python("print('x')"),
            lambda _line: threads.add(threading.current_thread().name),
            phase="t",
        )
        assert threads
        assert threading.current_thread().name not in threads

    def test_returns_nonzero_exit(self) -> None:
        code = run_capturing(_python("import sys; print('x'); sys.exit(3)"), lambda _l: None, phase="t")
        assert code == 3

    def test_missing_executable(self, tmp_path: Path) -> None:
        with pytest.raises(ExecutionError) as exc_info:
            run_capturing([str(tmp_path / "nope")], lambda _l: None, phase="discover")
        assert exc_info.value.phase == "discover"
        assert isinstance(exc_info.value.__cause__, OSError)

    def test_timeout_kills_child(self) -> None:
        with pytest.raises(ToolTimeoutError) as exc_info:
            run_capturing(
                _python("import time; print('started', flush=True); time.sleep(30)"),
                lambda _l: None,
                phase="discover",
                timeout=0.5,
            )
        assert exc_info.value.detail["timeout"] == 0.5

    def test_timeout_reaches_grandchildren(self) -> None:
        code = (
            "import subprocess, sys\n"
            "print('java.base@17', flush=True)\n"
            "subprocess.run([sys.executable, '-c', 'import time; time.sleep(30)'])\n"
        )
        started = time.monotonic()
        with pytest.raises(ToolTimeoutError):
            run_capturing(_python(code), lambda _l: None, phase="discover", timeout=0.5)
        assert time.monotonic() - started < 10


class TestRunSilently:
    def test_exit_status(self) -> None:
        assert run_silently(_python("import sys; sys.exit(0)"), phase="link") == 0
        assert run_silently(_python("import sys; sys.exit(2)"), phase="link") == 2

    def test_large_output_is_discarded(self) -> None:
        assert run_silently(_python("print('x' * 1_000_000)"), phase="link", timeout=60) == 0

    def test_timeout(self) -> None:
        with pytest.raises(ToolTimeoutError):
            run_silently(_python("import time; time.sleep(30)"), phase="link", timeout=0.5)

    def test_timeout_is_an_execution_error(self) -> None:
        with pytest.raises(ExecutionError):
            run_silently(_python("import time; time.sleep(30)"), phase="link", timeout=0.5)


class TestEnsureSuccess:
    def test_zero_passes(self) -> None:
        ensure_success(0, ["tool"], phase="link")

    def test_nonzero_raises(self) -> None:
        with pytest.raises(ExecutionError, match="status 4") as exc_info:
            ensure_success(4, ["/jdk/bin/jlink", "--output"], phase="link")
        assert exc_info.value.detail["returncode"] == 4
