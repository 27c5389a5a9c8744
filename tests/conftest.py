"""Shared pytest fixtures and test helpers for jrectl tests.

Fake JDKs are directories with a ``release`` file and POSIX shell scripts
standing in for ``bin/java`` and ``bin/jlink``. The scripts record their
invocations next to ``bin/`` so tests can assert on what was spawned.
"""

from __future__ import annotations

from collections.abc import Callable, Generator
from pathlib import Path

import pytest
from click.testing import CliRunner

from jrectl.config.settings import JreSettings
from jrectl.services.telemetry import disable_telemetry

DEFAULT_MODULES = "java.base@17.0.1\njava.logging@17.0.1\n"

# Records its argv, then mimics jlink: refuse an existing --output, else
# create a minimal image there.
_JLINK_BODY = """\
here="$(dirname "$0")/.."
echo call >> "$here/jlink.calls"
printf '%s\\n' "$@" > "$here/jlink.args"
out=""
while [ $# -gt 0 ]; do
  if [ "$1" = "--output" ]; then out="$2"; shift; fi
  shift
done
if [ -e "$out" ]; then
  echo "Error: directory already exists: $out" >&2
  exit 4
fi
mkdir -p "$out/bin" "$out/lib"
echo 'JAVA_VERSION="17.0.1"' > "$out/release"
echo modules > "$out/lib/modules"
"""

FakeJdkFactory = Callable[..., Path]


def write_script(path: Path, body: str) -> None:
    """Write an executable POSIX shell script."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("#!/bin/sh\n" + body, encoding="utf-8")
    path.chmod(0o755)


def jlink_args(java_home: Path) -> list[str]:
    """Arguments (excluding argv[0]) of the last fake jlink run."""
    return (java_home / "jlink.args").read_text(encoding="utf-8").splitlines()


def call_count(java_home: Path, tool: str) -> int:
    """How many times the fake *tool* (``java`` or ``jlink``) was spawned."""
    calls = java_home / f"{tool}.calls"
    if not calls.exists():
        return 0
    return len(calls.read_text(encoding="utf-8").splitlines())


@pytest.fixture
def make_jdk(tmp_path: Path) -> FakeJdkFactory:
    """Factory for fake JDK installations under ``tmp_path``.

    Keyword args:
        name: Directory name (default ``"jdk"``).
        version: ``JAVA_VERSION`` written to ``release`` (None: no release file).
        modules_output: Text the fake ``java --list-modules`` prints.
        lister_exit / linker_exit: Exit statuses of the fake tools.
        lister_body: Replace the fake java script body entirely.
        with_java / with_jlink: Omit a binary when False.
    """

    def _make(
        *,
        name: str = "jdk",
        version: str | None = "17.0.1",
        modules_output: str = DEFAULT_MODULES,
        lister_exit: int = 0,
        linker_exit: int = 0,
        lister_body: str | None = None,
        with_java: bool = True,
        with_jlink: bool = True,
    ) -> Path:
        root = tmp_path / name
        (root / "bin").mkdir(parents=True)
        if version is not None:
            (root / "release").write_text(
                f'IMPLEMENTOR="Test"\nJAVA_VERSION="{version}"\n', encoding="utf-8"
            )
        (root / "modules.txt").write_text(modules_output, encoding="utf-8")
        if with_java:
            body = lister_body or (
                'here="$(dirname "$0")/.."\n'
                'echo call >> "$here/java.calls"\n'
                'cat "$here/modules.txt"\n'
                f"exit {lister_exit}\n"
            )
            write_script(root / "bin" / "java", body)
        if with_jlink:
            write_script(root / "bin" / "jlink", _JLINK_BODY + f"exit {linker_exit}\n")
        return root

    return _make


@pytest.fixture
def jdk(make_jdk: FakeJdkFactory) -> Path:
    """A fake JDK 17 listing java.base and java.logging."""
    return make_jdk()


@pytest.fixture
def dist(tmp_path: Path) -> Path:
    """An existing, empty distribution folder."""
    path = tmp_path / "dist"
    path.mkdir()
    return path


@pytest.fixture
def settings(jdk: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> JreSettings:
    """Settings pointing at the fake JDK, isolated from the host environment."""
    monkeypatch.delenv("JAVA_HOME", raising=False)
    monkeypatch.delenv("JRECTL_CONFIG", raising=False)
    return JreSettings.from_cli(java_home=jdk, start=tmp_path)


@pytest.fixture(autouse=True)
def _reset_telemetry() -> Generator[None]:
    """`-v` invocations enable telemetry for the whole thread; undo it."""
    yield
    disable_telemetry()


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def _isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run from ``tmp_path`` with no JAVA_HOME or jrectl config leaking in."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("JAVA_HOME", raising=False)
    monkeypatch.delenv("JRECTL_CONFIG", raising=False)
    for key in ("JRECTL_JAVA_HOME", "JRECTL_QUIET", "JRECTL_VERBOSE", "JRECTL_JSON_OUTPUT"):
        monkeypatch.delenv(key, raising=False)
