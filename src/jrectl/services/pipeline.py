"""Runtime image build pipeline.

Pipeline: VERSION → TARGET → LOCATE → DISCOVER → (PREPARE → LINK | SKIP)

:func:`run_pipeline` is stateless: everything it needs arrives in a frozen
:class:`BuildRequest`, and the tools it drives are injectable through
:class:`Toolchain` so tests can observe or stub individual phases. The first
failure aborts the run; nothing is retried.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from jrectl.domain.errors import ConfigurationError
from jrectl.domain.states import PipelineState, is_terminal, is_valid_transition
from jrectl.domain.version import (
    MINIMUM_FEATURE_VERSION,
    check_feature_version,
    parse_feature_version,
)
from jrectl.infrastructure.binaries import LINKER, MODULE_LISTER, ToolBinary, locate_binary
from jrectl.infrastructure.filesystem import prepare_destination
from jrectl.infrastructure.linker import DEFAULT_COMPRESS, build_link_command, link_image
from jrectl.infrastructure.modules import discover_modules
from jrectl.infrastructure.runtime import read_runtime_version
from jrectl.services.telemetry import trace_span

logger = logging.getLogger(__name__)

DEFAULT_IMAGE_DIR = "jre"


@dataclass(frozen=True)
class BuildRequest:
    """Inputs for one build run.

    Attributes:
        dist_folder: Existing distribution directory; the image is written to
            ``dist_folder / image_dir_name``.
        java_home: JDK installation root providing ``java`` and ``jlink``.
        timeout: Per-tool deadline in seconds, None to wait indefinitely.
        check_exit_status: Fail the build when a tool exits non-zero.
    """

    dist_folder: Path
    java_home: Path | None
    minimum_version: int = MINIMUM_FEATURE_VERSION
    image_dir_name: str = DEFAULT_IMAGE_DIR
    compress: str = DEFAULT_COMPRESS
    timeout: float | None = None
    check_exit_status: bool = True

    @property
    def target(self) -> Path:
        return self.dist_folder / self.image_dir_name


@dataclass(frozen=True)
class Toolchain:
    """The side-effecting collaborators of the pipeline."""

    read_version: Callable[[Path], str] = read_runtime_version
    locate: Callable[[Path, str], ToolBinary] = locate_binary
    discover: Callable[..., list[str]] = discover_modules
    prepare: Callable[[Path], bool] = prepare_destination
    link: Callable[..., int] = link_image


@dataclass
class PipelineOutcome:
    """What a finished run did. ``command`` is None when linking was skipped."""

    state: PipelineState
    target: Path
    runtime_version: str
    modules: list[str] = field(default_factory=list)
    binaries: dict[str, Path] = field(default_factory=dict)
    command: list[str] | None = None
    removed_previous: bool = False
    history: list[PipelineState] = field(default_factory=list)

    def advance(self, state: PipelineState) -> None:
        if not is_valid_transition(self.state, state):
            msg = f"Illegal pipeline transition: {self.state} -> {state}"
            raise RuntimeError(msg)
        logger.debug("Pipeline state: %s -> %s", self.state, state)
        self.history.append(self.state)
        self.state = state
        if self.finished:
            logger.debug("Pipeline finished after %d transitions", len(self.history))

    @property
    def finished(self) -> bool:
        return is_terminal(self.state)

    def to_dict(self) -> dict[str, Any]:
        return {
            "state": str(self.state),
            "target": str(self.target),
            "runtime_version": self.runtime_version,
            "module_count": len(self.modules),
            "modules": list(self.modules),
            "binaries": {role: str(path) for role, path in self.binaries.items()},
            "command": self.command,
            "removed_previous": self.removed_previous,
        }


def check_runtime(request: BuildRequest, toolchain: Toolchain) -> str:
    """Version gate. Returns the detected ``JAVA_VERSION`` string."""
    if request.java_home is None:
        msg = "No JDK configured: set JAVA_HOME or pass --java-home"
        raise ConfigurationError(msg, phase="version")
    version = toolchain.read_version(request.java_home)
    check_feature_version(parse_feature_version(version), request.minimum_version)
    return version


def validate_target(request: BuildRequest) -> None:
    """The distribution folder must already exist as a directory."""
    if not request.dist_folder.is_dir():
        msg = f"The distribution folder is invalid: {request.dist_folder}"
        raise ConfigurationError(msg, phase="validate", path=str(request.dist_folder))


def run_pipeline(request: BuildRequest, toolchain: Toolchain | None = None) -> PipelineOutcome:
    """Build a runtime image containing every module of the configured JDK.

    Ends in ``SKIPPED`` when the JDK reports no modules (the distribution
    folder is left untouched), otherwise in ``IMAGE_BUILT``.

    Raises:
        ConfigurationError: No JDK, JDK too old, or missing dist folder.
        NotFoundError: ``java`` or ``jlink`` is missing.
        ExecutionError: A tool could not be run, failed, or timed out, or
            the previous image could not be removed.
    """
    tools = toolchain or Toolchain()

    with trace_span("version") as span:
        version = check_runtime(request, tools)
        if span:
            span.annotate("java_version", version)
    outcome = PipelineOutcome(
        state=PipelineState.INIT, target=request.target, runtime_version=version
    )
    outcome.advance(PipelineState.VERSION_CHECKED)

    with trace_span("validate"):
        validate_target(request)
    outcome.advance(PipelineState.TARGET_VALIDATED)

    assert request.java_home is not None
    with trace_span("locate"):
        java = tools.locate(request.java_home, MODULE_LISTER)
        jlink = tools.locate(request.java_home, LINKER)
    outcome.binaries = {MODULE_LISTER: java.path, LINKER: jlink.path}
    outcome.advance(PipelineState.BINARIES_RESOLVED)

    with trace_span("discover") as span:
        outcome.modules = tools.discover(
            java,
            timeout=request.timeout,
            check_exit_status=request.check_exit_status,
        )
        if span:
            span.annotate("module_count", len(outcome.modules))
    outcome.advance(PipelineState.MODULES_DISCOVERED)

    if not outcome.modules:
        logger.info("No modules discovered; skipping image build")
        outcome.advance(PipelineState.SKIPPED)
        return outcome

    with trace_span("prepare"):
        outcome.removed_previous = tools.prepare(request.target)

    outcome.command = build_link_command(
        jlink, request.target, outcome.modules, compress=request.compress
    )
    with trace_span("link"):
        tools.link(
            outcome.command,
            timeout=request.timeout,
            check_exit_status=request.check_exit_status,
        )
    outcome.advance(PipelineState.IMAGE_BUILT)
    logger.info("Runtime image built at %s (%d modules)", request.target, len(outcome.modules))
    return outcome
