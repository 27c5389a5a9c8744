"""Error taxonomy for runtime image builds.

Every pipeline failure is raised as a :class:`JreBuildError` subclass that
names the failing phase. The service layer converts these into a failed
ServiceResult; nothing below it recovers locally.
"""

from __future__ import annotations

from typing import Any


class JreBuildError(Exception):
    """Base class for all build pipeline failures.

    Attributes:
        code: Machine-readable error code copied into ``ServiceError.code``.
        phase: Pipeline phase that raised (e.g. ``"discover"``).
        detail: Extra context (paths, exit codes) for structured output.
    """

    code = "BUILD_ERROR"

    def __init__(self, message: str, *, phase: str, **detail: Any) -> None:
        super().__init__(message)
        self.message = message
        self.phase = phase
        self.detail = detail


class ConfigurationError(JreBuildError):
    """Invalid input directory, missing JDK, or unsupported JDK version."""

    code = "CONFIGURATION_ERROR"


class NotFoundError(JreBuildError):
    """A required tool binary is missing or unreadable."""

    code = "NOT_FOUND"


class ExecutionError(JreBuildError):
    """Spawn failure, interrupted wait, failed deletion, or non-zero exit."""

    code = "EXECUTION_ERROR"


class ToolTimeoutError(ExecutionError):
    """A spawned tool ran past its deadline and was killed."""

    code = "TOOL_TIMEOUT"
