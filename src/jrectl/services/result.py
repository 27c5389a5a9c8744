"""ServiceResult and ServiceError — the contract between services and the CLI.

INVARIANT: Service methods return ServiceResult; a JreBuildError never
escapes the service layer.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from jrectl.domain.errors import JreBuildError


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_exception(cls, exc: JreBuildError) -> ServiceError:
        """Carry the failing phase and the error's context into ``detail``."""
        detail = {"phase": exc.phase, **exc.detail}
        return cls(code=exc.code, message=exc.message, detail=detail)


class ServiceResult(BaseModel):
    """Return type for every service operation.

    Attributes:
        ok: Whether the operation succeeded.
        op: Operation name (``"build"``, ``"list_modules"``).
        data: Operation payload on success.
        warnings: Non-fatal issues (e.g. an ignored non-zero tool exit).
        error: Structured error when ``ok`` is False.
        meta: Timing telemetry when ``--verbose`` is on.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    @classmethod
    def failure(cls, op: str, exc: JreBuildError) -> ServiceResult:
        return cls(ok=False, op=op, error=ServiceError.from_exception(exc))
