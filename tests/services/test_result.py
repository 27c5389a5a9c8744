"""Tests for the ServiceResult contract."""

from __future__ import annotations

import pytest

from jrectl.domain.errors import NotFoundError, ToolTimeoutError
from jrectl.services.result import ServiceError, ServiceResult


class TestServiceResult:
    def test_frozen(self) -> None:
        result = ServiceResult(ok=True, op="build")
        with pytest.raises(Exception):
            result.ok = False  # type: ignore[misc]

    def test_failure_from_exception(self) -> None:
        exc = NotFoundError("no jlink", phase="locate", role="linker", path="/jdk/bin/jlink")
        result = ServiceResult.failure("build", exc)
        assert result.ok is False
        assert result.error == ServiceError(
            code="NOT_FOUND",
            message="no jlink",
            detail={"phase": "locate", "role": "linker", "path": "/jdk/bin/jlink"},
        )

    def test_subclass_code(self) -> None:
        exc = ToolTimeoutError("slow", phase="link", timeout=1.0)
        assert ServiceResult.failure("build", exc).error.code == "TOOL_TIMEOUT"  # type: ignore[union-attr]

    def test_json_round_trip_fields(self) -> None:
        payload = ServiceResult(ok=True, op="build", data={"state": "skipped"}).model_dump()
        assert set(payload) == {"ok", "op", "data", "warnings", "error", "meta"}
