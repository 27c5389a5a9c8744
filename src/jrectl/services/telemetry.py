"""Phase timing — Span, trace_span, @traced.

Disabled unless ``--verbose``: each call then costs one ContextVar lookup.
When enabled, a service method gets a root span, every pipeline phase a
child span, and the finished tree lands in ``ServiceResult.meta["telemetry"]``.
"""

from __future__ import annotations

import functools
import time
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any, ParamSpec, TypeVar

import structlog

from jrectl.services.result import ServiceResult

log = structlog.get_logger("jrectl.telemetry")

_enabled: ContextVar[bool] = ContextVar("_enabled", default=False)
_active: ContextVar[Span | None] = ContextVar("_active", default=None)


@dataclass
class Span:
    """A timed phase with optional annotations and child phases."""

    name: str
    started: float = field(default_factory=time.perf_counter)
    finished: float | None = None
    annotations: dict[str, Any] = field(default_factory=dict)
    children: list[Span] = field(default_factory=list)

    @property
    def duration_ms(self) -> float:
        if self.finished is None:
            return 0.0
        return (self.finished - self.started) * 1000

    def annotate(self, key: str, value: Any) -> None:
        self.annotations[key] = value

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"name": self.name, "duration_ms": round(self.duration_ms, 2)}
        if self.annotations:
            out["annotations"] = self.annotations
        if self.children:
            out["children"] = [child.to_dict() for child in self.children]
        return out


@contextmanager
def trace_span(name: str) -> Iterator[Span | None]:
    """Time a phase under the active span. Yields None when disabled.

    Log records emitted inside the block carry ``phase=<name>`` either way.
    """
    with structlog.contextvars.bound_contextvars(phase=name):
        parent = _active.get() if _enabled.get() else None
        if parent is None:
            yield None
            return

        span = Span(name=name)
        parent.children.append(span)
        token = _active.set(span)
        try:
            yield span
        finally:
            span.finished = time.perf_counter()
            _active.reset(token)
            log.debug("phase.complete", duration_ms=round(span.duration_ms, 2))


_P = ParamSpec("_P")
_R = TypeVar("_R")


def traced(func: Callable[_P, _R]) -> Callable[_P, _R]:
    """Open a root span around a service method and attach it to its result."""

    @functools.wraps(func)
    def wrapper(*args: _P.args, **kwargs: _P.kwargs) -> _R:
        if not _enabled.get():
            return func(*args, **kwargs)

        root = Span(name=func.__qualname__)
        token = _active.set(root)
        try:
            result = func(*args, **kwargs)
        finally:
            root.finished = time.perf_counter()
            _active.reset(token)

        if isinstance(result, ServiceResult):
            meta = {**(result.meta or {}), "telemetry": root.to_dict()}
            result = result.model_copy(update={"meta": meta})  # type: ignore[assignment]
        return result

    return wrapper


def enable_telemetry() -> None:
    """Turn on span collection (called by AppContext for ``--verbose``)."""
    _enabled.set(True)


def disable_telemetry() -> None:
    _enabled.set(False)
