"""BaseService — shared foundation for jrectl services.

Every service receives the frozen :class:`JreSettings` at construction time
and derives per-run inputs from it. Services translate JreBuildError into a
failed ServiceResult at their boundary.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from jrectl.domain.errors import JreBuildError
from jrectl.services.result import ServiceResult

if TYPE_CHECKING:
    from jrectl.config.settings import JreSettings

logger = logging.getLogger(__name__)


class BaseService:
    """Base for service-layer classes.

    Usage::

        class BuildService(BaseService):
            def build(self, dist_folder: Path) -> ServiceResult:
                try:
                    ...
                except JreBuildError as exc:
                    return self._fail("build", exc)
    """

    def __init__(self, settings: JreSettings) -> None:
        self._settings = settings

    def _fail(self, op: str, exc: JreBuildError) -> ServiceResult:
        logger.debug("%s failed in phase %s: %s", op, exc.phase, exc.message)
        return ServiceResult.failure(op, exc)
