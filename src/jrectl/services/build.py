"""BuildService — runtime image builds and JDK module listing."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from jrectl.domain.errors import ConfigurationError, JreBuildError
from jrectl.infrastructure.binaries import MODULE_LISTER
from jrectl.services.base import BaseService
from jrectl.services.pipeline import BuildRequest, Toolchain, run_pipeline
from jrectl.services.result import ServiceResult
from jrectl.services.telemetry import trace_span, traced

if TYPE_CHECKING:
    from jrectl.config.settings import JreSettings


class BuildService(BaseService):
    """Build a minimized runtime image from the configured JDK."""

    def __init__(self, settings: JreSettings, toolchain: Toolchain | None = None) -> None:
        super().__init__(settings)
        self._toolchain = toolchain or Toolchain()

    def make_request(
        self,
        dist_folder: Path,
        *,
        timeout: float | None = None,
        check_exit_status: bool | None = None,
    ) -> BuildRequest:
        """Combine settings with per-invocation overrides into a BuildRequest."""
        s = self._settings
        return BuildRequest(
            dist_folder=dist_folder,
            java_home=s.resolve_java_home(),
            minimum_version=s.jdk.minimum_version,
            image_dir_name=s.link.image_dir_name,
            compress=s.link.compress,
            timeout=timeout if timeout is not None else s.tools.timeout,
            check_exit_status=(
                s.tools.check_exit_status if check_exit_status is None else check_exit_status
            ),
        )

    @traced
    def build(
        self,
        dist_folder: Path,
        *,
        timeout: float | None = None,
        check_exit_status: bool | None = None,
    ) -> ServiceResult:
        """VERSION → VALIDATE → LOCATE → DISCOVER → PREPARE → LINK."""
        op = "build"
        request = self.make_request(
            dist_folder, timeout=timeout, check_exit_status=check_exit_status
        )
        try:
            outcome = run_pipeline(request, self._toolchain)
        except JreBuildError as exc:
            return self._fail(op, exc)

        warnings: list[str] = []
        if not outcome.modules:
            warnings.append("The JDK reported no modules; no runtime image was built")
        return ServiceResult(ok=True, op=op, data=outcome.to_dict(), warnings=warnings)

    @traced
    def list_modules(self) -> ServiceResult:
        """Report the modules ``java --list-modules`` prints for the configured JDK."""
        op = "list_modules"
        java_home = self._settings.resolve_java_home()
        try:
            if java_home is None:
                msg = "No JDK configured: set JAVA_HOME or pass --java-home"
                raise ConfigurationError(msg, phase="locate")
            with trace_span("locate"):
                java = self._toolchain.locate(java_home, MODULE_LISTER)
            with trace_span("discover"):
                modules = self._toolchain.discover(
                    java,
                    timeout=self._settings.tools.timeout,
                    check_exit_status=self._settings.tools.check_exit_status,
                )
        except JreBuildError as exc:
            return self._fail(op, exc)

        return ServiceResult(
            ok=True,
            op=op,
            data={"java_home": str(java_home), "count": len(modules), "modules": modules},
        )
