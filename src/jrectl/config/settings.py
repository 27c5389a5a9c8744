"""Unified settings — CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``JRECTL_*`` prefix
  3. TOML file    — ``jrectl.toml`` discovered via walk-up
  4. Code defaults — baked into the section models

The JDK location is the one exception to "settings only": when no
``java_home`` is configured anywhere, the process ``JAVA_HOME`` is used.
"""

from __future__ import annotations

import os
import threading
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from jrectl.config.discovery import find_config, read_config
from jrectl.config.models import JdkConfig, LinkConfig, ToolsConfig

JAVA_HOME_ENV_VAR = "JAVA_HOME"


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from a ``jrectl.toml`` file."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data = read_config(toml_path)

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        return self._data.get(field_name), field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return self._data


# The TOML path has to reach settings_customise_sources, which is a classmethod
# invoked from inside the constructor.
_tls = threading.local()


class JreSettings(BaseSettings):
    """Settings for one jrectl invocation, frozen after construction.

    Attributes:
        config_path: The jrectl.toml in effect, or None.
        java_home: Explicit JDK root (``--java-home`` / ``JRECTL_JAVA_HOME``);
            takes priority over ``[jdk] java_home``.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "JRECTL_",
        "env_nested_delimiter": "__",
    }

    config_path: Path | None = None
    java_home: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    # --- TOML sections ---
    jdk: JdkConfig = Field(default_factory=JdkConfig)
    link: LinkConfig = Field(default_factory=LinkConfig)
    tools: ToolsConfig = Field(default_factory=ToolsConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert TOML source between env vars and defaults."""
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, getattr(_tls, "toml_path", None)),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        start: Path | None = None,
        **cli_flags: Any,
    ) -> JreSettings:
        """Construct settings from a CLI invocation.

        Uses *config_path* when it names an existing file, otherwise
        discovers jrectl.toml from *start* (default: cwd). Flags that are
        None are dropped so they don't mask env or TOML values.
        """
        toml_path: Path | None = None
        if config_path:
            explicit = Path(config_path)
            if explicit.is_file():
                toml_path = explicit
        else:
            toml_path = find_config(start)

        overrides = {k: v for k, v in cli_flags.items() if v is not None}

        _tls.toml_path = toml_path
        try:
            return cls(config_path=toml_path, **overrides)
        finally:
            _tls.toml_path = None

    def resolve_java_home(self) -> Path | None:
        """Return the JDK root: explicit setting, then TOML, then ``JAVA_HOME``."""
        if self.java_home is not None:
            return self.java_home
        if self.jdk.java_home is not None:
            return self.jdk.java_home
        env_home = os.environ.get(JAVA_HOME_ENV_VAR)
        return Path(env_home) if env_home else None
