"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, jrectl.toml only contains overrides.
An empty (or absent) jrectl.toml builds a ``jre`` image with ``--compress 2``.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field

# --- jrectl.toml sections ---


class JdkConfig(BaseModel):
    """[jdk] section."""

    model_config = {"frozen": True}

    java_home: Path | None = None
    minimum_version: int = Field(default=15, ge=1)


class LinkConfig(BaseModel):
    """[link] section."""

    model_config = {"frozen": True}

    image_dir_name: str = "jre"
    compress: str = "2"


class ToolsConfig(BaseModel):
    """[tools] section.

    ``timeout`` bounds each spawned tool in seconds (None waits forever).
    ``check_exit_status`` turns a non-zero tool exit into a build failure.
    """

    model_config = {"frozen": True}

    timeout: float | None = Field(default=None, gt=0)
    check_exit_status: bool = True
