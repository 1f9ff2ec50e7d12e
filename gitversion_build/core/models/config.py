"""
Configuration models.

Provides Pydantic models for gitversion-build configuration with validation.
"""

from __future__ import annotations

import shlex
from pathlib import Path
from typing import Annotated, Literal

from pydantic import ConfigDict, Field, field_validator

from .base import GitVersionBuildBaseModel

# Type aliases
LogLevel = Literal["debug", "info", "warning", "error"]
PublishStyle = Literal["dotenv", "cargo", "none"]

DEFAULT_TOOL_COMMAND = ["dotnet-gitversion", "/nofetch"]


class ConfigBaseModel(GitVersionBuildBaseModel):
    """Base model for config sections with relaxed strict mode for TOML loading."""

    model_config = ConfigDict(
        strict=False,  # Allow coercion from TOML and env types
        validate_assignment=True,
        extra="ignore",  # Ignore unknown fields in config files
        populate_by_name=True,
        use_enum_values=True,
        revalidate_instances="never",
    )


class PublishConfig(ConfigBaseModel):
    """How published GITVERSION_* values leave the process."""

    style: PublishStyle = "dotenv"
    environ: bool = False
    env_file: Path | None = None


class LoggingConfig(ConfigBaseModel):
    """Logging configuration section."""

    level: LogLevel = "warning"
    console: bool = True
    file: bool = False
    log_file: Path | None = None


class SourceConfig(ConfigBaseModel):
    """Where the version payload comes from."""

    tool: list[str] = Field(default_factory=lambda: list(DEFAULT_TOOL_COMMAND))
    timeout: Annotated[float, Field(gt=0)] | None = 120.0
    cwd: Path | None = None
    payload_file: Path | None = None

    @field_validator("tool", mode="before")
    @classmethod
    def split_tool_command(cls, v: str | list[str]) -> list[str]:
        """Accept the command as a shell-style string as well as a list."""
        if isinstance(v, str):
            v = shlex.split(v)
        if not v:
            raise ValueError("tool command must not be empty")
        return v
