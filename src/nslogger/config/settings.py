"""
Environment Settings.

Process-wide gates and overrides read from the environment (and an optional
``.env`` file). ``DEBUG`` and ``NOLOG`` are honoured next to their prefixed
``NSLOG_DEBUG`` / ``NSLOG_NOLOG`` forms.
"""

from pathlib import Path
from typing import Literal

from pydantic import AliasChoices, Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..diagnostics import get_diagnostics_logger

ColorMode = Literal["auto", "always", "never"]
HostMode = Literal["auto", "process", "embedded"]


class LoggerSettings(BaseSettings):
    """Logging gates and overrides."""

    model_config = SettingsConfigDict(
        env_prefix="NSLOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        extra="ignore",
        frozen=True,
    )

    debug: bool = Field(
        default=False,
        validation_alias=AliasChoices("nslog_debug", "debug"),
        description="Emit debug-level messages",
    )
    nolog: bool = Field(
        default=False,
        validation_alias=AliasChoices("nslog_nolog", "nolog"),
        description="Disable all log file writes",
    )
    app_name: str | None = Field(default=None, description="Override of the application label")
    log_dir: Path | None = Field(default=None, description="Override of the platform log directory")
    color: ColorMode = Field(default="auto", description="Terminal styling")
    host: HostMode = Field(default="auto", description="Host context (embedded hosts get browser formatting)")
    diagnostics_format: Literal["console", "json"] = Field(
        default="console",
        description="Format of internal diagnostics on stderr",
    )


def load_settings() -> LoggerSettings:
    """Read settings from the environment, falling back to defaults when invalid."""
    try:
        return LoggerSettings()
    except ValidationError as exc:
        get_diagnostics_logger().warning(
            "settings_invalid",
            errors=exc.error_count(),
            fields=",".join(str(error["loc"][0]) for error in exc.errors() if error["loc"]),
        )
        return LoggerSettings.model_construct()
