"""
Configuration — typed, validated settings loaded from environment/.env.

Uses pydantic-settings to:
  - Load from TRUST_BUNDLE_* environment variables
  - Fall back to a .env file
  - Validate types and constraints at startup

All configuration errors surface when AppSettings() is constructed, before
any asset is touched.
"""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Resolve the .env file relative to the project root (two levels above this file),
# so settings load correctly regardless of the working directory at runtime.
_ENV_FILE = Path(__file__).parent.parent.parent / ".env"


class AppSettings(BaseSettings):
    """
    Root application settings.

    Load order (highest priority first):
      1. Environment variables (TRUST_BUNDLE_INSTALL_DIR, TRUST_BUNDLE_LOG_LEVEL, ...)
      2. .env file
      3. Default values
    """

    model_config = SettingsConfigDict(
        env_prefix="TRUST_BUNDLE_",
        env_file=_ENV_FILE,
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    install_dir: Path = Field(
        default=Path("."),
        description="Asset directory holding install-config.yaml",
    )
    output_dir: Path | None = Field(
        default=None,
        description="Directory receiving rendered manifests (defaults to install_dir)",
    )
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Accept any stdlib level name, case-insensitively."""
        level = value.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value!r}")
        return level

    @model_validator(mode="after")
    def default_output_dir(self) -> AppSettings:
        """Write manifests next to install-config.yaml unless told otherwise."""
        if self.output_dir is None:
            self.output_dir = self.install_dir
        return self

    def get_output_dir(self) -> Path:
        assert self.output_dir is not None  # guaranteed by default_output_dir
        return self.output_dir
