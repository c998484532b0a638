"""Pydantic settings model for Hemera's runtime switches.

Settings are loaded from environment variables with the HEMERA_ prefix.
A .env file is automatically loaded if present. Decorator arguments are
not settings: they are parsed per function by
``hemera.instrumentation.attributes``.
"""

from __future__ import annotations

from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from hemera.config.defaults import (
    DEFAULT_LOG_FILE_BACKUP_COUNT,
    DEFAULT_LOG_FILE_MAX_BYTES,
    DEFAULT_LOG_FORMAT,
    DEFAULT_LOG_LEVEL,
    DEFAULT_TRACING_ENABLED,
)


def _env_config(env_prefix: str) -> SettingsConfigDict:
    """Build a SettingsConfigDict with shared env-file settings.

    Args:
        env_prefix: The environment variable prefix for the config section.

    Returns:
        A SettingsConfigDict with the common .env loading behaviour.
    """
    return SettingsConfigDict(
        env_prefix=env_prefix,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


class HemeraSettings(BaseSettings):
    """Tracing switch and logging preferences."""

    model_config = _env_config("HEMERA_")

    tracing_enabled: bool = DEFAULT_TRACING_ENABLED
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = (
        DEFAULT_LOG_LEVEL  # type: ignore[assignment]
    )
    log_format: Literal["json", "text"] = (
        DEFAULT_LOG_FORMAT  # type: ignore[assignment]
    )
    log_file: str | None = None
    log_file_max_bytes: int = DEFAULT_LOG_FILE_MAX_BYTES
    log_file_backup_count: int = DEFAULT_LOG_FILE_BACKUP_COUNT

    @field_validator("log_file_max_bytes")
    @classmethod
    def validate_max_bytes(cls, v: int) -> int:
        """Ensure the rotation size is positive."""
        if v < 1:
            msg = f"log_file_max_bytes must be >= 1, got {v}"
            raise ValueError(msg)
        return v

    @field_validator("log_file_backup_count")
    @classmethod
    def validate_backup_count(cls, v: int) -> int:
        """Ensure the backup count is not negative."""
        if v < 0:
            msg = f"log_file_backup_count must be >= 0, got {v}"
            raise ValueError(msg)
        return v


def load_settings() -> HemeraSettings:
    """Load and validate Hemera settings from the environment.

    Returns:
        Fully validated HemeraSettings instance.

    Raises:
        pydantic.ValidationError: If any setting value is invalid.
    """
    return HemeraSettings()
