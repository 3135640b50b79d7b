"""Runtime configuration settings for slash-activity.

This module uses Pydantic Settings for configuration that can be
overridden via environment variables. This provides:
- Type validation
- Environment variable support (SLASH_ACTIVITY_ prefix)
- Default values
- Easy testing via dependency injection
"""

import logging
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from slash_activity.constants import (
    DEFAULT_BUSY_TIMEOUT_SECONDS,
    DEFAULT_DB_PATH,
    DEFAULT_LOG_BACKUP_COUNT,
    DEFAULT_LOG_LEVEL,
    DEFAULT_LOG_MAX_SIZE_MB,
)


class StoreSettings(BaseSettings):
    """Activity store settings.

    Can be overridden via environment variables with SLASH_ACTIVITY_ prefix.
    """

    model_config = SettingsConfigDict(env_prefix="SLASH_ACTIVITY_")

    db_path: Path = Field(
        default=Path(DEFAULT_DB_PATH),
        description="SQLite database file holding the activity table",
    )
    busy_timeout_seconds: float = Field(
        default=DEFAULT_BUSY_TIMEOUT_SECONDS,
        gt=0,
        description="Seconds to wait on a locked database",
    )
    operation_timeout_seconds: float | None = Field(
        default=None,
        gt=0,
        description="Default deadline applied to each store operation",
    )


class LoggingSettings(BaseSettings):
    """Logging settings.

    Can be overridden via environment variables with SLASH_ACTIVITY_LOG_ prefix.
    """

    model_config = SettingsConfigDict(env_prefix="SLASH_ACTIVITY_LOG_")

    level: str = Field(default=DEFAULT_LOG_LEVEL, description="Package log level")
    file: Path | None = Field(default=None, description="Log file; stderr when unset")
    rotation_enabled: bool = Field(default=True, description="Rotate the log file by size")
    max_size_mb: int = Field(default=DEFAULT_LOG_MAX_SIZE_MB, ge=1)
    backup_count: int = Field(default=DEFAULT_LOG_BACKUP_COUNT, ge=0)

    @field_validator("level")
    @classmethod
    def _validate_level(cls, value: str) -> str:
        level = value.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {value}")
        return level

    def get_max_bytes(self) -> int:
        """Maximum log file size in bytes before rotation."""
        return self.max_size_mb * 1024 * 1024
