"""
Configuration management for the stamp catalog.

This module provides environment-based configuration using Pydantic BaseSettings.
Settings only tune the ambient behaviour (logging, file encoding, error export);
the line grammar, ordering rules and output format are fixed.

Environment variables are loaded with the STAMP_CATALOG_ prefix, except for
LOG_LEVEL which is read without prefix to match the usual deployment convention.
"""

import os
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

PROJECT_ROOT = Path(__file__).resolve().parents[3]
DEFAULT_ENV_FILE = PROJECT_ROOT / ".env"
ENV_FILE_OVERRIDE = os.getenv("STAMP_CATALOG_ENV_FILE")
if ENV_FILE_OVERRIDE:
    env_file_candidate = Path(ENV_FILE_OVERRIDE).expanduser()
    if not env_file_candidate.is_absolute():
        env_file_candidate = PROJECT_ROOT / env_file_candidate
    SETTINGS_ENV_FILE = env_file_candidate
else:
    SETTINGS_ENV_FILE = DEFAULT_ENV_FILE

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """
    Application settings with environment variable support.

    Fields:
    - LOG_LEVEL: Logging level for structured logs (uppercase, no prefix)
    - log_to_file / log_file_dir: optional rotating file logging
    - input_encoding: encoding used when reading an input file
    - errors_csv_path: export rejected lines to this CSV when set
    """

    LOG_LEVEL: str = Field(
        default="WARNING",
        validation_alias=AliasChoices("LOG_LEVEL", "STAMP_CATALOG_LOG_LEVEL"),
        description="Logging level (uppercase)",
    )

    log_to_file: bool = Field(default=False, description="Enable file logging")
    log_file_dir: str = Field(default="logs", description="Directory for log files")

    input_encoding: str = Field(
        default="utf-8", description="Encoding used when reading an input file"
    )

    errors_csv_path: Optional[str] = Field(
        default=None,
        description="Export rejected lines to this CSV path (None = no export)",
    )

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def normalize_log_level(cls, value: object) -> str:
        """Upper-case the level name and reject unknown levels."""
        level = str(value).strip().upper()
        if level not in VALID_LOG_LEVELS:
            raise ValueError(
                f"LOG_LEVEL must be one of {', '.join(VALID_LOG_LEVELS)}, got {value!r}"
            )
        return level

    def get_log_file_dir(self) -> Path:
        """Resolve the log directory, creating it if needed."""
        log_dir = Path(self.log_file_dir).expanduser()
        log_dir.mkdir(parents=True, exist_ok=True)
        return log_dir

    model_config = SettingsConfigDict(
        env_prefix="STAMP_CATALOG_",
        env_file=str(SETTINGS_ENV_FILE),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Settings are loaded once and reused; tests call ``get_settings.cache_clear()``
    after patching the environment.

    Returns:
        Settings instance with loaded configuration
    """
    return Settings()
