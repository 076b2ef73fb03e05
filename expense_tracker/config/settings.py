"""
Configuration Management for Expense Tracker

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
The ledger file location used to be a constant in the command code;
it is now read once per process from the environment (or a .env file).
"""

import logging
from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


LOG_LEVELS = {
    "CRITICAL": logging.CRITICAL,
    "ERROR": logging.ERROR,
    "WARNING": logging.WARNING,
    "INFO": logging.INFO,
    "DEBUG": logging.DEBUG,
}


class StorageSettings(BaseSettings):
    """Ledger file configuration."""

    model_config = SettingsConfigDict(
        env_prefix="EXPENSE_TRACKER_STORAGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    file_path: str = Field(
        default="expense.json",
        min_length=1,
        description="Path to the JSON file holding the ledger"
    )
    indent: int = Field(
        default=1,
        ge=0,
        le=8,
        description="Indentation used when writing the ledger file"
    )
    encoding: str = Field(
        default="utf-8",
        description="Text encoding of the ledger file"
    )


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="EXPENSE_TRACKER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    log_level: Optional[str] = Field(
        default=None,
        description="Level for the audit log on stderr; unset keeps it silent"
    )
    log_json: bool = Field(
        default=False,
        description="Render log lines as JSON instead of console text"
    )

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: Optional[str]) -> Optional[str]:
        """Only accept the standard logging level names."""
        if v is None or not v.strip():
            return None
        level = v.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Unknown log level: {v}")
        return level

    @property
    def log_level_number(self) -> Optional[int]:
        """Numeric logging level, None when logging is off."""
        if self.log_level is None:
            return None
        return LOG_LEVELS[self.log_level]


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def storage(self) -> StorageSettings:
        return StorageSettings()

    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Uses LRU cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()
