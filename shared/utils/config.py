"""
Configuration management using pydantic-settings.
Loads configuration from environment variables and .env file.
"""

from functools import lru_cache
from typing import Literal, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Application Configuration
    APP_NAME: str = "fluentrules"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    LOG_FILE: Optional[str] = None  # Optional: also write logs to this file

    # Validation Configuration
    VALIDATION_CULTURE: Optional[str] = None  # e.g. "tr" to force Turkish messages
    VALIDATION_CASCADE_MODE: Literal["stop", "continue"] = "stop"
    VALIDATION_CATALOG_PATH: Optional[str] = None  # YAML message catalog

    @property
    def log_to_file(self) -> bool:
        """Whether a file handler should be attached to loggers."""
        return bool(self.LOG_FILE)


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    Uses lru_cache to ensure settings are loaded only once.
    """
    return Settings()


# Global settings instance
settings = get_settings()
