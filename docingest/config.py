"""
Configuration management for docingest.

Uses Pydantic Settings for type-safe configuration loading from environment
variables (prefixed with ``DOCINGEST_``). The extraction core itself needs
no configuration; these settings drive logging and the caller-side upload
policy.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings are validated at startup.
    """

    model_config = SettingsConfigDict(
        env_prefix="DOCINGEST_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ==========================================================================
    # Logging
    # ==========================================================================
    log_level: LogLevel = Field(
        default="WARNING",
        description="Log level used by the command-line interface",
    )

    # ==========================================================================
    # Upload Policy
    # ==========================================================================
    max_upload_bytes: int = Field(
        default=10 * 1024 * 1024,
        gt=0,
        description="Largest accepted upload, checked before extraction",
    )

    min_text_characters: int = Field(
        default=50,
        ge=0,
        description="Uploads yielding less text than this are rejected as unreadable",
    )

    max_text_characters: int = Field(
        default=20000,
        gt=0,
        description="Accepted upload text is truncated to this many characters",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: object) -> object:
        """Accept log levels in any case."""
        return v.upper() if isinstance(v, str) else v

    @model_validator(mode="after")
    def validate_text_bounds(self) -> "Settings":
        """Ensure the minimum text length does not exceed the maximum."""
        if self.min_text_characters > self.max_text_characters:
            raise ValueError("min_text_characters must not exceed max_text_characters")
        return self


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses LRU cache to ensure settings are only loaded once.
    """
    return Settings()
