"""Typed settings loader for the FASAM dashboard."""

from __future__ import annotations

import logging
from typing import Any

from pydantic import Field, ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigError

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """Application settings loaded from environment variables and `.env`."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    title: str = Field(default="FASAM", alias="FASAM_TITLE")
    tick_rate_ms: int = Field(default=500, alias="FASAM_TICK_RATE_MS")
    fallback_wait_ms: int = Field(default=250, alias="FASAM_FALLBACK_WAIT_MS")
    seed_max_alarms: int = Field(default=5, alias="FASAM_SEED_MAX_ALARMS")
    log_max_entries: int | None = Field(default=None, alias="FASAM_LOG_MAX_ENTRIES")
    log_level: str = Field(default="INFO", alias="FASAM_LOG_LEVEL")

    @field_validator("log_max_entries", mode="before")
    @classmethod
    def empty_string_to_none(cls, value: Any) -> Any:
        """Treat an empty env-string as an unbounded log store."""
        if isinstance(value, str) and value.strip() == "":
            return None
        return value

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().upper()
        return value

    @model_validator(mode="after")
    def validate_limits(self) -> Settings:
        """Reject values the runtime cannot operate with."""
        if not self.title.strip():
            raise ValueError("FASAM_TITLE must not be empty.")
        if self.tick_rate_ms <= 0:
            raise ValueError("FASAM_TICK_RATE_MS must be > 0.")
        if self.fallback_wait_ms <= 0:
            raise ValueError("FASAM_FALLBACK_WAIT_MS must be > 0.")
        if self.seed_max_alarms < 0:
            raise ValueError("FASAM_SEED_MAX_ALARMS must be >= 0.")
        if self.log_max_entries is not None and self.log_max_entries <= 0:
            raise ValueError("FASAM_LOG_MAX_ENTRIES must be > 0 when set.")
        if self.log_level not in _LOG_LEVELS:
            raise ValueError(
                f"FASAM_LOG_LEVEL must be one of {', '.join(_LOG_LEVELS)}."
            )
        return self

    @property
    def tick_rate_seconds(self) -> float:
        return self.tick_rate_ms / 1000.0

    @property
    def fallback_wait_seconds(self) -> float:
        return self.fallback_wait_ms / 1000.0

    @property
    def log_level_no(self) -> int:
        return logging.getLevelName(self.log_level)

    def safe_summary(self) -> dict[str, Any]:
        """Return the effective configuration for start-up logging."""
        return {
            "title": self.title,
            "tick_rate_ms": self.tick_rate_ms,
            "fallback_wait_ms": self.fallback_wait_ms,
            "seed_max_alarms": self.seed_max_alarms,
            "log_max_entries": self.log_max_entries,
            "log_level": self.log_level,
        }


def load_settings() -> Settings:
    """Load and validate settings, raising ConfigError on failure."""
    try:
        return Settings()
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"Failed reading environment/.env: {exc}") from exc
