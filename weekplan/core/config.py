"""
Application configuration using Pydantic Settings.

Environment-based infrastructure switching is controlled by the ENVIRONMENT variable.
"""

from functools import lru_cache
from typing import List, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # ===========================================
    # Environment
    # ===========================================
    ENVIRONMENT: Literal["local"] = "local"
    DEBUG: bool = False
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # ===========================================
    # Database
    # ===========================================
    DATABASE_URL: str = "sqlite+aiosqlite:///./weekplan.db"

    # ===========================================
    # Auth
    # ===========================================
    # When disabled every request acts as the development user.
    AUTH_ENABLED: bool = False

    # ===========================================
    # Server
    # ===========================================
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    ALLOWED_ORIGINS: List[str] = Field(
        default=["http://localhost:3000", "http://localhost:5173"]
    )

    # ===========================================
    # Planner
    # ===========================================
    PLANNING_HORIZON_DAYS: int = Field(7, ge=1, le=7)

    # Calendar events flagged as free are still treated as busy unless enabled.
    RESPECT_EVENT_BUSY_FLAG: bool = False

    # What to do with habits whose recurrence rule cannot be expanded:
    # "daily" places them every day (with a warning), "skip" leaves them out.
    UNSUPPORTED_RECURRENCE_POLICY: Literal["daily", "skip"] = "daily"

    # Try free slots matching the task's preferred window first (same day only).
    PREFER_WINDOW_SLOTS: bool = False

    DEFAULT_TIMEZONE: str = "UTC"

    @property
    def is_local(self) -> bool:
        """Check if running in local environment."""
        return self.ENVIRONMENT == "local"


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Using lru_cache ensures settings are loaded only once.
    """
    return Settings()
