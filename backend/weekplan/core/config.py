"""
Application configuration using Pydantic Settings.

Scheduling defaults (day start, capacity, fallback durations) live here so that
services receive them explicitly instead of reading module constants.
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
    ENVIRONMENT: Literal["local", "test"] = "local"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"

    # ===========================================
    # Database
    # ===========================================
    DATABASE_URL: str = "sqlite+aiosqlite:///./weekplan.db"
    DATABASE_ECHO: bool = False

    # ===========================================
    # Server
    # ===========================================
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    ALLOWED_ORIGINS: List[str] = Field(
        default=["http://localhost:3000", "http://localhost:5173"]
    )

    # ===========================================
    # Scheduling
    # ===========================================
    # Running clock start for generated weeks (HH:MM)
    DAY_START: str = "10:00"
    # Soft daily budget used to balance allocation
    DAILY_CAPACITY_HOURS: float = Field(8.0, gt=0)
    # Fallback duration for tasks without an estimate
    DEFAULT_ALLOCATION_HOURS: float = Field(2.0, ge=0)
    DEFAULT_MOVE_HOURS: float = Field(1.0, ge=0)
    DEFAULT_MOVE_TIME: str = "10:00"

    @property
    def is_test(self) -> bool:
        """Check if running under the test environment."""
        return self.ENVIRONMENT == "test"


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Using lru_cache ensures settings are loaded only once.
    """
    return Settings()
