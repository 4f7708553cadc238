"""Application settings and configuration management."""
from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from environment variables or defaults."""

    DB_PATH: str = Field(default="data/interviews.db")
    CATALOG_DIR: str = Field(default="data/catalog")
    APP_CONFIG_PATH: str = Field(default="app_config.json")

    MAX_SKIPS_PER_TOPIC: int = Field(default=3, ge=1)
    ASSESSMENT_WINDOW: int = Field(default=3, ge=2)
    DEFAULT_DIFFICULTY_LEVEL: int = Field(default=2, ge=1, le=4)

    INTERVIEW_DAILY_QUESTION_LIMIT: int = Field(default=50, ge=0)
    INTERVIEW_HISTORY_LIMIT: int = Field(default=50, ge=1)

    model_config = SettingsConfigDict(env_file=".env", extra="ignore", validate_assignment=True)


settings = Settings()
