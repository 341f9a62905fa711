"""Application configuration loaded via Pydantic settings."""

from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Typed configuration sourced from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Absence is reported lazily as ApiKeyError on the first AI request.
    OPENAI_API_KEY: str | None = Field(default=None)

    SCRIPTURE_API_BASE_URL: str = Field(default="https://bible-api.com/")
    SCRIPTURE_API_TIMEOUT_SECONDS: float = Field(default=15.0)
    PRIMARY_TRANSLATION: str = Field(default="kjv")
    SECONDARY_TRANSLATION: str = Field(default="web")
    SECONDARY_CORPUS_PATH: Path | None = Field(default=None)

    AI_COOLDOWN_SECONDS: float = Field(default=60.0)
    AI_ANALYSIS_MODEL: str = Field(default="gpt-4o-mini")
    AI_FAST_MODEL: str = Field(default="gpt-4o-mini")
    AI_STANDARD_MODEL: str = Field(default="gpt-4o")
    AI_DEEP_MODEL: str = Field(default="o3")

    SCRIPTURE_LOG_LEVEL: str = Field(default="info")
    SCRIPTURE_LOG_DIR: Path | None = Field(default=None)
    DATA_DIR: Path = Field(default=Path("/data"))


settings = Settings()
config = settings


__all__ = ["Settings", "settings", "config"]
