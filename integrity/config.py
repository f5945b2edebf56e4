"""
Runtime configuration helpers for the moderation backend.

Loads DATABASE_URL and the remaining settings from the .env file located in
the project root without overriding variables supplied by the platform.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Resolve the project root
BASE_DIR = Path(__file__).resolve().parents[1]

# Absolute path to .env
ENV_PATH = BASE_DIR / ".env"

load_dotenv(dotenv_path=ENV_PATH, override=False)


class Settings(BaseSettings):
    # Required: must come from the environment or .env
    database_url: str = Field(..., alias="DATABASE_URL")

    app_name: str = Field(default="Integrity Backend", alias="APP_NAME")
    api_version: str = Field(default="0.1.0", alias="API_VERSION")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    cors_origins: str | None = Field(default=None, alias="CORS_ORIGINS")

    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    jwt_expires_minutes: int = Field(default=1440, alias="JWT_EXPIRES_MINUTES")

    auto_migrate: bool = Field(default=False, alias="AUTO_MIGRATE")
    disable_auto_migrations: bool = Field(default=False, alias="DISABLE_AUTO_MIGRATIONS")

    model_config = SettingsConfigDict(
        env_file=str(ENV_PATH),
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def cors_origin_list(self) -> list[str]:
        if not self.cors_origins:
            return ["*"]
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


@lru_cache()
def get_settings() -> Settings:
    return Settings()


__all__ = ["Settings", "get_settings"]
