from functools import lru_cache
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment-driven configuration for the user management service."""

    app_name: str = "User Management API"
    app_version: str = "1.0"
    database_url: str = Field(default="sqlite:///./app.db")
    log_level: str = Field(default="INFO")
    cors_allow_origins: List[str] = Field(default=["*"])
    host: str = "127.0.0.1"
    port: int = 8000

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )


@lru_cache()
def get_settings() -> Settings:
    """Return a cached Settings instance to avoid re-parsing env."""
    return Settings()


settings = get_settings()
