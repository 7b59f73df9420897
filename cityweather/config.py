# ABOUTME: Runtime settings for the web server, read from CITYWEATHER_* environment variables.
# ABOUTME: A local .env file is read as well, so overrides work without exporting variables.

import logging

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Server, HTTP client, and session settings."""

    model_config = SettingsConfigDict(env_prefix="CITYWEATHER_", env_file=".env", extra="ignore")

    host: str = "127.0.0.1"
    port: int = Field(default=8000, ge=1, le=65535)
    log_level: str = "INFO"
    http_timeout: float = Field(default=10.0, gt=0)
    max_sessions: int = Field(default=1000, ge=1)
    default_query: str = "Chennai"


def load_settings() -> Settings:
    """Read settings from the environment; invalid values raise pydantic.ValidationError."""
    return Settings()


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
