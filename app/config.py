"""Application configuration using Pydantic Settings."""
import logging
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Settings read from the environment (or a local .env file).

    Every field has a development default so the app and its unit tests start
    without any configuration.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # Storage
    mongodb_url: str = "mongodb://localhost:27017"
    mongodb_db_name: str = "timelog_service"

    # Access tokens
    jwt_secret: str = "change-me"
    jwt_algorithm: str = "HS256"
    jwt_expiration_minutes: int = 60 * 24 * 7

    # Server
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    reload: bool = False
    log_level: str = "INFO"
    cors_origins: str = "http://localhost:3000,http://localhost:8081"

    # Dashboard
    daily_goal_hours: float = Field(default=8.5, ge=0)
    summary_window_days: int = Field(default=30, gt=0)
    recent_logs_limit: int = Field(default=3, ge=0)
    timezone: str = "UTC"

    @field_validator("log_level")
    @classmethod
    def _known_log_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value}")
        return level

    @field_validator("timezone")
    @classmethod
    def _known_timezone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(f"Unknown timezone: {value}")
        return value

    @property
    def cors_origins_list(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


settings = Settings()
