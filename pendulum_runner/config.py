"""Application settings loaded from environment variables."""

import os
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _env_file() -> str | None:
    if os.getenv("PYTEST_CURRENT_TEST"):
        return None
    return ".env"


class Settings(BaseSettings):
    """Pendulum configuration. All values come from environment variables."""

    # Database
    database_path: Path = Field(default=Path("data/pendulum_runner.db"))

    # Turso (hosted libSQL); when set, overrides database_path
    turso_database_url: str = Field(default="")
    turso_auth_token: str = Field(default="")

    # Scheduler
    scheduler_timezone: str = Field(default="UTC")
    sweep_interval_seconds: int = Field(default=60, gt=0)

    # Outbound calls
    http_timeout_seconds: float = Field(default=30.0, gt=0)

    # Logging
    log_level: str = Field(default="INFO")

    model_config = SettingsConfigDict(env_file=_env_file(), env_file_encoding="utf-8")

    @field_validator("log_level")
    @classmethod
    def check_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in _LOG_LEVELS:
            msg = f"LOG_LEVEL must be one of {', '.join(_LOG_LEVELS)}, got {value!r}"
            raise ValueError(msg)
        return level

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        if os.getenv("PYTEST_CURRENT_TEST"):
            return (init_settings,)
        return (init_settings, env_settings, dotenv_settings, file_secret_settings)


settings = Settings()
