from __future__ import annotations

from pathlib import Path

from pydantic import Field, field_validator
from pydantic.aliases import AliasChoices
from pydantic_settings import BaseSettings, SettingsConfigDict


BACKEND_DIR = Path(__file__).resolve().parents[1]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=BACKEND_DIR / ".env", env_file_encoding="utf-8")

    database_url: str = Field(validation_alias=AliasChoices("database_url", "DATABASE_URL"))

    # Runtime
    environment: str = Field(default="development", validation_alias=AliasChoices("environment", "ENVIRONMENT"))
    frontend_origin: str = Field(
        default="http://localhost:5173",
        validation_alias=AliasChoices("frontend_origin", "FRONTEND_ORIGIN"),
    )

    # Create tables and insert the default roster/grade sections on startup.
    bootstrap_on_startup: bool = Field(
        default=True,
        validation_alias=AliasChoices("bootstrap_on_startup", "BOOTSTRAP_ON_STARTUP"),
    )

    # Logging
    log_level: str | None = Field(default=None, validation_alias=AliasChoices("log_level", "LOG_LEVEL"))
    log_dir: Path | None = Field(default=None, validation_alias=AliasChoices("log_dir", "LOG_DIR"))

    @field_validator("frontend_origin")
    @classmethod
    def _normalize_frontend_origin(cls, v: str) -> str:
        # Starlette CORS expects the Origin to match exactly (no trailing slash).
        return v.strip().rstrip("/")

    @field_validator("environment")
    @classmethod
    def _normalize_environment(cls, v: str) -> str:
        return (v or "development").strip().lower()

    @field_validator("log_level", "log_dir", mode="before")
    @classmethod
    def _blank_is_unset(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    def log_directory(self) -> Path | None:
        """Where the rotating log file goes: LOG_DIR, or backend/logs in production."""
        if self.log_dir is not None:
            return self.log_dir
        if self.environment == "production":
            return BACKEND_DIR / "logs"
        return None


settings = Settings()
