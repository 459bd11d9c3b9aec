"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - load_settings() builds one frozen Settings; the bootstrap calls it once
      and passes the value into every component explicitly
    - PORT outside 0–65535 fails at startup, never at first request

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - No cached module-level accessor: components never reach into ambient config
    - Defaults provided for all settings: works out-of-the-box against a local mongod
"""

from typing import Any, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", case_sensitive=False, frozen=True, extra="ignore",
    )

    # HTTP
    host: str = "0.0.0.0"
    port: int = Field(3000, ge=0, le=65535)
    shutdown_grace_seconds: int = Field(10, ge=0)
    cors_origins: list[str] = ["*"]

    # Document store
    mongodb_uri: str = "mongodb://localhost:27017/perspective"
    mongodb_dbname: str = Field("perspective", min_length=1)
    mongodb_collection: str = Field("users", min_length=1)
    mongodb_timeout_ms: int = Field(5000, ge=1)

    # Observability
    log_level: str = "INFO"
    log_format: Literal["json", "text"] = "json"

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.upper()


def load_settings(**overrides: Any) -> Settings:
    """Build settings from the environment; keyword overrides win."""
    return Settings(**overrides)
