"""Configuration management for the report server."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


ROOT = Path(__file__).resolve().parents[1]


class DatabaseSettings(BaseSettings):
    url: str = Field(default=f"sqlite:///{ROOT / 'data' / 'tasks.db'}")
    echo: bool = False


class APISettings(BaseSettings):
    host: str = "127.0.0.1"
    port: int = 8000
    cors_origins: List[str] = Field(default_factory=list)


class Settings(BaseSettings):
    """Top-level configuration values for the server."""

    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    api: APISettings = Field(default_factory=APISettings)

    api_token: Optional[str] = Field(default=None, validation_alias="REPORT_API_TOKEN")
    log_level: str = "INFO"
    export_prefix: str = "/api/v1/tasks"

    @field_validator("api_token")
    @classmethod
    def normalize_api_token(cls, token: Optional[str]) -> Optional[str]:
        if token is None:
            return None
        token = token.strip()
        return token or None

    @field_validator("export_prefix")
    @classmethod
    def validate_export_prefix(cls, prefix: str) -> str:
        if not prefix.startswith("/"):
            raise ValueError("export_prefix must start with '/'")
        return prefix.rstrip("/")

    model_config = {
        "env_file": ROOT / ".env",
        "env_nested_delimiter": "__",
        "case_sensitive": False,
        "extra": "ignore",
    }


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
