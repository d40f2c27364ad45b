"""
Runtime configuration helpers for the feed viewer.

Loads TREEHOLE_* variables from the process environment and from the .env file
located in the project root.
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

# Load .env defaults without overriding environment variables provided by the platform
load_dotenv(dotenv_path=ENV_PATH, override=False)


class Settings(BaseSettings):
    api_base_url: str = Field(default="http://localhost:3000/api", alias="TREEHOLE_API_BASE_URL")
    app_name: str = Field(default="Treehole", alias="TREEHOLE_APP_NAME")
    app_version: str = Field(default="0.1.0", alias="TREEHOLE_APP_VERSION")

    # Local-only like counters; kept in memory when unset
    likes_path: Path | None = Field(default=None, alias="TREEHOLE_LIKES_PATH")

    log_level: str = Field(default="INFO", alias="TREEHOLE_LOG_LEVEL")
    server_port: int = Field(default=8080, alias="TREEHOLE_SERVER_PORT")

    model_config = SettingsConfigDict(
        env_file=str(ENV_PATH),
        env_file_encoding="utf-8",
        extra="ignore"
    )


@lru_cache()
def get_settings() -> Settings:
    return Settings()


__all__ = ["Settings", "get_settings"]
