"""Application configuration.

Configuration is loaded from environment variables. For local development, you can provide a
`.env` file and set `CHATREFS_ENV_FILE` to point to it.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


OutputFormat = Literal["table", "text", "json"]


class Settings(BaseSettings):
    """chatrefs settings.

    All fields are environment-configurable. Prefix is `CHATREFS_`.
    """

    model_config = SettingsConfigDict(
        env_prefix="CHATREFS_",
        env_file=None,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Core
    log_level: str = Field(default="WARNING")

    # CLI input bound; the extraction engine itself never truncates or rejects text
    max_text_chars: int = Field(default=200_000, ge=1, le=10_000_000)

    # Output
    output_format: OutputFormat = Field(default="table")


def load_settings() -> Settings:
    """Load settings from env.

    Returns:
        Settings: Parsed settings.
    """

    env_file_override = os.getenv("CHATREFS_ENV_FILE")
    if env_file_override:
        env_path = Path(env_file_override)
        return Settings(_env_file=env_path)

    default_env = Path.cwd() / ".env"
    if default_env.exists():
        return Settings(_env_file=default_env)

    return Settings()
