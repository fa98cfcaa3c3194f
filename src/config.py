"""
Bookstore settings

Environment-backed configuration (prefix BOOKSTORE_, optional .env file).
"""

import logging
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Record source read by Catalog.instance()
    catalog_path: Path = Path("database.txt")

    # Emit a trace event after every single-book move
    output_trace: bool = False

    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="BOOKSTORE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Accept any case ('debug', 'Info'); reject names logging does not know."""
        level = v.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level {v!r}")
        return level


settings = Settings()
