"""Application settings using Pydantic Settings."""

from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Generator configuration, read from MODELGEN_* environment variables."""

    model_config = SettingsConfigDict(env_prefix="MODELGEN_", extra="ignore")

    # Generation
    output_dir: Optional[Path] = None
    db: Literal["sqlite3", "postgres"] = "sqlite3"
    metrics: bool = False

    # Logging
    log_level: str = "WARNING"
    log_file: Optional[Path] = None


@lru_cache
def get_settings() -> Settings:
    """Get the cached settings instance."""
    return Settings()
