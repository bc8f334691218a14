"""Runtime settings, read from PROXIFOCUS_* environment variables or a .env file."""
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from proxifocus.store.endpoint_store import ENDPOINTS_KEY
from proxifocus.store.kv import SQLiteKeyValueStore


class Settings(BaseSettings):
    """Where the list lives and how chatty the logs are."""

    model_config = SettingsConfigDict(
        env_prefix="PROXIFOCUS_",
        env_file=".env",
        extra="ignore",
    )

    db_path: Path = Field(default_factory=SQLiteKeyValueStore.default_path)
    storage_key: str = ENDPOINTS_KEY
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"


def get_settings() -> Settings:
    return Settings()
