"""Lightweight configuration for the warband builder."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Minimal application settings."""

    model_config = SettingsConfigDict(
        env_prefix="WARBANDS_", env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    data_dir: Path = Field(
        default=Path("warbands_data"), description="Where warband snapshots live"
    )
    catalog_dir: Path | None = Field(
        default=None,
        description="Directory holding the game catalog JSON files; defaults to the bundled data",
    )
    rules_version: str = Field(default="1.0", description="Ruleset version used by the domain")
    log_level: str = Field(default="INFO", description="Root logging level for the server")
    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:5173", "http://127.0.0.1:5173"],
        description="Origins allowed to call the HTTP API",
    )


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings instance."""

    settings = Settings()
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    return settings
