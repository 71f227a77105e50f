# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Application configuration via environment variables and .env files."""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from marquee.core.constants import (
    CLEANUP_INTERVAL_SECONDS,
    DEFAULT_MAX_SIZE,
    DEFAULT_TTL_SECONDS,
    STATS_INTERVAL_SECONDS,
)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="MARQUEE_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
    )

    # Cache
    cache_max_size: int = DEFAULT_MAX_SIZE
    cache_default_ttl: float = DEFAULT_TTL_SECONDS
    cache_cleanup_interval: float = CLEANUP_INTERVAL_SECONDS
    cache_stats_interval: float = STATS_INTERVAL_SECONDS
    cache_log_stats: bool = False

    # Logging
    log_level: str = "INFO"
    log_format: str = "json"

    @field_validator("log_format", mode="before")
    @classmethod
    def _parse_log_format(cls, v: object) -> str:
        if isinstance(v, str):
            return v.strip().lower() or "json"
        return "json"


def get_settings() -> Settings:
    return Settings()
