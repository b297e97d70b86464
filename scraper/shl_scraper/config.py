"""
Typed settings for the SHL feed scraper.

Uses Pydantic Settings to load configuration from environment variables
with validation and type safety. Settings are loaded from the root .env
file when present.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .models.schemas import Season
from .validate_env import validate_env


class FeedConfig(BaseModel):
    request_timeout_seconds: int = 10
    user_agent: str = "shl-scraper/1.0"
    # Transport errors only; non-200 replies are never retried
    max_fetch_attempts: int = 3
    league_base_urls: dict[str, str] = Field(
        default_factory=lambda: {
            "SHL": "https://www.shl.se",
            "HA": "https://www.hockeyallsvenskan.se",
        }
    )
    events_path: str = "/api/gameday/play-by-play/{game_uuid}"
    player_stats_path: str = "/api/gameday/player-stats/{game_uuid}"
    game_stats_path: str = "/api/gameday/team-stats/{game_uuid}"
    # Default TTLs used by the CLI when --ttl is not given
    events_ttl_seconds: int = 10
    player_stats_ttl_seconds: int = 60
    game_stats_ttl_seconds: int = 30


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    For local development, loads from the root .env file. All settings are
    validated by Pydantic.
    """
    model_config = SettingsConfigDict(
        env_file=Path(__file__).resolve().parents[2] / ".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        extra="allow",
    )

    environment: str = Field("development", alias="ENVIRONMENT")
    log_level: str | None = Field(None, alias="LOG_LEVEL")
    store_backend: str = Field("file", alias="STORE_BACKEND")
    store_dir: str = Field("./feed_data", alias="STORE_DIR")
    redis_url: str = Field("redis://localhost:6379/3", alias="REDIS_URL")
    season: Season = Field(Season.SEASON_2022, alias="SEASON")
    feed_config: FeedConfig = Field(default_factory=FeedConfig)
    request_timeout_override: int | None = Field(None, alias="FEED_REQUEST_TIMEOUT")

    @model_validator(mode="after")
    def _apply_feed_overrides(self) -> Settings:
        """
        Allow FEED_REQUEST_TIMEOUT to override the nested feed config without
        requiring double-underscore syntax.
        """
        if self.request_timeout_override is not None:
            self.feed_config.request_timeout_seconds = self.request_timeout_override
        return self


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Return cached settings instance.

    Settings are cached to avoid re-parsing environment variables
    on every access.
    """
    validate_env()
    return Settings()


# Global settings instance - import this in other modules
settings = get_settings()
