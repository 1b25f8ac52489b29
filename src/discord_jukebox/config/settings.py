"""Application Settings and Configuration

Pydantic-based settings management using environment variables.
Settings are loaded from environment variables with support for .env files,
type validation, and sensible defaults. All settings are frozen and immutable
after initialization.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import AliasChoices, BaseModel, Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..domain.playback.retry import RetryPolicy
from ..domain.shared.messages import ErrorMessages


class DiscordSettings(BaseModel):
    """Discord bot configuration."""

    model_config = SettingsConfigDict(frozen=True, strict=True, populate_by_name=True)

    token: SecretStr = Field(
        default=SecretStr(""), validation_alias=AliasChoices("token", "bot_token", "discord_token")
    )
    command_prefix: str = Field(
        default="!",
        min_length=1,
        max_length=5,
        validation_alias=AliasChoices("command_prefix", "prefix"),
    )
    guild_ids: tuple[int, ...] = Field(
        default_factory=tuple, validation_alias=AliasChoices("guild_ids", "guilds")
    )
    test_guild_ids: tuple[int, ...] = Field(
        default_factory=tuple, validation_alias=AliasChoices("test_guild_ids", "test_guilds")
    )
    sync_on_startup: bool = False

    @field_validator("guild_ids", "test_guild_ids", mode="before")
    @classmethod
    def validate_snowflake_ids(cls, v: tuple[int, ...] | list[int]) -> tuple[int, ...]:
        """Validate Discord snowflake IDs and convert lists to tuples."""
        if isinstance(v, list):
            v = tuple(v)
        for snowflake in v:
            if not 0 < snowflake < 2**64:
                raise ValueError(ErrorMessages.INVALID_SNOWFLAKE.format(value=snowflake))
        return v


class AudioSettings(BaseModel):
    """Audio streaming configuration (FFmpeg and yt-dlp)."""

    model_config = SettingsConfigDict(frozen=True, strict=True, populate_by_name=True)

    ffmpeg_options: dict[str, str] = Field(
        default_factory=lambda: {
            "before_options": "-reconnect 1 -reconnect_streamed 1 -reconnect_delay_max 5",
            "options": "-vn",
        }
    )
    ytdlp_format: str = "bestaudio/best"
    pot_server_url: str = Field(
        default="",
        validation_alias=AliasChoices("pot_server_url", "bgutil_pot_server_url"),
    )


class PlaybackSettings(BaseModel):
    """Retry, skip and voice timing for the playback session."""

    model_config = SettingsConfigDict(frozen=True, strict=True)

    track_max_retries: int = Field(default=2, ge=0, le=10)
    playlist_max_retries: int = Field(default=2, ge=0, le=10)
    retry_base_delay_seconds: float = Field(default=2.0, ge=0.0, le=60.0)
    skip_delay_seconds: float = Field(default=1.0, ge=0.0, le=60.0)
    connect_timeout_seconds: float = Field(default=10.0, gt=0.0, le=120.0)

    @property
    def track_retry_policy(self) -> RetryPolicy:
        return RetryPolicy(
            max_retries=self.track_max_retries, base_delay=self.retry_base_delay_seconds
        )

    @property
    def playlist_retry_policy(self) -> RetryPolicy:
        return RetryPolicy(
            max_retries=self.playlist_max_retries, base_delay=self.retry_base_delay_seconds
        )


class Settings(BaseSettings):
    """Application settings container.

    Automatically loads configuration from environment variables.

    Environment variable naming:
    - ENVIRONMENT, DEBUG, LOG_LEVEL (top-level)
    - DISCORD__TOKEN, DISCORD__GUILD_IDS, etc. (nested with ``__``)
    - AUDIO__YTDLP_FORMAT, PLAYBACK__TRACK_MAX_RETRIES, etc.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
        strict=True,
    )

    environment: Literal["development", "production", "test"] = "development"
    debug: bool = False
    log_level: str = "INFO"

    discord: DiscordSettings = Field(default_factory=DiscordSettings)
    audio: AudioSettings = Field(default_factory=AudioSettings)
    playback: PlaybackSettings = Field(default_factory=PlaybackSettings)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(
                ErrorMessages.INVALID_LOG_LEVEL.format(level=v, valid_levels=valid_levels)
            )
        return v_upper


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached application settings.

    Settings are automatically loaded from:
    1. .env file (if present)
    2. Environment variables
    3. Default values
    """
    return Settings()


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for testing)."""
    get_settings.cache_clear()
