"""Application Settings and Configuration

Pydantic-based settings management using environment variables.
Settings are loaded from environment variables with support for .env files,
type validation, and sensible defaults. Nested groups use ``__`` as the
delimiter, e.g. ``DISCORD__TOKEN`` or ``YOUTUBE__API_KEY``.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    SecretStr,
    field_validator,
    model_validator,
)
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..domain.shared.constants import PlaybackConstants, SearchConstants
from ..domain.shared.messages import ErrorMessages
from ..domain.shared.validators import validate_discord_snowflake


class DiscordSettings(BaseModel):
    """Discord bot configuration."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    token: SecretStr = Field(
        default=SecretStr(""), validation_alias=AliasChoices("token", "bot_token")
    )
    application_id: int | None = Field(
        default=None, validation_alias=AliasChoices("application_id", "client_id")
    )
    dev_guild_id: int | None = Field(
        default=None, validation_alias=AliasChoices("dev_guild_id", "guild_id")
    )

    @field_validator("application_id", "dev_guild_id", mode="before")
    @classmethod
    def validate_snowflake(cls, v: int | str | None) -> int | None:
        """Treat blank values as unset and validate the rest as snowflakes."""
        if v is None or (isinstance(v, str) and not v.strip()):
            return None
        return validate_discord_snowflake(int(v))


class YouTubeSettings(BaseModel):
    """YouTube Data API configuration."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    api_key: SecretStr = Field(
        default=SecretStr(""), validation_alias=AliasChoices("api_key", "key")
    )
    search_timeout: float = Field(default=SearchConstants.DEFAULT_TIMEOUT, gt=0.0, le=60.0)


class PlaybackSettings(BaseModel):
    """Playback engine configuration."""

    model_config = ConfigDict(frozen=True)

    play_timeout: float = Field(
        default=PlaybackConstants.DEFAULT_PLAY_TIMEOUT,
        ge=PlaybackConstants.MIN_PLAY_TIMEOUT,
        le=PlaybackConstants.MAX_PLAY_TIMEOUT,
    )
    engine_retry_delay: float = Field(default=PlaybackConstants.ENGINE_RETRY_DELAY, ge=0.0)
    engine_start_attempts: int = Field(default=PlaybackConstants.ENGINE_START_ATTEMPTS, ge=1, le=10)
    ffmpeg_path: str = "ffmpeg"
    ffmpeg_options: dict[str, str] = Field(
        default_factory=lambda: {
            "before_options": "-reconnect 1 -reconnect_streamed 1 -reconnect_delay_max 5",
            "options": "-vn",
        }
    )
    ytdlp_format: str = "bestaudio/best"


class Settings(BaseSettings):
    """Application settings container.

    Environment variable naming:
    - ENVIRONMENT, DEBUG, LOG_LEVEL (top-level)
    - DISCORD__TOKEN, DISCORD__APPLICATION_ID, DISCORD__DEV_GUILD_ID
    - YOUTUBE__API_KEY, YOUTUBE__SEARCH_TIMEOUT
    - PLAYBACK__PLAY_TIMEOUT, PLAYBACK__FFMPEG_PATH, ...

    The flat names DISCORD_BOT_TOKEN, DISCORD_CLIENT_ID, DISCORD_GUILD_ID and
    YOUTUBE_API_KEY are also read; the nested names win when both are set.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    environment: Literal["development", "production", "test"] = "development"
    debug: bool = False
    log_level: str = "INFO"

    discord: DiscordSettings = Field(default_factory=DiscordSettings)
    youtube: YouTubeSettings = Field(default_factory=YouTubeSettings)
    playback: PlaybackSettings = Field(default_factory=PlaybackSettings)

    discord_bot_token: SecretStr | None = Field(default=None, repr=False)
    discord_client_id: str | None = Field(default=None, repr=False)
    discord_guild_id: str | None = Field(default=None, repr=False)
    youtube_api_key: SecretStr | None = Field(default=None, repr=False)

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

    @model_validator(mode="after")
    def apply_flat_names(self) -> Settings:
        """Fill unset nested values from the flat variable names."""
        discord_updates: dict[str, object] = {}
        if self.discord_bot_token is not None and not self.discord.token.get_secret_value():
            discord_updates["token"] = self.discord_bot_token
        if self.discord_client_id and self.discord.application_id is None:
            discord_updates["application_id"] = self.discord_client_id
        if self.discord_guild_id and self.discord.dev_guild_id is None:
            discord_updates["dev_guild_id"] = self.discord_guild_id
        if discord_updates:
            self.discord = DiscordSettings.model_validate(
                {**self.discord.model_dump(), **discord_updates}
            )

        if self.youtube_api_key is not None and not self.youtube.api_key.get_secret_value():
            self.youtube = YouTubeSettings.model_validate(
                {**self.youtube.model_dump(), "api_key": self.youtube_api_key}
            )
        return self

    def missing_required(self) -> list[str]:
        """Names of required environment variables that are unset."""
        missing: list[str] = []
        if not self.discord.token.get_secret_value():
            missing.append("DISCORD__TOKEN")
        if self.discord.application_id is None:
            missing.append("DISCORD__APPLICATION_ID")
        if not self.youtube.api_key.get_secret_value():
            missing.append("YOUTUBE__API_KEY")
        return missing


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
