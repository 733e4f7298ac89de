"""Core domain entities for the music bounded context."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from youtube_music_bot.domain.shared.constants import PlaybackConstants
from youtube_music_bot.domain.shared.enums import RepeatMode
from youtube_music_bot.domain.shared.types import (
    DiscordSnowflake,
    HttpUrlStr,
    NonEmptyStr,
    VolumeLevel,
)

UNKNOWN_UPLOADER = "Unknown"


class Track(BaseModel):
    """Immutable descriptor of a playable track, produced by the resolver."""

    model_config = ConfigDict(frozen=True)

    id: NonEmptyStr
    title: NonEmptyStr
    uploader_name: NonEmptyStr = UNKNOWN_UPLOADER
    source_url: HttpUrlStr


class Session(BaseModel):
    """Per-guild playback preferences.

    Created lazily with defaults on the first command for a guild and kept for
    the lifetime of the process. Only the volume and repeat commands mutate it.
    """

    model_config = ConfigDict(validate_assignment=True)

    guild_id: DiscordSnowflake
    volume: VolumeLevel = PlaybackConstants.DEFAULT_VOLUME
    repeat_mode: RepeatMode = RepeatMode.NONE
