"""Command and handler for playing a track from a query or URL."""

from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, field_validator

from youtube_music_bot.domain.music.entities import Track
from youtube_music_bot.domain.shared.types import DiscordSnowflake, NonEmptyStr
from youtube_music_bot.domain.shared.validators import sanitize_query

if TYPE_CHECKING:
    from ..interfaces.track_resolver import TrackResolver
    from ..services.engine_adapter import PlaybackEngineAdapter

logger = logging.getLogger(__name__)


class PlayTrackStatus(Enum):
    """Status codes for play track results."""

    NOW_PLAYING = "now_playing"
    QUEUED = "queued"
    TRACK_NOT_FOUND = "track_not_found"
    PLAYBACK_ERROR = "playback_error"


class PlayTrackCommand(BaseModel):
    """Request to resolve a query/URL and hand the track to the engine."""

    model_config = ConfigDict(frozen=True)

    guild_id: DiscordSnowflake
    channel_id: DiscordSnowflake
    query: NonEmptyStr

    @field_validator("query", mode="before")
    @classmethod
    def _sanitize_query(cls, v: object) -> object:
        if isinstance(v, str):
            return sanitize_query(v)
        return v


class PlayTrackResult(BaseModel):
    """Result of a play track command."""

    model_config = ConfigDict(frozen=True)

    status: PlayTrackStatus
    message: str
    track: Track | None = None

    @property
    def is_success(self) -> bool:
        return self.status in {PlayTrackStatus.NOW_PLAYING, PlayTrackStatus.QUEUED}

    @classmethod
    def not_found(cls, query: str) -> PlayTrackResult:
        return cls(status=PlayTrackStatus.TRACK_NOT_FOUND, message=query)


class PlayTrackHandler:
    """Resolves a query to a track, then asks the adapter to play or queue it.

    The adapter is only reached when the resolver produced a track.
    """

    def __init__(self, *, resolver: TrackResolver, adapter: PlaybackEngineAdapter) -> None:
        self._resolver = resolver
        self._adapter = adapter

    async def handle(self, command: PlayTrackCommand) -> PlayTrackResult:
        track = await self._resolver.resolve(command.query)
        if track is None:
            return PlayTrackResult.not_found(command.query)

        result = await self._adapter.play(command.guild_id, command.channel_id, track)
        if not result.success:
            return PlayTrackResult(status=PlayTrackStatus.PLAYBACK_ERROR, message=result.message)

        status = PlayTrackStatus.QUEUED if result.added_to_queue else PlayTrackStatus.NOW_PLAYING
        return PlayTrackResult(status=status, message=result.message, track=track)
