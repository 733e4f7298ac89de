"""Value objects returned across the playback adapter boundary."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator

from youtube_music_bot.domain.music.entities import Track
from youtube_music_bot.domain.shared.constants import PlaybackConstants
from youtube_music_bot.domain.shared.enums import RepeatMode
from youtube_music_bot.domain.shared.messages import ErrorMessages
from youtube_music_bot.domain.shared.types import NonNegativeInt, VolumeLevel


class ResultData(BaseModel):
    """Optional payload attached to a successful CommandResult."""

    model_config = ConfigDict(frozen=True)

    track: Track | None = None
    volume: VolumeLevel | None = None
    added_to_queue: bool | None = None
    repeat_mode: RepeatMode | None = None


class CommandResult(BaseModel):
    """Uniform outcome of every adapter operation.

    A failure always carries a human-readable message; adapters translate
    exceptions into failures instead of raising.
    """

    model_config = ConfigDict(frozen=True)

    success: bool
    message: str = ""
    data: ResultData | None = None

    @model_validator(mode="after")
    def _failure_has_message(self) -> CommandResult:
        if not self.success and not self.message.strip():
            raise ValueError(ErrorMessages.FAILURE_REQUIRES_MESSAGE)
        return self

    @classmethod
    def ok(cls, message: str = "", **data: object) -> CommandResult:
        return cls(success=True, message=message, data=ResultData(**data) if data else None)

    @classmethod
    def fail(cls, message: str) -> CommandResult:
        return cls(success=False, message=message)

    @property
    def track(self) -> Track | None:
        return self.data.track if self.data else None

    @property
    def added_to_queue(self) -> bool:
        return bool(self.data and self.data.added_to_queue)


class NowPlaying(BaseModel):
    """Snapshot of the guild's current track; every field defaults to empty."""

    model_config = ConfigDict(frozen=True)

    track: Track | None = None
    is_playing: bool = False
    queue_length: NonNegativeInt = 0
    volume: VolumeLevel = PlaybackConstants.DEFAULT_VOLUME
    repeat_mode: RepeatMode = RepeatMode.NONE


class QueueView(BaseModel):
    """Read-only projection of the engine's live queue, rebuilt per request."""

    model_config = ConfigDict(frozen=True)

    current_track: Track | None = None
    upcoming: tuple[Track, ...] = Field(default_factory=tuple)
    length: NonNegativeInt = 0
