"""Port interface for the per-guild queue/playback engine.

The engine owns voice connections, audio streaming, and the ordered list of
tracks for every guild. Its methods may raise arbitrary exceptions and a guild
without a queue is reported as ``None``; the playback adapter normalizes both.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable, Sequence
from typing import TYPE_CHECKING, Protocol

from youtube_music_bot.domain.shared.types import DiscordSnowflake

if TYPE_CHECKING:
    from ...domain.music.entities import Track
    from ...domain.shared.enums import EngineEvent, RepeatMode

EngineListener = Callable[..., Awaitable[None] | None]


class GuildQueueState(Protocol):
    """Live queue object exposed by the engine; ``songs[0]`` is now playing."""

    @property
    def songs(self) -> Sequence[Track]: ...

    @property
    def previous_songs(self) -> Sequence[Track]: ...

    @property
    def paused(self) -> bool: ...

    @property
    def stopped(self) -> bool: ...

    @property
    def volume(self) -> int: ...

    @property
    def repeat_mode(self) -> RepeatMode: ...


class PlaybackEngine(ABC):
    """Interface for the stateful audio queue engine."""

    @abstractmethod
    def get_queue(self, guild_id: DiscordSnowflake) -> GuildQueueState | None:
        """Return the live queue for a guild, or None when there is none."""
        ...

    @abstractmethod
    async def play(
        self,
        guild_id: DiscordSnowflake,
        channel_id: DiscordSnowflake,
        track: Track,
        *,
        volume: int,
        repeat_mode: RepeatMode,
    ) -> None:
        """Append to the guild's queue, or create it and start playing."""
        ...

    @abstractmethod
    async def pause(self, guild_id: DiscordSnowflake) -> None: ...

    @abstractmethod
    async def resume(self, guild_id: DiscordSnowflake) -> None: ...

    @abstractmethod
    async def stop(self, guild_id: DiscordSnowflake) -> None:
        """Stop playback and delete the guild's queue."""
        ...

    @abstractmethod
    async def skip(self, guild_id: DiscordSnowflake) -> Track:
        """Skip to the next track, returning the track that is now playing."""
        ...

    @abstractmethod
    async def previous(self, guild_id: DiscordSnowflake) -> Track:
        """Go back to the previously played track and return it."""
        ...

    @abstractmethod
    async def set_volume(self, guild_id: DiscordSnowflake, volume: int) -> None: ...

    @abstractmethod
    async def set_repeat_mode(self, guild_id: DiscordSnowflake, mode: RepeatMode) -> None: ...

    @abstractmethod
    def is_connected(self, guild_id: DiscordSnowflake) -> bool: ...

    @abstractmethod
    async def join(self, guild_id: DiscordSnowflake, channel_id: DiscordSnowflake) -> None: ...

    @abstractmethod
    async def leave(self, guild_id: DiscordSnowflake) -> None: ...

    @abstractmethod
    def on(self, event: EngineEvent, listener: EngineListener) -> None:
        """Register an instrumentation listener; its outcome never affects playback."""
        ...


EngineFactory = Callable[[], PlaybackEngine]
"""Builds a fresh engine; may raise when a prerequisite (e.g. FFmpeg) is missing."""

__all__ = [
    "EngineFactory",
    "EngineListener",
    "GuildQueueState",
    "PlaybackEngine",
]

