"""
Music Bounded Context

Tracks, per-guild sessions, and the results exchanged with the playback adapter.
"""

from youtube_music_bot.domain.music.entities import Session, Track
from youtube_music_bot.domain.music.value_objects import (
    CommandResult,
    NowPlaying,
    QueueView,
    ResultData,
)

__all__ = [
    # Entities
    "Track",
    "Session",
    # Value Objects
    "CommandResult",
    "ResultData",
    "NowPlaying",
    "QueueView",
]
