"""
Application Interfaces (Ports)

Abstract interfaces that define contracts between the application
layer and infrastructure adapters. These are the "ports" in
hexagonal architecture.
"""

from youtube_music_bot.application.interfaces.interaction import (
    BotStatus,
    InteractionRequest,
    InteractionResponder,
)
from youtube_music_bot.application.interfaces.playback_engine import (
    EngineFactory,
    GuildQueueState,
    PlaybackEngine,
)
from youtube_music_bot.application.interfaces.track_resolver import TrackResolver

__all__ = [
    "BotStatus",
    "EngineFactory",
    "GuildQueueState",
    "InteractionRequest",
    "InteractionResponder",
    "PlaybackEngine",
    "TrackResolver",
]
