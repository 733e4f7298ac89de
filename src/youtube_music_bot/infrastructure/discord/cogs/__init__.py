"""Discord cogs - command handlers and event listeners."""

from youtube_music_bot.infrastructure.discord.cogs.event_cog import EventCog
from youtube_music_bot.infrastructure.discord.cogs.music_cog import MusicCog

__all__ = [
    "EventCog",
    "MusicCog",
]
