"""Infrastructure layer - external systems integration.

This layer contains implementations for:
- Discord (bot, cogs, interaction responder, presence)
- Audio (per-guild queue engine, yt-dlp stream extraction, FFmpeg)
- Search (YouTube Data API v3 track resolver)
"""

from youtube_music_bot.infrastructure.discord.bot import create_bot

__all__ = [
    "create_bot",
]
