"""Search infrastructure - YouTube Data API track resolver."""

from youtube_music_bot.infrastructure.search.youtube_resolver import (
    YouTubeDataResolver,
    generate_track_id,
)

__all__ = [
    "YouTubeDataResolver",
    "generate_track_id",
]
