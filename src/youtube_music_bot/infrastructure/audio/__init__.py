"""Audio infrastructure - queue engine, yt-dlp stream extraction, FFmpeg playback."""

from youtube_music_bot.infrastructure.audio.models import (
    AudioFormatInfo,
    CacheEntry,
    StreamInfo,
    YtDlpOpts,
)
from youtube_music_bot.infrastructure.audio.queue_engine import (
    EngineError,
    GuildQueue,
    VoiceQueueEngine,
)
from youtube_music_bot.infrastructure.audio.ytdlp_stream import (
    StreamExtractionError,
    YtDlpStreamExtractor,
)

__all__ = [
    "AudioFormatInfo",
    "CacheEntry",
    "EngineError",
    "GuildQueue",
    "StreamExtractionError",
    "StreamInfo",
    "VoiceQueueEngine",
    "YtDlpOpts",
    "YtDlpStreamExtractor",
]
