"""Pydantic models for yt-dlp stream extraction and configuration.

Only the fields needed to start an FFmpeg stream are kept; everything else
yt-dlp returns is dropped on validation.
"""

from __future__ import annotations

from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field, field_validator

from youtube_music_bot.domain.shared.types import NonEmptyStr

CACHE_TTL: Final[int] = 1800
CACHE_MAX_SIZE: Final[int] = 200
DEFAULT_RETRIES: Final[int] = 3
DEFAULT_SOCKET_TIMEOUT: Final[int] = 10
LOG_URL_TRUNCATE: Final[int] = 60


class AudioFormatInfo(BaseModel):
    """A single format entry from yt-dlp extraction."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    url: NonEmptyStr | None = None
    acodec: NonEmptyStr | None = None
    abr: float | None = None


class StreamInfo(BaseModel):
    """Trimmed yt-dlp result: the direct media URL and its HTTP headers."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    url: NonEmptyStr | None = None
    title: str | None = None
    http_headers: dict[str, str] = Field(default_factory=dict)
    formats: list[AudioFormatInfo] = Field(default_factory=list)

    @field_validator("url", "title", mode="before")
    @classmethod
    def _coerce_empty_to_none(cls, v: Any) -> str | None:
        if not isinstance(v, str) or not v.strip():
            return None
        return v

    @field_validator("http_headers", mode="before")
    @classmethod
    def _coerce_headers(cls, v: Any) -> dict[str, str]:
        if not isinstance(v, dict):
            return {}
        return {str(k): str(val) for k, val in v.items() if val is not None}

    def best_stream_url(self) -> str | None:
        """Direct URL if present, otherwise the highest-bitrate audio-bearing format."""
        if self.url:
            return self.url
        audio = [f for f in self.formats if f.url and f.acodec != "none"]
        if not audio:
            return None
        return max(audio, key=lambda f: f.abr or 0.0).url


class CacheEntry(BaseModel):
    """Cached stream extraction with the monotonic time it was stored."""

    model_config = ConfigDict(frozen=True)

    info: StreamInfo
    cached_at: float


class YtDlpOpts(BaseModel):
    """Typed yt-dlp configuration options passed to YoutubeDL."""

    model_config = ConfigDict(frozen=True)

    quiet: bool = True
    no_warnings: bool = True
    noprogress: bool = True
    noplaylist: bool = True
    forceipv4: bool = True
    retries: int = DEFAULT_RETRIES
    socket_timeout: int = DEFAULT_SOCKET_TIMEOUT
    format: NonEmptyStr = "bestaudio/best"
    skip_download: bool = True
