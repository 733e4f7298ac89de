"""Direct stream URL extraction using yt-dlp."""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Any, cast

from yt_dlp import YoutubeDL

from youtube_music_bot.domain.shared.messages import ErrorMessages, LogTemplates

from .models import (
    CACHE_MAX_SIZE,
    CACHE_TTL,
    LOG_URL_TRUNCATE,
    CacheEntry,
    StreamInfo,
    YtDlpOpts,
)

logger = logging.getLogger(__name__)


class StreamExtractionError(Exception):
    """Raised when yt-dlp cannot produce a playable stream for a URL."""


class YtDlpStreamExtractor:
    """Turns a watch URL into a media URL FFmpeg can read.

    Media URLs expire, so results are cached for a limited time only.
    """

    def __init__(self, ytdlp_format: str = "bestaudio/best") -> None:
        self._opts = YtDlpOpts(format=ytdlp_format)
        self._cache: dict[str, CacheEntry] = {}

    async def extract(self, url: str) -> StreamInfo:
        return await asyncio.to_thread(self._extract_sync, url)

    def _extract_sync(self, url: str) -> StreamInfo:
        now = time.monotonic()
        cached = self._cache.get(url)
        if cached is not None:
            if now - cached.cached_at < CACHE_TTL:
                logger.debug(LogTemplates.CACHE_HIT_URL, url[:LOG_URL_TRUNCATE])
                return cached.info
            self._cache.pop(url, None)

        try:
            with YoutubeDL(params=cast(Any, self._opts.model_dump())) as ydl:
                data = ydl.extract_info(url, download=False)
        except Exception as e:
            logger.warning(LogTemplates.YTDLP_FAILED_EXTRACT_INFO, url[:LOG_URL_TRUNCATE])
            raise StreamExtractionError(str(e)) from e

        if not isinstance(data, dict):
            raise StreamExtractionError(ErrorMessages.ENGINE_NO_STREAM.format(url=url))

        info = StreamInfo.model_validate(dict(data))
        self._cache[url] = CacheEntry(info=info, cached_at=now)
        self._evict_expired(now)
        return info

    def _evict_expired(self, now: float) -> None:
        if len(self._cache) <= CACHE_MAX_SIZE:
            return
        expired = [k for k, entry in self._cache.items() if now - entry.cached_at >= CACHE_TTL]
        for k in expired:
            self._cache.pop(k, None)
        if expired:
            logger.debug(LogTemplates.CACHE_EXPIRED_CLEANED, len(expired))
