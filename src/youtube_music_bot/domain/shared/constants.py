"""Centralized constants for playback limits, timeouts, and API parameters."""

from __future__ import annotations

from typing import Final


class PlaybackConstants:
    """Session and engine defaults."""

    DEFAULT_VOLUME: Final[int] = 50
    MIN_VOLUME: Final[int] = 0
    MAX_VOLUME: Final[int] = 100

    # Bounds on the single-attempt play timeout, in seconds
    MIN_PLAY_TIMEOUT: Final[float] = 15.0
    MAX_PLAY_TIMEOUT: Final[float] = 20.0
    DEFAULT_PLAY_TIMEOUT: Final[float] = 18.0

    ENGINE_RETRY_DELAY: Final[float] = 5.0
    ENGINE_START_ATTEMPTS: Final[int] = 2


class SearchConstants:
    """YouTube Data API v3 search parameters."""

    SEARCH_URL: Final[str] = "https://www.googleapis.com/youtube/v3/search"
    WATCH_URL: Final[str] = "https://www.youtube.com/watch?v={video_id}"
    MUSIC_CATEGORY_ID: Final[str] = "10"
    DEFAULT_TIMEOUT: Final[float] = 10.0
    HASH_ID_LENGTH: Final[int] = 16


class UIConstants:
    """Limits for reply formatting."""

    QUEUE_DISPLAY_LIMIT: Final[int] = 10
    TITLE_TRUNCATION: Final[int] = 90
    PRESENCE_TRUNCATION: Final[int] = 120


class InviteConstants:
    """OAuth2 invite parameters."""

    # View Channels, Send Messages, Connect, Speak
    PERMISSIONS: Final[int] = 3148800
    SCOPES: Final[tuple[str, ...]] = ("bot", "applications.commands")
