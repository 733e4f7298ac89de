"""Shared validators for user input and Discord identifiers.

These helpers run before any external call is made, so rejected input never
reaches the search API or the playback engine.
"""

from __future__ import annotations

import re
from typing import Final

from youtube_music_bot.domain.shared.constants import PlaybackConstants
from youtube_music_bot.domain.shared.messages import ErrorMessages

# C0/C1 control characters plus the angle brackets Discord uses for mentions and
# embed suppression.
_UNSAFE_QUERY_CHARS: Final[re.Pattern[str]] = re.compile(r"[\x00-\x1f\x7f-\x9f<>]")

HTTP_URL_PATTERN: Final[re.Pattern[str]] = re.compile(r"^https?://\S+$", re.IGNORECASE)


def validate_discord_snowflake(value: int) -> int:
    """Validate a Discord snowflake ID.

    Discord snowflake IDs are 64-bit unsigned integers representing unique
    identifiers for users, guilds, channels, messages, etc.

    Args:
        value: The snowflake ID to validate.

    Returns:
        The validated snowflake ID.

    Raises:
        ValueError: If the snowflake ID is invalid.
    """
    if value <= 0:
        raise ValueError(ErrorMessages.INVALID_SNOWFLAKE)
    if value >= 2**64:
        raise ValueError(ErrorMessages.SNOWFLAKE_TOO_LARGE)
    return value


def sanitize_query(value: object) -> str:
    """Strip control characters and ``<``/``>`` markers from a search query.

    Non-string input sanitizes to the empty string.
    """
    if not isinstance(value, str):
        return ""
    return _UNSAFE_QUERY_CHARS.sub("", value).strip()


def is_http_url(value: str) -> bool:
    return bool(HTTP_URL_PATTERN.match(value))


def clamp_volume(level: int) -> int:
    """Clamp a volume level into the supported 0-100 range."""
    return max(PlaybackConstants.MIN_VOLUME, min(PlaybackConstants.MAX_VOLUME, level))
