"""Reusable Pydantic Annotated types for domain-wide validation.

Every constrained type used across layers is defined here once,
so models can simply annotate their fields::

    from youtube_music_bot.domain.shared.types import DiscordSnowflake, NonEmptyStr

    class MyModel(BaseModel):
        guild_id: DiscordSnowflake
        name: NonEmptyStr
"""

from __future__ import annotations

from typing import Annotated

from pydantic import Field

# ── Numeric constraints ─────────────────────────────────────────────

DiscordSnowflake = Annotated[int, Field(gt=0, lt=2**64)]
"""Positive integer that fits a Discord snowflake (1 … 2^64-1)."""

NonNegativeInt = Annotated[int, Field(ge=0)]
"""Integer >= 0."""

VolumeLevel = Annotated[int, Field(ge=0, le=100)]
"""Playback volume as a percentage: 0 … 100."""


# ── String constraints ──────────────────────────────────────────────

NonEmptyStr = Annotated[str, Field(min_length=1)]
"""String with at least one character."""

HttpUrlStr = Annotated[str, Field(pattern=r"(?i)^https?://")]
"""String that starts with http:// or https://, in any case."""
