"""Utility functions for formatting Discord replies."""

from __future__ import annotations

from functools import cache
from typing import TYPE_CHECKING

from youtube_music_bot.domain.shared.constants import UIConstants
from youtube_music_bot.domain.shared.enums import RepeatMode
from youtube_music_bot.domain.shared.messages import DiscordUIMessages

if TYPE_CHECKING:
    from youtube_music_bot.domain.music.value_objects import NowPlaying, QueueView

_REPEAT_EMOJI: dict[RepeatMode, str] = {
    RepeatMode.NONE: "",
    RepeatMode.TRACK: "🔂",
    RepeatMode.QUEUE: "🔁",
}


@cache
def truncate(text: str, max_length: int = UIConstants.TITLE_TRUNCATION) -> str:
    if len(text) <= max_length:
        return text
    return text[: max_length - 1] + "…"


def repeat_emoji(mode: RepeatMode) -> str:
    return _REPEAT_EMOJI.get(mode, "")


def format_now_playing(current: NowPlaying) -> str:
    if current.track is None:
        return DiscordUIMessages.NOTHING_PLAYING

    return DiscordUIMessages.NOW_PLAYING.format(
        status_emoji="🎵" if current.is_playing else "⏸️",
        title=truncate(current.track.title),
        uploader=current.track.uploader_name,
        volume=current.volume,
        repeat_emoji=repeat_emoji(current.repeat_mode),
        repeat_mode=current.repeat_mode.value,
        queue_length=current.queue_length,
    )


def format_queue(view: QueueView, limit: int = UIConstants.QUEUE_DISPLAY_LIMIT) -> str:
    """Render the queue: current track, then up to ``limit`` upcoming entries."""
    if view.current_track is None:
        return DiscordUIMessages.QUEUE_EMPTY

    parts = [
        DiscordUIMessages.QUEUE_HEADER.format(
            title=truncate(view.current_track.title),
            uploader=view.current_track.uploader_name,
        )
    ]
    if not view.upcoming:
        parts.append(DiscordUIMessages.QUEUE_NOTHING_UPCOMING)
        return "".join(parts)

    parts.append(DiscordUIMessages.QUEUE_UPCOMING.format(count=len(view.upcoming)))
    for index, track in enumerate(view.upcoming[:limit], start=1):
        parts.append(
            DiscordUIMessages.QUEUE_LINE.format(
                index=index,
                title=truncate(track.title),
                uploader=track.uploader_name,
            )
        )
    if len(view.upcoming) > limit:
        parts.append(DiscordUIMessages.QUEUE_MORE.format(count=len(view.upcoming) - limit))
    return "".join(parts)


def presence_for_track(title: str | None) -> str:
    return DiscordUIMessages.PRESENCE_TRACK.format(
        title=truncate(title or DiscordUIMessages.PRESENCE_PLAYING, UIConstants.PRESENCE_TRUNCATION)
    )
