"""Interaction guard helpers for Discord cogs."""

from youtube_music_bot.infrastructure.discord.guards.voice_guards import (
    member_voice_channel_id,
    send_ephemeral,
)

__all__ = [
    "member_voice_channel_id",
    "send_ephemeral",
]
