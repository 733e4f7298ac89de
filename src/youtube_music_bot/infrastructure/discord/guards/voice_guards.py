"""Helpers that read guild and voice context off a slash-command interaction."""

from __future__ import annotations

import discord


async def send_ephemeral(interaction: discord.Interaction, message: str) -> None:
    """Send an ephemeral message, handling both fresh and already-responded interactions."""
    if interaction.response.is_done():
        await interaction.followup.send(message, ephemeral=True)
    else:
        await interaction.response.send_message(message, ephemeral=True)


def member_voice_channel_id(interaction: discord.Interaction) -> int | None:
    """ID of the voice channel the invoking member is in, if any."""
    if interaction.guild is None:
        return None

    user = interaction.user
    if not isinstance(user, discord.Member):
        user = interaction.guild.get_member(user.id)
    if user is None or user.voice is None or user.voice.channel is None:
        return None
    return user.voice.channel.id
