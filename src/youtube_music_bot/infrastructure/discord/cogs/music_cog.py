"""Slash-command music cog delegating every command to the interpreter."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import discord
from discord import app_commands
from discord.ext import commands

from youtube_music_bot.application.interfaces.interaction import InteractionRequest
from youtube_music_bot.domain.shared.enums import CommandName, RepeatMode
from youtube_music_bot.domain.shared.messages import ErrorMessages

from ..guards.voice_guards import member_voice_channel_id
from ..responder import DiscordInteractionResponder

if TYPE_CHECKING:
    from ....config.container import Container

logger = logging.getLogger(__name__)

REPEAT_CHOICES = [
    app_commands.Choice(name="Off", value=RepeatMode.NONE.value),
    app_commands.Choice(name="Current track", value=RepeatMode.TRACK.value),
    app_commands.Choice(name="Whole queue", value=RepeatMode.QUEUE.value),
]


class MusicCog(commands.Cog):
    def __init__(self, bot: commands.Bot, container: Container) -> None:
        self.bot = bot
        self.container = container

    async def _run(self, interaction: discord.Interaction, command: CommandName, **options: Any) -> None:
        request = InteractionRequest(
            command_name=command.value,
            user_name=str(interaction.user),
            guild_id=interaction.guild_id,
            guild_name=interaction.guild.name if interaction.guild else None,
            voice_channel_id=member_voice_channel_id(interaction),
            options=options,
        )
        await self.container.command_interpreter.handle(
            request, DiscordInteractionResponder(interaction)
        )

    @app_commands.command(name="play", description="Play a song from YouTube")
    @app_commands.describe(query="Song name or YouTube URL")
    async def play(self, interaction: discord.Interaction, query: str) -> None:
        await self._run(interaction, CommandName.PLAY, query=query)

    @app_commands.command(name="pause", description="Pause the current song")
    async def pause(self, interaction: discord.Interaction) -> None:
        await self._run(interaction, CommandName.PAUSE)

    @app_commands.command(name="resume", description="Resume the paused song")
    async def resume(self, interaction: discord.Interaction) -> None:
        await self._run(interaction, CommandName.RESUME)

    @app_commands.command(name="skip", description="Skip to the next song")
    async def skip(self, interaction: discord.Interaction) -> None:
        await self._run(interaction, CommandName.SKIP)

    @app_commands.command(name="previous", description="Play the previous song")
    async def previous(self, interaction: discord.Interaction) -> None:
        await self._run(interaction, CommandName.PREVIOUS)

    @app_commands.command(name="volume", description="Set the volume (0-100)")
    @app_commands.describe(level="Volume level (0-100)")
    async def volume(
        self, interaction: discord.Interaction, level: app_commands.Range[int, 0, 100]
    ) -> None:
        await self._run(interaction, CommandName.VOLUME, level=level)

    @app_commands.command(name="repeat", description="Set the repeat mode")
    @app_commands.describe(mode="What to repeat when a song ends")
    @app_commands.choices(mode=REPEAT_CHOICES)
    async def repeat(self, interaction: discord.Interaction, mode: app_commands.Choice[str]) -> None:
        await self._run(interaction, CommandName.REPEAT, mode=mode.value)

    @app_commands.command(name="nowplaying", description="Show the currently playing song")
    async def nowplaying(self, interaction: discord.Interaction) -> None:
        await self._run(interaction, CommandName.NOW_PLAYING)

    @app_commands.command(name="queue", description="Show the music queue")
    async def queue(self, interaction: discord.Interaction) -> None:
        await self._run(interaction, CommandName.QUEUE)

    @app_commands.command(name="stop", description="Stop music and clear the queue")
    async def stop(self, interaction: discord.Interaction) -> None:
        await self._run(interaction, CommandName.STOP)

    @app_commands.command(name="join", description="Join your voice channel")
    async def join(self, interaction: discord.Interaction) -> None:
        await self._run(interaction, CommandName.JOIN)

    @app_commands.command(name="leave", description="Leave the voice channel")
    async def leave(self, interaction: discord.Interaction) -> None:
        await self._run(interaction, CommandName.LEAVE)

    @app_commands.command(name="debug", description="Show bot debug information")
    async def debug(self, interaction: discord.Interaction) -> None:
        await self._run(interaction, CommandName.DEBUG)


async def setup(bot: commands.Bot) -> None:
    container = getattr(bot, "container", None)
    if container is None:
        raise RuntimeError(ErrorMessages.CONTAINER_NOT_FOUND)

    await bot.add_cog(MusicCog(bot, container))
