"""Discord event listeners for gateway and guild lifecycle logging."""

from __future__ import annotations

import logging

import discord
from discord.ext import commands

from youtube_music_bot.domain.shared.messages import LogTemplates

logger = logging.getLogger(__name__)


class EventCog(commands.Cog):
    def __init__(self, bot: commands.Bot) -> None:
        self.bot = bot

    # ─────────────────────────────────────────────────────────────────
    # Gateway Events
    # ─────────────────────────────────────────────────────────────────

    @commands.Cog.listener()
    async def on_connect(self) -> None:
        logger.info(LogTemplates.GATEWAY_CONNECTED)

    @commands.Cog.listener()
    async def on_disconnect(self) -> None:
        logger.warning(LogTemplates.GATEWAY_DISCONNECTED)

    @commands.Cog.listener()
    async def on_resumed(self) -> None:
        logger.info(LogTemplates.GATEWAY_RESUMED)

    # ─────────────────────────────────────────────────────────────────
    # Guild Events
    # ─────────────────────────────────────────────────────────────────

    @commands.Cog.listener()
    async def on_guild_join(self, guild: discord.Guild) -> None:
        logger.info(LogTemplates.GUILD_JOINED, guild.name, guild.id)

    @commands.Cog.listener()
    async def on_guild_remove(self, guild: discord.Guild) -> None:
        logger.info(LogTemplates.GUILD_REMOVED, guild.name, guild.id)


async def setup(bot: commands.Bot) -> None:
    await bot.add_cog(EventCog(bot))
