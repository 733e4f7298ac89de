"""Bot presence and server count."""

from __future__ import annotations

import discord

from ...application.interfaces.interaction import BotStatus


class DiscordBotStatus(BotStatus):
    """Sets a "Listening to ..." activity on the bot user."""

    def __init__(self, client: discord.Client) -> None:
        self._client = client

    async def update_presence(self, activity: str) -> None:
        await self._client.change_presence(
            activity=discord.Activity(type=discord.ActivityType.listening, name=activity),
            status=discord.Status.online,
        )

    def guild_count(self) -> int:
        return len(self._client.guilds)
