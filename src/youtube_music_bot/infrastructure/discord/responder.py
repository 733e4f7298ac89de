"""InteractionResponder backed by a discord.py Interaction."""

from __future__ import annotations

import discord

from ...application.interfaces.interaction import InteractionResponder


class DiscordInteractionResponder(InteractionResponder):
    def __init__(self, interaction: discord.Interaction) -> None:
        self._interaction = interaction
        self._deferred = False

    @property
    def is_acknowledged(self) -> bool:
        return self._interaction.response.is_done()

    @property
    def is_deferred(self) -> bool:
        return self._deferred

    async def defer(self) -> None:
        await self._interaction.response.defer(thinking=True)
        self._deferred = True

    async def reply(self, content: str, *, ephemeral: bool = False) -> None:
        await self._interaction.response.send_message(content, ephemeral=ephemeral)

    async def edit(self, content: str) -> None:
        await self._interaction.edit_original_response(content=content)

    async def follow_up(self, content: str, *, ephemeral: bool = True) -> None:
        await self._interaction.followup.send(content, ephemeral=ephemeral)
