"""Port interfaces for the chat-platform transport.

The interpreter never touches discord.py objects: a cog turns each
interaction into an ``InteractionRequest`` and hands over a responder that
enforces the acknowledge-then-edit discipline of the platform.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from youtube_music_bot.domain.shared.types import DiscordSnowflake


class InteractionRequest(BaseModel):
    """A single slash-command invocation, stripped of transport details."""

    model_config = ConfigDict(frozen=True)

    command_name: str
    user_name: str = "unknown"
    guild_id: DiscordSnowflake | None = None
    guild_name: str | None = None
    voice_channel_id: DiscordSnowflake | None = None
    options: dict[str, Any] = Field(default_factory=dict)

    def option(self, name: str, default: Any = None) -> Any:
        return self.options.get(name, default)


class InteractionResponder(ABC):
    """Reply channel for one interaction.

    ``reply`` and ``defer`` are mutually exclusive initial acknowledgements;
    ``edit`` replaces a deferred reply and ``follow_up`` adds a new message
    once the interaction has been acknowledged.
    """

    @property
    @abstractmethod
    def is_acknowledged(self) -> bool: ...

    @property
    @abstractmethod
    def is_deferred(self) -> bool: ...

    @abstractmethod
    async def defer(self) -> None: ...

    @abstractmethod
    async def reply(self, content: str, *, ephemeral: bool = False) -> None: ...

    @abstractmethod
    async def edit(self, content: str) -> None: ...

    @abstractmethod
    async def follow_up(self, content: str, *, ephemeral: bool = True) -> None: ...


class BotStatus(ABC):
    """Cosmetic bot status: presence text and server count."""

    @abstractmethod
    async def update_presence(self, activity: str) -> None: ...

    @abstractmethod
    def guild_count(self) -> int: ...
