"""Main Discord bot class integrating the DI container, cogs, and command registration."""

from __future__ import annotations

import asyncio
import logging
import signal
from typing import TYPE_CHECKING, Any

import discord
from discord.ext import commands

from youtube_music_bot.domain.shared.messages import DiscordUIMessages, LogTemplates

from .guards.voice_guards import send_ephemeral
from .invite import build_invite_url

if TYPE_CHECKING:
    from ...config.container import Container
    from ...config.settings import Settings

logger = logging.getLogger(__name__)

COGS = (
    "youtube_music_bot.infrastructure.discord.cogs.music_cog",
    "youtube_music_bot.infrastructure.discord.cogs.event_cog",
)


class MusicBot(commands.Bot):
    def __init__(
        self,
        container: Container,
        settings: Settings,
        **kwargs: Any,
    ) -> None:
        intents = discord.Intents.default()
        intents.voice_states = True
        intents.guilds = True

        super().__init__(
            command_prefix=commands.when_mentioned,
            intents=intents,
            help_command=None,
            application_id=settings.discord.application_id,
            **kwargs,
        )

        self.container = container
        self.settings = settings
        self._shutdown_event = asyncio.Event()
        container.set_bot(self)

    async def setup_hook(self) -> None:
        await self._load_cogs()
        self.tree.on_error = self._on_app_command_error
        await self._register_commands()

    async def _load_cogs(self) -> None:
        for cog in COGS:
            try:
                await self.load_extension(cog)
                logger.info(LogTemplates.BOT_COG_LOADED, cog)
            except Exception as e:
                logger.exception(LogTemplates.BOT_COG_LOAD_FAILED, cog, e)
                raise

    async def _register_commands(self) -> None:
        """Register slash commands to the dev guild when configured, otherwise globally.

        A registration failure is fatal.
        """
        dev_guild_id = self.settings.discord.dev_guild_id
        try:
            if dev_guild_id is not None:
                logger.info(LogTemplates.COMMANDS_REGISTERING_GUILD, dev_guild_id)
                guild = discord.Object(id=dev_guild_id)
                self.tree.copy_global_to(guild=guild)
                synced = await self.tree.sync(guild=guild)
                logger.info(LogTemplates.COMMANDS_REGISTERED_GUILD, len(synced), dev_guild_id)
            else:
                logger.info(LogTemplates.COMMANDS_REGISTERING_GLOBAL)
                synced = await self.tree.sync()
                logger.info(LogTemplates.COMMANDS_REGISTERED_GLOBAL, len(synced))
        except Exception:
            logger.exception(LogTemplates.COMMANDS_REGISTRATION_FAILED)
            raise

    async def _on_app_command_error(
        self, interaction: discord.Interaction, error: Exception
    ) -> None:
        original = getattr(error, "original", error)
        logger.error(
            LogTemplates.COMMAND_FAILED,
            getattr(interaction.command, "name", "<unknown>"),
            exc_info=original,
        )
        try:
            await send_ephemeral(interaction, DiscordUIMessages.ERROR_GENERIC)
        except discord.HTTPException as e:
            logger.warning(LogTemplates.COMMAND_ERROR_REPLY_FAILED, e)

    async def on_ready(self) -> None:
        logger.info(
            LogTemplates.BOT_READY,
            self.user,
            getattr(self.user, "id", "?"),
        )
        logger.info(LogTemplates.BOT_CONNECTED_GUILDS, len(self.guilds))
        if self.application_id is not None:
            logger.info(LogTemplates.BOT_INVITE_URL, build_invite_url(self.application_id))

        await self.container.engine_lifecycle.start()

        try:
            await self.container.bot_status.update_presence(DiscordUIMessages.PRESENCE_READY)
        except Exception as e:
            logger.warning(LogTemplates.BOT_PRESENCE_FAILED, e)

    async def on_error(self, event_method: str, /, *args: Any, **kwargs: Any) -> None:
        logger.exception(LogTemplates.BOT_GATEWAY_ERROR, event_method)

    async def close(self) -> None:
        logger.info(LogTemplates.BOT_SHUTTING_DOWN)

        try:
            await self.container.shutdown()
        except Exception as e:
            logger.warning(LogTemplates.BOT_CONTAINER_SHUTDOWN_ERROR, e)

        for vc in list(self.voice_clients):
            try:
                await vc.disconnect(force=True)
            except Exception as e:
                logger.debug(LogTemplates.VOICE_DISCONNECT_FAILED, vc.channel, e)

        await super().close()
        self._shutdown_event.set()
        logger.info(LogTemplates.BOT_SHUTDOWN_COMPLETE)

    def run_with_graceful_shutdown(self, token: str, *, shutdown_timeout: float = 30.0) -> None:
        async def runner() -> None:
            async with self:
                loop = asyncio.get_running_loop()

                async def _graceful_close() -> None:
                    try:
                        await asyncio.wait_for(self.close(), timeout=shutdown_timeout)
                    except TimeoutError:
                        logger.warning(LogTemplates.BOT_SHUTDOWN_TIMEOUT, shutdown_timeout)

                for sig in (signal.SIGINT, signal.SIGTERM):
                    loop.add_signal_handler(sig, lambda: asyncio.create_task(_graceful_close()))
                await self.start(token)

        asyncio.run(runner())


def create_bot(container: Container, settings: Settings) -> MusicBot:
    return MusicBot(container=container, settings=settings)
