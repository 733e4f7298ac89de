"""Slash-command interpreter.

Every interaction goes ``received → validated → deferred → resolved →
replied``. Input problems are answered with a single ephemeral reply before
any external call; everything after the defer edits that deferred reply.
"""

from __future__ import annotations

import logging
import platform
import time
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any, Final

import psutil

from ...domain.shared.constants import PlaybackConstants
from ...domain.shared.enums import CommandName, EngineState, RepeatMode
from ...domain.shared.exceptions import ValidationError
from ...domain.shared.messages import DiscordUIMessages, ErrorMessages, LogTemplates
from ...domain.shared.validators import sanitize_query
from ...utils.reply import format_now_playing, format_queue, presence_for_track, repeat_emoji
from .play_track import PlayTrackCommand, PlayTrackStatus

if TYPE_CHECKING:
    from ..interfaces.interaction import BotStatus, InteractionRequest, InteractionResponder
    from ..services.engine_adapter import PlaybackEngineAdapter
    from .play_track import PlayTrackHandler

logger = logging.getLogger(__name__)

_VOICE_REQUIRED: Final[frozenset[CommandName]] = frozenset({CommandName.PLAY, CommandName.JOIN})

_Handler = Callable[["InteractionRequest", Any], Awaitable[str]]


class CommandInterpreter:
    """Routes interactions to the playback adapter and formats the replies."""

    def __init__(
        self,
        *,
        adapter: PlaybackEngineAdapter,
        play_handler: PlayTrackHandler,
        bot_status: BotStatus,
        environment: str = "development",
        started_at: float | None = None,
    ) -> None:
        self._adapter = adapter
        self._play_handler = play_handler
        self._bot_status = bot_status
        self._environment = environment
        self._started_at = time.monotonic() if started_at is None else started_at

        self._handlers: dict[CommandName, _Handler] = {
            CommandName.PLAY: self._play,
            CommandName.PAUSE: self._pause,
            CommandName.RESUME: self._resume,
            CommandName.SKIP: self._skip,
            CommandName.PREVIOUS: self._previous,
            CommandName.VOLUME: self._volume,
            CommandName.REPEAT: self._repeat,
            CommandName.NOW_PLAYING: self._now_playing,
            CommandName.QUEUE: self._queue,
            CommandName.STOP: self._stop,
            CommandName.JOIN: self._join,
            CommandName.LEAVE: self._leave,
            CommandName.DEBUG: self._debug,
        }

    async def handle(self, request: InteractionRequest, responder: InteractionResponder) -> None:
        logger.info(
            LogTemplates.COMMAND_RECEIVED,
            request.command_name,
            request.user_name,
            request.guild_name or "DM",
        )

        if request.guild_id is None:
            try:
                await responder.reply(DiscordUIMessages.STATE_SERVER_ONLY, ephemeral=True)
            except Exception as e:
                logger.error(LogTemplates.COMMAND_DM_REPLY_FAILED, e)
            return

        try:
            await self._dispatch(request, responder)
        except Exception:
            logger.exception(LogTemplates.COMMAND_FAILED, request.command_name)
            await self._send_generic_error(responder)

    async def _dispatch(self, request: InteractionRequest, responder: InteractionResponder) -> None:
        try:
            command = CommandName(request.command_name)
        except ValueError:
            await responder.reply(DiscordUIMessages.UNKNOWN_COMMAND, ephemeral=True)
            return

        try:
            value = self._parse_options(command, request)
        except ValidationError as e:
            await responder.reply(e.message, ephemeral=True)
            return

        if command in _VOICE_REQUIRED and request.voice_channel_id is None:
            await responder.reply(DiscordUIMessages.STATE_MUST_BE_IN_VOICE, ephemeral=True)
            return

        await responder.defer()
        content = await self._handlers[command](request, value)
        await responder.edit(content)

    @staticmethod
    def _parse_options(command: CommandName, request: InteractionRequest) -> Any:
        if command is CommandName.PLAY:
            query = sanitize_query(request.option("query"))
            if not query:
                raise ValidationError(ErrorMessages.EMPTY_QUERY, field="query")
            return query

        if command is CommandName.VOLUME:
            level = request.option("level")
            if (
                isinstance(level, bool)
                or not isinstance(level, int)
                or not PlaybackConstants.MIN_VOLUME <= level <= PlaybackConstants.MAX_VOLUME
            ):
                raise ValidationError(ErrorMessages.INVALID_VOLUME, field="level")
            return level

        if command is CommandName.REPEAT:
            mode = request.option("mode")
            try:
                return RepeatMode(str(mode).strip().lower())
            except ValueError:
                raise ValidationError(ErrorMessages.INVALID_REPEAT_MODE, field="mode") from None

        return None

    async def _send_generic_error(self, responder: InteractionResponder) -> None:
        try:
            if not responder.is_acknowledged:
                await responder.reply(DiscordUIMessages.ERROR_GENERIC, ephemeral=True)
            elif responder.is_deferred:
                await responder.edit(DiscordUIMessages.ERROR_GENERIC)
            else:
                await responder.follow_up(DiscordUIMessages.ERROR_GENERIC, ephemeral=True)
        except Exception as e:
            logger.error(LogTemplates.COMMAND_ERROR_REPLY_FAILED, e)

    async def _set_presence(self, activity: str) -> None:
        try:
            await self._bot_status.update_presence(activity)
        except Exception as e:
            logger.warning(LogTemplates.BOT_PRESENCE_FAILED, e)

    async def _refresh_presence(self, guild_id: int) -> None:
        current = self._adapter.current_track(guild_id)
        await self._set_presence(presence_for_track(current.track.title if current.track else None))

    # ─────────────────────────────────────────────────────────────────
    # Handlers: each returns the content for the deferred reply
    # ─────────────────────────────────────────────────────────────────

    async def _play(self, request: InteractionRequest, query: str) -> str:
        assert request.guild_id is not None and request.voice_channel_id is not None
        result = await self._play_handler.handle(
            PlayTrackCommand(
                guild_id=request.guild_id,
                channel_id=request.voice_channel_id,
                query=query,
            )
        )

        if result.status is PlayTrackStatus.TRACK_NOT_FOUND:
            return DiscordUIMessages.FAILURE.format(
                message=DiscordUIMessages.NO_RESULTS.format(query=query)
            )
        if not result.is_success or result.track is None:
            return DiscordUIMessages.FAILURE.format(message=result.message)

        if result.status is PlayTrackStatus.QUEUED:
            return DiscordUIMessages.PLAY_QUEUED.format(
                message=result.message, uploader=result.track.uploader_name
            )

        await self._set_presence(presence_for_track(result.track.title))
        return DiscordUIMessages.PLAY_STARTED.format(
            message=result.message, uploader=result.track.uploader_name
        )

    async def _pause(self, request: InteractionRequest, _: None) -> str:
        assert request.guild_id is not None
        result = await self._adapter.pause(request.guild_id)
        if not result.success:
            return DiscordUIMessages.FAILURE.format(message=result.message)
        await self._set_presence(DiscordUIMessages.PRESENCE_PAUSED)
        return DiscordUIMessages.ACTION_PAUSED

    async def _resume(self, request: InteractionRequest, _: None) -> str:
        assert request.guild_id is not None
        result = await self._adapter.resume(request.guild_id)
        if not result.success:
            return DiscordUIMessages.FAILURE.format(message=result.message)
        await self._refresh_presence(request.guild_id)
        return DiscordUIMessages.ACTION_RESUMED

    async def _skip(self, request: InteractionRequest, _: None) -> str:
        assert request.guild_id is not None
        result = await self._adapter.skip(request.guild_id)
        if not result.success:
            return DiscordUIMessages.FAILURE.format(message=result.message)
        await self._refresh_presence(request.guild_id)
        return DiscordUIMessages.ACTION_SKIPPED

    async def _previous(self, request: InteractionRequest, _: None) -> str:
        assert request.guild_id is not None
        result = await self._adapter.previous(request.guild_id)
        if not result.success:
            return DiscordUIMessages.FAILURE.format(message=result.message)
        await self._refresh_presence(request.guild_id)
        return DiscordUIMessages.ACTION_PREVIOUS

    async def _volume(self, request: InteractionRequest, level: int) -> str:
        assert request.guild_id is not None
        result = await self._adapter.set_volume(request.guild_id, level)
        if not result.success:
            return DiscordUIMessages.FAILURE.format(message=result.message)
        volume = result.data.volume if result.data and result.data.volume is not None else level
        return DiscordUIMessages.ACTION_VOLUME.format(volume=volume)

    async def _repeat(self, request: InteractionRequest, mode: RepeatMode) -> str:
        assert request.guild_id is not None
        result = await self._adapter.set_repeat_mode(request.guild_id, mode)
        if not result.success:
            return DiscordUIMessages.FAILURE.format(message=result.message)
        return DiscordUIMessages.ACTION_REPEAT.format(
            emoji=repeat_emoji(mode) or "➡️", mode=mode.value
        )

    async def _now_playing(self, request: InteractionRequest, _: None) -> str:
        assert request.guild_id is not None
        return format_now_playing(self._adapter.current_track(request.guild_id))

    async def _queue(self, request: InteractionRequest, _: None) -> str:
        assert request.guild_id is not None
        return format_queue(self._adapter.queue_view(request.guild_id))

    async def _stop(self, request: InteractionRequest, _: None) -> str:
        assert request.guild_id is not None
        result = await self._adapter.stop(request.guild_id)
        if not result.success:
            return DiscordUIMessages.FAILURE.format(message=result.message)
        await self._set_presence(DiscordUIMessages.PRESENCE_READY)
        return DiscordUIMessages.ACTION_STOPPED

    async def _join(self, request: InteractionRequest, _: None) -> str:
        assert request.guild_id is not None and request.voice_channel_id is not None
        result = await self._adapter.join(request.guild_id, request.voice_channel_id)
        if not result.success:
            return DiscordUIMessages.FAILURE.format(message=result.message)
        return DiscordUIMessages.ACTION_JOINED.format(message=result.message)

    async def _leave(self, request: InteractionRequest, _: None) -> str:
        assert request.guild_id is not None
        result = await self._adapter.leave(request.guild_id)
        if not result.success:
            return DiscordUIMessages.FAILURE.format(message=result.message)
        await self._set_presence(DiscordUIMessages.PRESENCE_READY)
        return DiscordUIMessages.ACTION_LEFT

    async def _debug(self, request: InteractionRequest, _: None) -> str:
        engine_status = (
            DiscordUIMessages.ENGINE_STATUS_READY
            if self._adapter.engine_status is EngineState.READY
            else DiscordUIMessages.ENGINE_STATUS_UNINITIALIZED
        )
        memory_mb = round(psutil.Process().memory_info().rss / 1024 / 1024)
        return DiscordUIMessages.DEBUG_INFO.format(
            engine_status=engine_status,
            python_version=platform.python_version(),
            uptime=int(time.monotonic() - self._started_at),
            memory_mb=memory_mb,
            environment=self._environment,
            guild_count=self._bot_status.guild_count(),
        )
