"""Playback Engine Adapter - exception-free facade over the queue engine."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any, Final

from ...domain.music.value_objects import CommandResult, NowPlaying, QueueView
from ...domain.shared.constants import PlaybackConstants
from ...domain.shared.enums import EngineState, RepeatMode
from ...domain.shared.exceptions import EngineNotReadyError
from ...domain.shared.messages import AdapterMessages, LogTemplates
from ...domain.shared.types import DiscordSnowflake
from ...domain.shared.validators import clamp_volume

if TYPE_CHECKING:
    from ...domain.music.entities import Track
    from ..interfaces.playback_engine import GuildQueueState, PlaybackEngine
    from .engine_lifecycle import EngineLifecycle
    from .session_store import SessionStore

logger = logging.getLogger(__name__)

# Lower-cased fragments seen in yt-dlp / YouTube errors when a request is
# flagged as automated. Matching is a hint only.
_BLOCKED_MARKERS: Final[tuple[str, ...]] = (
    "sign in to confirm",
    "not a bot",
    "http error 403",
    "403: forbidden",
    "429",
    "too many requests",
)


def looks_blocked(error: BaseException | str) -> bool:
    text = str(error).lower()
    return any(marker in text for marker in _BLOCKED_MARKERS)


class PlaybackEngineAdapter:
    """Translates every engine interaction into a ``CommandResult``.

    Preconditions (paused twice, nothing queued, ...) are checked against the
    engine's live queue before calling it, and any exception the engine raises
    is logged and converted into a failed result. Nothing propagates.
    """

    def __init__(
        self,
        *,
        lifecycle: EngineLifecycle,
        session_store: SessionStore,
        play_timeout: float = PlaybackConstants.DEFAULT_PLAY_TIMEOUT,
    ) -> None:
        self._lifecycle = lifecycle
        self._sessions = session_store
        self._play_timeout = play_timeout
        # Plays that outlived their timeout keep running here until done.
        self._background: set[asyncio.Task[None]] = set()

    @property
    def engine_status(self) -> EngineState:
        return self._lifecycle.state

    @property
    def is_engine_ready(self) -> bool:
        return self._lifecycle.is_ready

    def _engine(self) -> PlaybackEngine | None:
        try:
            return self._lifecycle.engine
        except EngineNotReadyError:
            return None

    def _queue(self, guild_id: DiscordSnowflake) -> GuildQueueState | None:
        engine = self._engine()
        if engine is None:
            return None
        try:
            return engine.get_queue(guild_id)
        except Exception as e:
            logger.warning(LogTemplates.ADAPTER_OPERATION_FAILED, "get_queue", guild_id, e)
            return None

    # ─────────────────────────────────────────────────────────────────
    # Play
    # ─────────────────────────────────────────────────────────────────

    async def play(
        self,
        guild_id: DiscordSnowflake,
        voice_channel_id: DiscordSnowflake,
        track: Track,
    ) -> CommandResult:
        engine = self._engine()
        if engine is None:
            if not self._lifecycle.reinitialize_once():
                return CommandResult.fail(AdapterMessages.ENGINE_NOT_READY)
            engine = self._engine()
            if engine is None:
                return CommandResult.fail(AdapterMessages.ENGINE_NOT_READY)

        session = self._sessions.get_or_create(guild_id)
        queue = self._queue(guild_id)
        added_to_queue = bool(queue is not None and not queue.stopped and len(queue.songs) > 0)

        task = asyncio.create_task(
            engine.play(
                guild_id,
                voice_channel_id,
                track,
                volume=session.volume,
                repeat_mode=session.repeat_mode,
            )
        )
        try:
            async with asyncio.timeout(self._play_timeout):
                await asyncio.shield(task)
        except TimeoutError:
            logger.warning(LogTemplates.ADAPTER_PLAY_TIMEOUT, self._play_timeout, guild_id)
            self._keep_in_background(task, guild_id)
            return CommandResult.fail(AdapterMessages.PLAY_TIMEOUT)
        except Exception as e:
            logger.error(LogTemplates.ADAPTER_PLAY_FAILED, guild_id, e)
            if looks_blocked(e):
                return CommandResult.fail(AdapterMessages.YOUTUBE_BLOCKED)
            return CommandResult.fail(AdapterMessages.PLAY_ERROR.format(error=e))

        template = AdapterMessages.ADDED_TO_QUEUE if added_to_queue else AdapterMessages.NOW_PLAYING
        return CommandResult.ok(
            template.format(title=track.title),
            track=track,
            added_to_queue=added_to_queue,
        )

    def _keep_in_background(self, task: asyncio.Task[None], guild_id: DiscordSnowflake) -> None:
        self._background.add(task)

        def _done(finished: asyncio.Task[None]) -> None:
            self._background.discard(finished)
            if finished.cancelled():
                return
            error = finished.exception()
            if error is not None:
                logger.warning(LogTemplates.ADAPTER_BACKGROUND_PLAY_FAILED, guild_id, error)

        task.add_done_callback(_done)

    # ─────────────────────────────────────────────────────────────────
    # Transport controls
    # ─────────────────────────────────────────────────────────────────

    async def pause(self, guild_id: DiscordSnowflake) -> CommandResult:
        queue = self._queue(guild_id)
        if queue is None:
            return CommandResult.fail(AdapterMessages.NOTHING_PLAYING)
        if queue.paused:
            return CommandResult.fail(AdapterMessages.ALREADY_PAUSED)
        return await self._call("pause", guild_id, lambda e: e.pause(guild_id), AdapterMessages.PAUSED)

    async def resume(self, guild_id: DiscordSnowflake) -> CommandResult:
        queue = self._queue(guild_id)
        if queue is None or not queue.paused:
            return CommandResult.fail(AdapterMessages.NOTHING_PAUSED)
        return await self._call("resume", guild_id, lambda e: e.resume(guild_id), AdapterMessages.RESUMED)

    async def skip(self, guild_id: DiscordSnowflake) -> CommandResult:
        queue = self._queue(guild_id)
        if queue is None or len(queue.songs) <= 1:
            return CommandResult.fail(AdapterMessages.NO_NEXT_SONG)
        return await self._call(
            "skip",
            guild_id,
            lambda e: e.skip(guild_id),
            AdapterMessages.SKIPPED,
        )

    async def previous(self, guild_id: DiscordSnowflake) -> CommandResult:
        queue = self._queue(guild_id)
        if queue is None or not queue.previous_songs:
            return CommandResult.fail(AdapterMessages.NO_PREVIOUS_SONG)
        return await self._call(
            "go back",
            guild_id,
            lambda e: e.previous(guild_id),
            AdapterMessages.PREVIOUS,
        )

    async def stop(self, guild_id: DiscordSnowflake) -> CommandResult:
        queue = self._queue(guild_id)
        if queue is None:
            return CommandResult.fail(AdapterMessages.NOTHING_PLAYING)
        return await self._call("stop", guild_id, lambda e: e.stop(guild_id), AdapterMessages.STOPPED)

    async def _call(
        self,
        operation: str,
        guild_id: DiscordSnowflake,
        action: Callable[[PlaybackEngine], Awaitable[Any]],
        success_message: str,
    ) -> CommandResult:
        engine = self._engine()
        if engine is None:
            return CommandResult.fail(AdapterMessages.ENGINE_NOT_READY)
        try:
            returned = await action(engine)
        except Exception as e:
            logger.warning(LogTemplates.ADAPTER_OPERATION_FAILED, operation, guild_id, e)
            return CommandResult.fail(AdapterMessages.OPERATION_ERROR.format(operation=operation, error=e))

        track = returned if returned is not None and hasattr(returned, "title") else None
        if track is not None:
            return CommandResult.ok(success_message, track=track)
        return CommandResult.ok(success_message)

    # ─────────────────────────────────────────────────────────────────
    # Session preferences
    # ─────────────────────────────────────────────────────────────────

    async def set_volume(self, guild_id: DiscordSnowflake, level: int) -> CommandResult:
        volume = clamp_volume(level)
        session = self._sessions.get_or_create(guild_id)
        session.volume = volume

        if self._queue(guild_id) is not None:
            engine = self._engine()
            try:
                if engine is not None:
                    await engine.set_volume(guild_id, volume)
            except Exception as e:
                logger.warning(LogTemplates.ADAPTER_OPERATION_FAILED, "set_volume", guild_id, e)
                return CommandResult.fail(AdapterMessages.VOLUME_ERROR)

        return CommandResult.ok(AdapterMessages.VOLUME_SET.format(volume=volume), volume=volume)

    async def set_repeat_mode(self, guild_id: DiscordSnowflake, mode: RepeatMode) -> CommandResult:
        session = self._sessions.get_or_create(guild_id)
        session.repeat_mode = mode

        if self._queue(guild_id) is not None:
            engine = self._engine()
            try:
                if engine is not None:
                    await engine.set_repeat_mode(guild_id, mode)
            except Exception as e:
                logger.warning(LogTemplates.ADAPTER_OPERATION_FAILED, "set_repeat_mode", guild_id, e)
                return CommandResult.fail(AdapterMessages.REPEAT_ERROR)

        return CommandResult.ok(AdapterMessages.REPEAT_SET.format(mode=mode.value), repeat_mode=mode)

    # ─────────────────────────────────────────────────────────────────
    # Reads
    # ─────────────────────────────────────────────────────────────────

    def current_track(self, guild_id: DiscordSnowflake) -> NowPlaying:
        session = self._sessions.get(guild_id)
        volume = session.volume if session else PlaybackConstants.DEFAULT_VOLUME
        repeat_mode = session.repeat_mode if session else RepeatMode.NONE

        queue = self._queue(guild_id)
        if queue is None or not queue.songs:
            return NowPlaying(volume=volume, repeat_mode=repeat_mode)

        return NowPlaying(
            track=queue.songs[0],
            is_playing=not queue.paused and not queue.stopped,
            queue_length=len(queue.songs),
            volume=volume,
            repeat_mode=repeat_mode,
        )

    def queue_view(self, guild_id: DiscordSnowflake) -> QueueView:
        queue = self._queue(guild_id)
        if queue is None or not queue.songs:
            return QueueView()
        songs = tuple(queue.songs)
        return QueueView(current_track=songs[0], upcoming=songs[1:], length=len(songs))

    # ─────────────────────────────────────────────────────────────────
    # Voice connection
    # ─────────────────────────────────────────────────────────────────

    async def join(self, guild_id: DiscordSnowflake, channel_id: DiscordSnowflake) -> CommandResult:
        engine = self._engine()
        if engine is None:
            return CommandResult.fail(AdapterMessages.ENGINE_NOT_READY)
        try:
            if engine.is_connected(guild_id):
                return CommandResult.ok(AdapterMessages.ALREADY_CONNECTED)
            await engine.join(guild_id, channel_id)
        except Exception as e:
            logger.warning(LogTemplates.ADAPTER_OPERATION_FAILED, "join", guild_id, e)
            return CommandResult.fail(AdapterMessages.JOIN_ERROR.format(error=e))
        return CommandResult.ok(AdapterMessages.JOINED)

    async def leave(self, guild_id: DiscordSnowflake) -> CommandResult:
        engine = self._engine()
        if engine is None:
            return CommandResult.fail(AdapterMessages.NOT_CONNECTED)
        try:
            if not engine.is_connected(guild_id):
                return CommandResult.fail(AdapterMessages.NOT_CONNECTED)
            await engine.leave(guild_id)
        except Exception as e:
            logger.warning(LogTemplates.ADAPTER_OPERATION_FAILED, "leave", guild_id, e)
            return CommandResult.fail(AdapterMessages.LEAVE_ERROR.format(error=e))
        return CommandResult.ok(AdapterMessages.LEFT)

    async def shutdown(self) -> None:
        """Wait briefly for abandoned plays so their errors are logged."""
        if not self._background:
            return
        await asyncio.wait(set(self._background), timeout=1.0)
