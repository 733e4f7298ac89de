"""Per-guild queue engine on top of discord.py voice and FFmpeg.

Each guild gets a ``GuildQueue`` whose first song is the one playing. When a
song ends the repeat mode decides what plays next; when nothing is left the
queue is deleted. Operations raise ``EngineError`` subclasses on misuse.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
import shutil
from collections import defaultdict
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import discord

from ...application.interfaces.playback_engine import EngineListener, PlaybackEngine
from ...domain.shared.enums import EngineEvent, RepeatMode
from ...domain.shared.messages import ErrorMessages, LogTemplates
from .ytdlp_stream import StreamExtractionError, YtDlpStreamExtractor

if TYPE_CHECKING:
    from ...config.settings import PlaybackSettings
    from ...domain.music.entities import Track

logger = logging.getLogger(__name__)

CONNECT_TIMEOUT: float = 10.0


# ── Errors ─────────────────────────────────────────────────────────────


class EngineError(Exception):
    """Base class for errors raised by the queue engine."""

    code = "ENGINE_ERROR"


class EngineInitError(EngineError):
    code = "ENGINE_INIT"


class NoQueueError(EngineError):
    code = "NO_QUEUE"


class NoUpNextError(EngineError):
    code = "NO_UP_NEXT"


class NoPreviousSongError(EngineError):
    code = "NO_PREVIOUS"


class AlreadyPausedError(EngineError):
    code = "PAUSED"


class NotPausedError(EngineError):
    code = "RESUMED"


class VoiceConnectionError(EngineError):
    code = "VOICE_CONNECT_FAILED"


class StreamUnavailableError(EngineError):
    code = "NO_STREAM"


# ── Queue state ────────────────────────────────────────────────────────


@dataclass
class GuildQueue:
    """Live queue for one guild; ``songs[0]`` is the track now playing."""

    guild_id: int
    voice_channel_id: int
    songs: list[Track] = field(default_factory=list)
    previous_songs: list[Track] = field(default_factory=list)
    volume: int = 50
    repeat_mode: RepeatMode = RepeatMode.NONE
    paused: bool = False
    stopped: bool = False
    # Bumped on every start; finish callbacks from older sources are ignored.
    generation: int = 0


class VoiceQueueEngine(PlaybackEngine):
    def __init__(
        self,
        bot: discord.Client,
        settings: PlaybackSettings,
        extractor: YtDlpStreamExtractor | None = None,
    ) -> None:
        if shutil.which(settings.ffmpeg_path) is None:
            raise EngineInitError(ErrorMessages.ENGINE_FFMPEG_MISSING.format(path=settings.ffmpeg_path))

        self._bot = bot
        self._settings = settings
        self._extractor = extractor or YtDlpStreamExtractor(settings.ytdlp_format)
        self._queues: dict[int, GuildQueue] = {}
        self._listeners: dict[EngineEvent, list[EngineListener]] = defaultdict(list)

    # ─────────────────────────────────────────────────────────────────
    # Events
    # ─────────────────────────────────────────────────────────────────

    def on(self, event: EngineEvent, listener: EngineListener) -> None:
        self._listeners[event].append(listener)

    async def _emit(self, event: EngineEvent, *args: Any) -> None:
        for listener in list(self._listeners.get(event, ())):
            try:
                result = listener(*args)
                if inspect.isawaitable(result):
                    await result
            except Exception:
                logger.exception(LogTemplates.ENGINE_LISTENER_FAILED, event.value)

    # ─────────────────────────────────────────────────────────────────
    # Queue access
    # ─────────────────────────────────────────────────────────────────

    def get_queue(self, guild_id: int) -> GuildQueue | None:
        return self._queues.get(guild_id)

    def _require_queue(self, guild_id: int) -> GuildQueue:
        queue = self._queues.get(guild_id)
        if queue is None:
            raise NoQueueError(ErrorMessages.ENGINE_NO_QUEUE.format(guild_id=guild_id))
        return queue

    def _voice_client(self, guild_id: int) -> discord.VoiceClient | None:
        guild = self._bot.get_guild(guild_id)
        if guild is None:
            return None
        vc = guild.voice_client
        return vc if isinstance(vc, discord.VoiceClient) else None

    # ─────────────────────────────────────────────────────────────────
    # Voice connection
    # ─────────────────────────────────────────────────────────────────

    def is_connected(self, guild_id: int) -> bool:
        vc = self._voice_client(guild_id)
        return vc is not None and vc.is_connected()

    async def join(self, guild_id: int, channel_id: int) -> None:
        await self._ensure_connected(guild_id, channel_id)

    async def leave(self, guild_id: int) -> None:
        queue = self._queues.pop(guild_id, None)
        if queue is not None:
            queue.stopped = True
            queue.generation += 1

        vc = self._voice_client(guild_id)
        if vc is None:
            raise VoiceConnectionError(ErrorMessages.ENGINE_NOT_CONNECTED.format(guild_id=guild_id))
        await vc.disconnect(force=True)
        logger.info(LogTemplates.VOICE_DISCONNECTED, guild_id)

    async def _ensure_connected(self, guild_id: int, channel_id: int) -> discord.VoiceClient:
        """Connect if not connected, move if in a different channel."""
        guild = self._bot.get_guild(guild_id)
        if guild is None:
            raise VoiceConnectionError(ErrorMessages.ENGINE_GUILD_NOT_FOUND.format(guild_id=guild_id))

        channel = guild.get_channel(channel_id)
        if not isinstance(channel, discord.VoiceChannel | discord.StageChannel):
            raise VoiceConnectionError(
                ErrorMessages.ENGINE_CHANNEL_NOT_VOICE.format(channel_id=channel_id)
            )

        vc = self._voice_client(guild_id)
        if vc is not None and not vc.is_connected():
            await vc.disconnect(force=True)
            vc = None

        try:
            async with asyncio.timeout(CONNECT_TIMEOUT):
                if vc is None:
                    vc = await channel.connect(self_deaf=True)
                    logger.info(LogTemplates.VOICE_CONNECTED, channel.name, guild.name)
                elif vc.channel is None or vc.channel.id != channel_id:
                    await vc.move_to(channel)
                    logger.info(LogTemplates.VOICE_MOVED, channel.name)
        except TimeoutError as e:
            raise VoiceConnectionError(
                ErrorMessages.ENGINE_VOICE_TIMEOUT.format(channel_id=channel_id)
            ) from e

        try:
            await guild.change_voice_state(channel=channel, self_deaf=True)
        except Exception as exc:
            logger.debug(LogTemplates.VOICE_SELF_DEAFEN_FAILED, guild_id, exc)

        return vc

    # ─────────────────────────────────────────────────────────────────
    # Playback
    # ─────────────────────────────────────────────────────────────────

    async def play(
        self,
        guild_id: int,
        channel_id: int,
        track: Track,
        *,
        volume: int,
        repeat_mode: RepeatMode,
    ) -> None:
        queue = self._queues.get(guild_id)
        if queue is not None and not queue.stopped and queue.songs:
            queue.songs.append(track)
            await self._emit(EngineEvent.SONG_ADDED, guild_id, track)
            return

        vc = await self._ensure_connected(guild_id, channel_id)
        queue = GuildQueue(
            guild_id=guild_id,
            voice_channel_id=channel_id,
            songs=[track],
            volume=volume,
            repeat_mode=repeat_mode,
        )
        self._queues[guild_id] = queue
        try:
            await self._start_current(queue, vc)
        except Exception:
            if self._queues.get(guild_id) is queue:
                del self._queues[guild_id]
            raise

    async def _start_current(self, queue: GuildQueue, vc: discord.VoiceClient | None = None) -> None:
        vc = vc or self._voice_client(queue.guild_id)
        if vc is None:
            raise VoiceConnectionError(
                ErrorMessages.ENGINE_NOT_CONNECTED.format(guild_id=queue.guild_id)
            )

        track = queue.songs[0]
        queue.generation += 1
        generation = queue.generation

        try:
            info = await self._extractor.extract(track.source_url)
        except StreamExtractionError as e:
            raise StreamUnavailableError(str(e)) from e
        stream_url = info.best_stream_url()
        if stream_url is None:
            raise StreamUnavailableError(ErrorMessages.ENGINE_NO_STREAM.format(url=track.source_url))

        # A newer start (skip, stop, ...) happened while extracting.
        if queue.generation != generation or self._queues.get(queue.guild_id) is not queue:
            return

        if vc.is_playing() or vc.is_paused():
            vc.stop()

        source = discord.PCMVolumeTransformer(
            discord.FFmpegPCMAudio(
                stream_url,
                executable=self._settings.ffmpeg_path,
                before_options=self._before_options(info.http_headers),
                options=self._settings.ffmpeg_options.get("options", "-vn"),
            ),
            volume=queue.volume / 100,
        )

        def after_callback(error: Exception | None = None) -> None:
            if error:
                logger.warning(LogTemplates.PLAYBACK_ERROR, queue.guild_id, error)
            asyncio.run_coroutine_threadsafe(
                self._on_track_end(queue, generation, track, error),
                self._bot.loop,
            )

        vc.play(source, after=after_callback)
        queue.paused = False
        logger.info(LogTemplates.PLAYBACK_STARTED, track.title, queue.guild_id)
        await self._emit(EngineEvent.SONG_START, queue.guild_id, track)

    def _before_options(self, headers: dict[str, str]) -> str:
        base = self._settings.ffmpeg_options.get("before_options", "")
        user_agent = headers.get("User-Agent")
        if not user_agent:
            return base
        return f'{base} -user_agent "{user_agent}"'.strip()

    async def _on_track_end(
        self,
        queue: GuildQueue,
        generation: int,
        track: Track,
        error: Exception | None,
    ) -> None:
        if queue.generation != generation or self._queues.get(queue.guild_id) is not queue:
            return

        if error is not None:
            await self._emit(EngineEvent.ERROR, queue.guild_id, error)
        await self._emit(EngineEvent.SONG_END, queue.guild_id, track)

        if queue.repeat_mode is not RepeatMode.TRACK:
            finished = queue.songs.pop(0)
            queue.previous_songs.append(finished)
            if queue.repeat_mode is RepeatMode.QUEUE:
                queue.songs.append(finished)

        await self._play_next_available(queue)

    async def _play_next_available(self, queue: GuildQueue) -> None:
        """Start the head of the queue, dropping tracks that fail to start."""
        while queue.songs:
            try:
                await self._start_current(queue)
                return
            except Exception as e:
                logger.exception(LogTemplates.PLAYBACK_ADVANCE_FAILED, queue.guild_id)
                await self._emit(EngineEvent.ERROR, queue.guild_id, e)
                queue.songs.pop(0)

        if self._queues.get(queue.guild_id) is queue:
            del self._queues[queue.guild_id]
        # A skip that found nothing playable leaves the old source running.
        vc = self._voice_client(queue.guild_id)
        if vc is not None and (vc.is_playing() or vc.is_paused()):
            vc.stop()
        await self._emit(EngineEvent.QUEUE_EMPTY, queue.guild_id)

    async def _drop_failed_head(self, queue: GuildQueue, error: Exception) -> None:
        """Drop a head that failed to start and keep the queue moving.

        The source that was playing before carries a stale generation, so its
        finish callback can no longer advance the queue.
        """
        if self._queues.get(queue.guild_id) is not queue or not queue.songs:
            return
        logger.warning(LogTemplates.PLAYBACK_HEAD_FAILED, queue.songs[0].title, queue.guild_id, error)
        await self._emit(EngineEvent.ERROR, queue.guild_id, error)
        queue.songs.pop(0)
        await self._play_next_available(queue)

    # ─────────────────────────────────────────────────────────────────
    # Transport controls
    # ─────────────────────────────────────────────────────────────────

    async def pause(self, guild_id: int) -> None:
        queue = self._require_queue(guild_id)
        if queue.paused:
            raise AlreadyPausedError(ErrorMessages.ENGINE_ALREADY_PAUSED)
        vc = self._voice_client(guild_id)
        if vc is not None and vc.is_playing():
            vc.pause()
        queue.paused = True
        logger.debug(LogTemplates.PLAYBACK_PAUSED, guild_id)

    async def resume(self, guild_id: int) -> None:
        queue = self._require_queue(guild_id)
        if not queue.paused:
            raise NotPausedError(ErrorMessages.ENGINE_NOT_PAUSED)
        vc = self._voice_client(guild_id)
        if vc is not None and vc.is_paused():
            vc.resume()
        queue.paused = False
        logger.debug(LogTemplates.PLAYBACK_RESUMED, guild_id)

    async def skip(self, guild_id: int) -> Track:
        queue = self._require_queue(guild_id)
        if len(queue.songs) <= 1:
            raise NoUpNextError(ErrorMessages.ENGINE_NO_UP_NEXT)

        finished = queue.songs.pop(0)
        queue.previous_songs.append(finished)
        if queue.repeat_mode is RepeatMode.QUEUE:
            queue.songs.append(finished)

        try:
            await self._start_current(queue)
        except Exception as e:
            await self._drop_failed_head(queue, e)
            # Report success only when a later track took over.
            if self._queues.get(guild_id) is not queue:
                raise
        return queue.songs[0]

    async def previous(self, guild_id: int) -> Track:
        queue = self._require_queue(guild_id)
        if not queue.previous_songs:
            raise NoPreviousSongError(ErrorMessages.ENGINE_NO_PREVIOUS)

        track = queue.previous_songs.pop()
        queue.songs.insert(0, track)
        try:
            await self._start_current(queue)
        except Exception as e:
            await self._drop_failed_head(queue, e)
            raise
        return track

    async def stop(self, guild_id: int) -> None:
        queue = self._require_queue(guild_id)
        queue.stopped = True
        queue.generation += 1
        del self._queues[guild_id]

        vc = self._voice_client(guild_id)
        if vc is not None and (vc.is_playing() or vc.is_paused()):
            vc.stop()
        logger.info(LogTemplates.PLAYBACK_STOPPED, guild_id)

    async def set_volume(self, guild_id: int, volume: int) -> None:
        queue = self._require_queue(guild_id)
        queue.volume = volume
        vc = self._voice_client(guild_id)
        if vc is not None and isinstance(vc.source, discord.PCMVolumeTransformer):
            vc.source.volume = volume / 100

    async def set_repeat_mode(self, guild_id: int, mode: RepeatMode) -> None:
        queue = self._require_queue(guild_id)
        queue.repeat_mode = mode
