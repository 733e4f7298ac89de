"""Two-state lifecycle around the playback engine handle.

The engine is built once the gateway reports ``ready``. A failed build is
retried by a small supervisor; afterwards, callers that find the engine
missing may request exactly one extra attempt before giving up.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

from youtube_music_bot.domain.shared.constants import PlaybackConstants
from youtube_music_bot.domain.shared.enums import EngineEvent, EngineState
from youtube_music_bot.domain.shared.exceptions import EngineNotReadyError
from youtube_music_bot.domain.shared.messages import LogTemplates

if TYPE_CHECKING:
    from ..interfaces.playback_engine import EngineFactory, PlaybackEngine

logger = logging.getLogger(__name__)


class EngineLifecycle:
    """Holds the engine as either UNINITIALIZED or READY(handle)."""

    def __init__(
        self,
        factory: EngineFactory,
        *,
        retry_delay: float = PlaybackConstants.ENGINE_RETRY_DELAY,
        max_attempts: int = PlaybackConstants.ENGINE_START_ATTEMPTS,
    ) -> None:
        self._factory = factory
        self._retry_delay = retry_delay
        self._max_attempts = max(1, max_attempts)
        self._engine: PlaybackEngine | None = None
        self._starting: asyncio.Task[bool] | None = None

    @property
    def state(self) -> EngineState:
        return EngineState.READY if self._engine is not None else EngineState.UNINITIALIZED

    @property
    def is_ready(self) -> bool:
        return self._engine is not None

    @property
    def engine(self) -> PlaybackEngine:
        if self._engine is None:
            raise EngineNotReadyError()
        return self._engine

    def try_initialize(self, attempt: int = 1) -> bool:
        """Build the engine once. Idempotent when already READY."""
        if self._engine is not None:
            return True

        try:
            engine = self._factory()
        except Exception as e:
            logger.error(LogTemplates.ENGINE_INIT_FAILED, attempt, self._max_attempts, e)
            return False

        self._register_instrumentation(engine)
        self._engine = engine
        logger.info(LogTemplates.ENGINE_INITIALIZED)
        return True

    async def start(self) -> bool:
        """Supervised start: retry with a fixed delay up to ``max_attempts`` times.

        Concurrent callers (e.g. repeated ``ready`` events) share one attempt.
        """
        if self._engine is not None:
            return True
        if self._starting is None or self._starting.done():
            self._starting = asyncio.create_task(self._supervise())
        return await asyncio.shield(self._starting)

    async def _supervise(self) -> bool:
        for attempt in range(1, self._max_attempts + 1):
            if self.try_initialize(attempt):
                return True
            if attempt < self._max_attempts:
                logger.info(LogTemplates.ENGINE_INIT_RETRY, self._retry_delay)
                await asyncio.sleep(self._retry_delay)

        logger.error(LogTemplates.ENGINE_INIT_GAVE_UP, self._max_attempts)
        return False

    def reinitialize_once(self) -> bool:
        """Single lazy attempt used by callers that found the engine missing."""
        if self._engine is not None:
            return True
        logger.warning(LogTemplates.ENGINE_LAZY_REINIT)
        return self.try_initialize()

    # ─────────────────────────────────────────────────────────────────
    # Instrumentation
    # ─────────────────────────────────────────────────────────────────

    def _register_instrumentation(self, engine: PlaybackEngine) -> None:
        engine.on(EngineEvent.SONG_START, _log_song_start)
        engine.on(EngineEvent.SONG_ADDED, _log_song_added)
        engine.on(EngineEvent.SONG_END, _log_song_end)
        engine.on(EngineEvent.QUEUE_EMPTY, _log_queue_empty)
        engine.on(EngineEvent.ERROR, _log_engine_error)


def _log_song_start(guild_id: int, track: Any) -> None:
    logger.info(LogTemplates.ENGINE_NOW_PLAYING, getattr(track, "title", track), guild_id)


def _log_song_added(guild_id: int, track: Any) -> None:
    logger.info(LogTemplates.ENGINE_SONG_ADDED, getattr(track, "title", track), guild_id)


def _log_song_end(guild_id: int, track: Any) -> None:
    logger.debug(LogTemplates.ENGINE_SONG_FINISHED, getattr(track, "title", track), guild_id)


def _log_queue_empty(guild_id: int) -> None:
    logger.info(LogTemplates.ENGINE_QUEUE_FINISHED, guild_id)


def _log_engine_error(guild_id: int, error: BaseException) -> None:
    logger.error(LogTemplates.ENGINE_ERROR, guild_id, error)
