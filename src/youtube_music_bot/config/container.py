"""Dependency Injection Container

Builds the application's object graph lazily. Components are created on first
access and cached; the playback engine itself is built later by the engine
lifecycle, once the Discord gateway is ready.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ..domain.shared.messages import ErrorMessages

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from discord.ext.commands import Bot

    from ..application.commands.interpreter import CommandInterpreter
    from ..application.commands.play_track import PlayTrackHandler
    from ..application.interfaces.interaction import BotStatus
    from ..application.interfaces.playback_engine import PlaybackEngine
    from ..application.interfaces.track_resolver import TrackResolver
    from ..application.services.engine_adapter import PlaybackEngineAdapter
    from ..application.services.engine_lifecycle import EngineLifecycle
    from ..application.services.session_store import SessionStore
    from .settings import Settings


@dataclass
class Container:
    """Dependency injection container.

    Components are lazily initialized when first accessed.
    """

    settings: Settings
    started_at: float = field(default_factory=time.monotonic)
    _bot: Bot | None = None

    _session_store: SessionStore | None = None
    _track_resolver: TrackResolver | None = None
    _engine_lifecycle: EngineLifecycle | None = None
    _playback_adapter: PlaybackEngineAdapter | None = None
    _play_track_handler: PlayTrackHandler | None = None
    _bot_status: BotStatus | None = None
    _command_interpreter: CommandInterpreter | None = None

    def set_bot(self, bot: Bot) -> None:
        """Set the Discord bot instance."""
        self._bot = bot

    @property
    def bot(self) -> Bot:
        """Get the Discord bot instance."""
        if self._bot is None:
            raise RuntimeError(ErrorMessages.BOT_NOT_INITIALIZED)
        return self._bot

    # === State ===

    @property
    def session_store(self) -> SessionStore:
        if self._session_store is None:
            from ..application.services.session_store import SessionStore

            self._session_store = SessionStore()
        return self._session_store

    # === Infrastructure Adapters ===

    @property
    def track_resolver(self) -> TrackResolver:
        """Get the YouTube Data API resolver."""
        if self._track_resolver is None:
            from ..infrastructure.search.youtube_resolver import YouTubeDataResolver

            self._track_resolver = YouTubeDataResolver(self.settings.youtube)
        return self._track_resolver

    def build_engine(self) -> PlaybackEngine:
        """Engine factory handed to the lifecycle; raises when FFmpeg is missing."""
        from ..infrastructure.audio.queue_engine import VoiceQueueEngine

        return VoiceQueueEngine(self.bot, self.settings.playback)

    @property
    def bot_status(self) -> BotStatus:
        if self._bot_status is None:
            from ..infrastructure.discord.status import DiscordBotStatus

            self._bot_status = DiscordBotStatus(self.bot)
        return self._bot_status

    # === Application Services ===

    @property
    def engine_lifecycle(self) -> EngineLifecycle:
        """Get the playback engine lifecycle."""
        if self._engine_lifecycle is None:
            from ..application.services.engine_lifecycle import EngineLifecycle

            self._engine_lifecycle = EngineLifecycle(
                self.build_engine,
                retry_delay=self.settings.playback.engine_retry_delay,
                max_attempts=self.settings.playback.engine_start_attempts,
            )
        return self._engine_lifecycle

    @property
    def playback_adapter(self) -> PlaybackEngineAdapter:
        """Get the playback engine adapter."""
        if self._playback_adapter is None:
            from ..application.services.engine_adapter import PlaybackEngineAdapter

            self._playback_adapter = PlaybackEngineAdapter(
                lifecycle=self.engine_lifecycle,
                session_store=self.session_store,
                play_timeout=self.settings.playback.play_timeout,
            )
        return self._playback_adapter

    # === Command Handlers ===

    @property
    def play_track_handler(self) -> PlayTrackHandler:
        if self._play_track_handler is None:
            from ..application.commands.play_track import PlayTrackHandler

            self._play_track_handler = PlayTrackHandler(
                resolver=self.track_resolver,
                adapter=self.playback_adapter,
            )
        return self._play_track_handler

    @property
    def command_interpreter(self) -> CommandInterpreter:
        """Get the slash-command interpreter."""
        if self._command_interpreter is None:
            from ..application.commands.interpreter import CommandInterpreter

            self._command_interpreter = CommandInterpreter(
                adapter=self.playback_adapter,
                play_handler=self.play_track_handler,
                bot_status=self.bot_status,
                environment=self.settings.environment,
                started_at=self.started_at,
            )
        return self._command_interpreter

    # === Lifecycle ===

    async def shutdown(self) -> None:
        """Let abandoned plays settle so their outcome is logged."""
        if self._playback_adapter is not None:
            await self._playback_adapter.shutdown()
