import asyncio
from dataclasses import dataclass, field
from unittest.mock import AsyncMock, MagicMock

import pytest

from youtube_music_bot.application.interfaces.interaction import (
    BotStatus,
    InteractionRequest,
    InteractionResponder,
)
from youtube_music_bot.application.interfaces.playback_engine import PlaybackEngine
from youtube_music_bot.application.interfaces.track_resolver import TrackResolver
from youtube_music_bot.domain.music.entities import Track
from youtube_music_bot.domain.shared.enums import RepeatMode

GUILD_ID = 111111111111111111
CHANNEL_ID = 222222222222222222


# ============================================================================
# Fakes
# ============================================================================


@dataclass
class FakeQueue:
    songs: list = field(default_factory=list)
    previous_songs: list = field(default_factory=list)
    paused: bool = False
    stopped: bool = False
    volume: int = 50
    repeat_mode: RepeatMode = RepeatMode.NONE


class FakeEngine(PlaybackEngine):
    """In-memory engine with the same queue rules as the voice engine."""

    def __init__(self) -> None:
        self.queues: dict[int, FakeQueue] = {}
        self.connected: set[int] = set()
        self.listeners: dict = {}
        self.play_calls: list[dict] = []
        self.pause_calls = 0
        self.play_delay = 0.0
        self.play_error: Exception | None = None

    def get_queue(self, guild_id):
        return self.queues.get(guild_id)

    def _require(self, guild_id) -> FakeQueue:
        queue = self.queues.get(guild_id)
        if queue is None:
            raise RuntimeError(f"There is no queue in guild {guild_id}")
        return queue

    async def play(self, guild_id, channel_id, track, *, volume, repeat_mode):
        self.play_calls.append(
            {"guild_id": guild_id, "channel_id": channel_id, "track": track,
             "volume": volume, "repeat_mode": repeat_mode}
        )
        if self.play_delay:
            await asyncio.sleep(self.play_delay)
        if self.play_error is not None:
            raise self.play_error

        queue = self.queues.get(guild_id)
        if queue is not None and queue.songs and not queue.stopped:
            queue.songs.append(track)
            return
        self.connected.add(guild_id)
        self.queues[guild_id] = FakeQueue(songs=[track], volume=volume, repeat_mode=repeat_mode)

    async def pause(self, guild_id):
        self.pause_calls += 1
        self._require(guild_id).paused = True

    async def resume(self, guild_id):
        self._require(guild_id).paused = False

    async def stop(self, guild_id):
        self._require(guild_id)
        del self.queues[guild_id]

    async def skip(self, guild_id):
        queue = self._require(guild_id)
        if len(queue.songs) <= 1:
            raise RuntimeError("There is no up next song")
        queue.previous_songs.append(queue.songs.pop(0))
        return queue.songs[0]

    async def previous(self, guild_id):
        queue = self._require(guild_id)
        if not queue.previous_songs:
            raise RuntimeError("There is no previous song in this queue")
        track = queue.previous_songs.pop()
        queue.songs.insert(0, track)
        return track

    async def set_volume(self, guild_id, volume):
        self._require(guild_id).volume = volume

    async def set_repeat_mode(self, guild_id, mode):
        self._require(guild_id).repeat_mode = mode

    def is_connected(self, guild_id):
        return guild_id in self.connected

    async def join(self, guild_id, channel_id):
        self.connected.add(guild_id)

    async def leave(self, guild_id):
        self.queues.pop(guild_id, None)
        self.connected.discard(guild_id)

    def on(self, event, listener):
        self.listeners.setdefault(event, []).append(listener)


class FakeResponder(InteractionResponder):
    """Records everything the interpreter sends back."""

    def __init__(self) -> None:
        self.replies: list[tuple[str, bool]] = []
        self.edits: list[str] = []
        self.follow_ups: list[tuple[str, bool]] = []
        self.deferred = False
        self.acknowledged = False

    @property
    def is_acknowledged(self) -> bool:
        return self.acknowledged

    @property
    def is_deferred(self) -> bool:
        return self.deferred

    async def defer(self) -> None:
        self.deferred = True
        self.acknowledged = True

    async def reply(self, content, *, ephemeral=False):
        self.replies.append((content, ephemeral))
        self.acknowledged = True

    async def edit(self, content):
        self.edits.append(content)

    async def follow_up(self, content, *, ephemeral=True):
        self.follow_ups.append((content, ephemeral))


# ============================================================================
# Domain Fixtures
# ============================================================================


def make_track(video_id: str = "dQw4w9WgXcQ", title: str = "Never Gonna Give You Up",
               uploader: str = "Rick Astley") -> Track:
    return Track(
        id=video_id,
        title=title,
        uploader_name=uploader,
        source_url=f"https://www.youtube.com/watch?v={video_id}",
    )


@pytest.fixture
def sample_track():
    """Create a sample track for testing."""
    return make_track()


@pytest.fixture
def other_track():
    """Create a second, distinct track."""
    return make_track("9bZkp7q19f0", "Gangnam Style", "officialpsy")


# ============================================================================
# Application Fixtures
# ============================================================================


@pytest.fixture
def fake_engine():
    return FakeEngine()


@pytest.fixture
def session_store():
    from youtube_music_bot.application.services.session_store import SessionStore

    return SessionStore()


@pytest.fixture
def lifecycle(fake_engine):
    """Engine lifecycle that is already READY with the fake engine."""
    from youtube_music_bot.application.services.engine_lifecycle import EngineLifecycle

    lc = EngineLifecycle(lambda: fake_engine, retry_delay=0)
    assert lc.try_initialize()
    return lc


@pytest.fixture
def adapter(lifecycle, session_store):
    from youtube_music_bot.application.services.engine_adapter import PlaybackEngineAdapter

    return PlaybackEngineAdapter(lifecycle=lifecycle, session_store=session_store, play_timeout=1.0)


@pytest.fixture
def resolver(sample_track):
    """Track resolver mock returning the sample track."""
    mock = MagicMock(spec=TrackResolver)
    mock.resolve = AsyncMock(return_value=sample_track)
    return mock


@pytest.fixture
def bot_status():
    mock = MagicMock(spec=BotStatus)
    mock.update_presence = AsyncMock()
    mock.guild_count = MagicMock(return_value=3)
    return mock


@pytest.fixture
def interpreter(adapter, resolver, bot_status):
    from youtube_music_bot.application.commands.interpreter import CommandInterpreter
    from youtube_music_bot.application.commands.play_track import PlayTrackHandler

    return CommandInterpreter(
        adapter=adapter,
        play_handler=PlayTrackHandler(resolver=resolver, adapter=adapter),
        bot_status=bot_status,
        environment="test",
    )


@pytest.fixture
def responder():
    return FakeResponder()


@pytest.fixture
def make_request():
    """Build an InteractionRequest from a guild member sitting in voice."""

    def _make(command: str, *, in_voice: bool = True, guild: bool = True, **options):
        return InteractionRequest(
            command_name=command,
            user_name="tester#0001",
            guild_id=GUILD_ID if guild else None,
            guild_name="Test Guild" if guild else None,
            voice_channel_id=CHANNEL_ID if in_voice else None,
            options=options,
        )

    return _make


@pytest.fixture
def track_factory():
    return make_track


@pytest.fixture
def guild_id():
    return GUILD_ID


@pytest.fixture
def channel_id():
    return CHANNEL_ID


@pytest.fixture
def responder_factory():
    return FakeResponder
