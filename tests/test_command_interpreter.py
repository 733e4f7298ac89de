"""
Unit Tests for the Slash-Command Interpreter

Tests for:
- DM, unknown-command, and input validation guards (ephemeral, no defer)
- Voice-channel requirement for /play and /join
- Defer-then-edit flow for every command
- Error boundary replying with a generic error in every acknowledgement state
- Presence updates and the /debug report
- A full play/queue/skip/previous/stop session
"""

import logging
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from youtube_music_bot.domain.shared.messages import DiscordUIMessages, ErrorMessages


class TestInterpreterGuards:
    """Tests for checks that answer before any external call."""

    async def test_dm_is_rejected(self, interpreter, responder, make_request, resolver):
        await interpreter.handle(make_request("play", guild=False, query="song"), responder)

        assert responder.replies == [(DiscordUIMessages.STATE_SERVER_ONLY, True)]
        assert responder.deferred is False
        resolver.resolve.assert_not_awaited()

    async def test_dm_reply_failure_is_logged(self, interpreter, responder, make_request, caplog):
        """Should log, not raise, when the DM refusal cannot be sent."""
        responder.reply = AsyncMock(side_effect=RuntimeError("interaction expired"))

        with caplog.at_level(logging.ERROR):
            await interpreter.handle(make_request("pause", guild=False), responder)

        assert "interaction expired" in caplog.text

    async def test_unknown_command(self, interpreter, responder, make_request):
        await interpreter.handle(make_request("shuffle"), responder)

        assert responder.replies == [(DiscordUIMessages.UNKNOWN_COMMAND, True)]
        assert responder.deferred is False

    @pytest.mark.parametrize("query", ["", "   ", "<>", None])
    async def test_empty_query(self, interpreter, responder, make_request, resolver, query):
        await interpreter.handle(make_request("play", query=query), responder)

        assert responder.replies == [(ErrorMessages.EMPTY_QUERY, True)]
        assert responder.deferred is False
        resolver.resolve.assert_not_awaited()

    @pytest.mark.parametrize("level", [101, -1, True, "50", 50.5, None])
    async def test_invalid_volume(self, interpreter, responder, make_request, level):
        await interpreter.handle(make_request("volume", level=level), responder)

        assert responder.replies == [(ErrorMessages.INVALID_VOLUME, True)]
        assert responder.deferred is False

    async def test_invalid_repeat_mode(self, interpreter, responder, make_request):
        await interpreter.handle(make_request("repeat", mode="forever"), responder)

        assert responder.replies == [(ErrorMessages.INVALID_REPEAT_MODE, True)]

    @pytest.mark.parametrize("command", ["play", "join"])
    async def test_voice_required(self, interpreter, responder, make_request, resolver, command):
        """Should refuse /play and /join from members outside voice."""
        await interpreter.handle(make_request(command, in_voice=False, query="song"), responder)

        assert responder.replies == [(DiscordUIMessages.STATE_MUST_BE_IN_VOICE, True)]
        resolver.resolve.assert_not_awaited()

    async def test_other_commands_work_outside_voice(self, interpreter, responder, make_request):
        await interpreter.handle(make_request("queue", in_voice=False), responder)

        assert responder.deferred is True
        assert responder.edits == [DiscordUIMessages.QUEUE_EMPTY]


class TestInterpreterPlay:
    """Tests for /play replies and presence."""

    async def test_play_starts(self, interpreter, responder, make_request, bot_status):
        await interpreter.handle(make_request("play", query="rick astley"), responder)

        assert responder.deferred is True
        assert responder.replies == []
        assert responder.edits == [
            "🎵 Now playing: Never Gonna Give You Up\n**Channel:** Rick Astley"
        ]
        bot_status.update_presence.assert_awaited_with("🎵 Never Gonna Give You Up")

    async def test_play_queues(
        self, interpreter, make_request, resolver, other_track, bot_status, responder_factory
    ):
        await interpreter.handle(make_request("play", query="rick astley"), responder_factory())
        bot_status.update_presence.reset_mock()
        resolver.resolve.return_value = other_track

        responder = responder_factory()
        await interpreter.handle(make_request("play", query="gangnam style"), responder)

        assert responder.edits == ["➕ Added to queue: Gangnam Style\n**Channel:** officialpsy"]
        bot_status.update_presence.assert_not_awaited()

    async def test_play_not_found(self, interpreter, responder, make_request, resolver):
        resolver.resolve.return_value = None

        await interpreter.handle(make_request("play", query="zzzz"), responder)

        assert responder.edits == ["❌ No results found for: zzzz"]

    async def test_play_engine_failure_is_relayed(self, interpreter, responder, make_request, fake_engine):
        fake_engine.play_error = RuntimeError("HTTP Error 429: Too Many Requests")

        await interpreter.handle(make_request("play", query="song"), responder)

        assert responder.edits == [
            "❌ YouTube blocked this request. Try again later or pick a different song."
        ]

    async def test_presence_failure_does_not_break_reply(self, interpreter, responder, make_request, bot_status):
        bot_status.update_presence.side_effect = RuntimeError("gateway closed")

        await interpreter.handle(make_request("play", query="song"), responder)

        assert responder.edits[0].startswith("🎵 Now playing")


class TestInterpreterControls:
    """Tests for control commands after a defer."""

    async def _start(self, interpreter, make_request, responder_factory):
        await interpreter.handle(make_request("play", query="song"), responder_factory())

    async def test_pause_nothing_playing(self, interpreter, responder, make_request):
        await interpreter.handle(make_request("pause"), responder)

        assert responder.deferred is True
        assert responder.edits == ["❌ Nothing is playing"]

    async def test_pause_sets_presence(self, interpreter, responder, make_request, bot_status, responder_factory):
        await self._start(interpreter, make_request, responder_factory)

        await interpreter.handle(make_request("pause"), responder)

        assert responder.edits == [DiscordUIMessages.ACTION_PAUSED]
        bot_status.update_presence.assert_awaited_with(DiscordUIMessages.PRESENCE_PAUSED)

    async def test_resume_restores_track_presence(
        self, interpreter, responder, make_request, bot_status, responder_factory
    ):
        await self._start(interpreter, make_request, responder_factory)
        await interpreter.handle(make_request("pause"), responder)

        await interpreter.handle(make_request("resume"), responder)

        assert responder.edits[-1] == DiscordUIMessages.ACTION_RESUMED
        bot_status.update_presence.assert_awaited_with("🎵 Never Gonna Give You Up")

    async def test_skip_without_next(self, interpreter, responder, make_request, responder_factory):
        await self._start(interpreter, make_request, responder_factory)

        await interpreter.handle(make_request("skip"), responder)

        assert responder.edits == ["❌ No next song in queue"]

    async def test_volume(self, interpreter, responder, make_request, session_store, guild_id):
        await interpreter.handle(make_request("volume", level=75), responder)

        assert responder.edits == ["🔊 Volume set to 75%"]
        assert session_store.get(guild_id).volume == 75

    @pytest.mark.parametrize(
        ("mode", "expected"),
        [
            ("track", "🔂 Repeat mode set to: **track**"),
            ("QUEUE", "🔁 Repeat mode set to: **queue**"),
            ("none", "➡️ Repeat mode set to: **none**"),
        ],
    )
    async def test_repeat(self, interpreter, responder, make_request, mode, expected):
        await interpreter.handle(make_request("repeat", mode=mode), responder)

        assert responder.edits == [expected]

    async def test_stop_resets_presence(self, interpreter, responder, make_request, bot_status, responder_factory):
        await self._start(interpreter, make_request, responder_factory)

        await interpreter.handle(make_request("stop"), responder)

        assert responder.edits == [DiscordUIMessages.ACTION_STOPPED]
        bot_status.update_presence.assert_awaited_with(DiscordUIMessages.PRESENCE_READY)

    async def test_join_and_leave(self, interpreter, make_request, responder_factory):
        join, leave, again = responder_factory(), responder_factory(), responder_factory()

        await interpreter.handle(make_request("join"), join)
        await interpreter.handle(make_request("leave"), leave)
        await interpreter.handle(make_request("leave"), again)

        assert join.edits == ["✅ Joined your voice channel!"]
        assert leave.edits == [DiscordUIMessages.ACTION_LEFT]
        assert again.edits == ["❌ Not connected to a voice channel."]


class TestInterpreterReads:
    """Tests for /nowplaying, /queue and /debug."""

    async def test_nowplaying_nothing(self, interpreter, responder, make_request):
        await interpreter.handle(make_request("nowplaying"), responder)

        assert responder.edits == [DiscordUIMessages.NOTHING_PLAYING]

    async def test_nowplaying_track(self, interpreter, responder, make_request, responder_factory):
        await interpreter.handle(make_request("play", query="song"), responder_factory())

        await interpreter.handle(make_request("nowplaying"), responder)

        content = responder.edits[0]
        assert content.startswith("🎵 **Now Playing**")
        assert "**Never Gonna Give You Up**" in content
        assert "by *Rick Astley*" in content
        assert "🔊 Volume: 50%" in content
        assert "📋 Queue: 1 songs" in content

    async def test_queue_lists_upcoming(
        self, interpreter, responder, make_request, resolver, track_factory, responder_factory
    ):
        for i in range(13):
            resolver.resolve.return_value = track_factory(f"vid{i:08d}", f"Song {i}", "Artist")
            await interpreter.handle(make_request("play", query=f"song {i}"), responder_factory())

        await interpreter.handle(make_request("queue"), responder)

        content = responder.edits[0]
        assert "Song 0 by *Artist*" in content
        assert "📋 **Queue (12 songs):**" in content
        assert "1. Song 1 by *Artist*" in content
        assert "10. Song 10 by *Artist*" in content
        assert "Song 11" not in content
        assert content.endswith("... and 2 more songs")

    async def test_debug(self, interpreter, responder, make_request):
        process = MagicMock()
        process.memory_info.return_value.rss = 64 * 1024 * 1024
        with patch(
            "youtube_music_bot.application.commands.interpreter.psutil.Process",
            return_value=process,
        ):
            await interpreter.handle(make_request("debug"), responder)

        content = responder.edits[0]
        assert "**Playback Engine:** ✅ Initialized" in content
        assert "**Memory Usage:** 64 MB" in content
        assert "**Environment:** test" in content
        assert "**Servers:** 3" in content


class TestInterpreterErrorBoundary:
    """Tests for the generic error reply."""

    async def test_error_after_defer_edits_reply(self, interpreter, responder, make_request, resolver, caplog):
        resolver.resolve.side_effect = RuntimeError("unexpected")

        with caplog.at_level(logging.ERROR):
            await interpreter.handle(make_request("play", query="song"), responder)

        assert responder.edits == [DiscordUIMessages.ERROR_GENERIC]
        assert "Error handling command play" in caplog.text

    async def test_error_before_ack_replies(self, interpreter, responder, make_request):
        with patch.object(interpreter, "_parse_options", side_effect=RuntimeError("unexpected")):
            await interpreter.handle(make_request("pause"), responder)

        assert responder.replies == [(DiscordUIMessages.ERROR_GENERIC, True)]

    async def test_error_after_plain_reply_follows_up(self, interpreter, responder, make_request):
        responder.acknowledged = True

        with patch.object(interpreter, "_parse_options", side_effect=RuntimeError("unexpected")):
            await interpreter.handle(make_request("pause"), responder)

        assert responder.follow_ups == [(DiscordUIMessages.ERROR_GENERIC, True)]

    async def test_error_reply_failure_is_swallowed(self, interpreter, responder, make_request, caplog):
        """Should log when even the error reply cannot be delivered."""
        responder.reply = AsyncMock(side_effect=RuntimeError("unknown interaction"))

        with (
            patch.object(interpreter, "_parse_options", side_effect=RuntimeError("unexpected")),
            caplog.at_level(logging.ERROR),
        ):
            await interpreter.handle(make_request("pause"), responder)

        assert "unknown interaction" in caplog.text


class TestInterpreterSession:
    """End-to-end flow through the interpreter, adapter, and engine."""

    async def test_full_session(
        self, interpreter, make_request, resolver, sample_track, other_track, responder_factory
    ):
        async def run(command, **options):
            responder = responder_factory()
            await interpreter.handle(make_request(command, **options), responder)
            assert responder.deferred is True
            return responder.edits[-1]

        assert (await run("play", query="a")).startswith("🎵 Now playing: Never Gonna Give You Up")

        resolver.resolve.return_value = other_track
        assert (await run("play", query="b")).startswith("➕ Added to queue: Gangnam Style")

        assert await run("skip") == DiscordUIMessages.ACTION_SKIPPED
        assert "**Gangnam Style**" in await run("nowplaying")

        assert await run("previous") == DiscordUIMessages.ACTION_PREVIOUS
        assert "**Never Gonna Give You Up**" in await run("nowplaying")

        assert await run("stop") == DiscordUIMessages.ACTION_STOPPED
        assert await run("nowplaying") == DiscordUIMessages.NOTHING_PLAYING
        assert await run("queue") == DiscordUIMessages.QUEUE_EMPTY
