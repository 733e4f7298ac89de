"""
Unit Tests for the Music and Event Cogs

Tests for:
- Every slash command forwarding an InteractionRequest to the interpreter
- Option passing for /play, /volume, /repeat
- Extension setup requiring a container
- Gateway and guild event logging
"""

import logging
from unittest.mock import AsyncMock, MagicMock

import discord
import pytest
from discord import app_commands

from youtube_music_bot.domain.shared.enums import CommandName
from youtube_music_bot.infrastructure.discord.cogs import event_cog, music_cog
from youtube_music_bot.infrastructure.discord.cogs.event_cog import EventCog
from youtube_music_bot.infrastructure.discord.cogs.music_cog import MusicCog
from youtube_music_bot.infrastructure.discord.responder import DiscordInteractionResponder


@pytest.fixture
def mock_container():
    container = MagicMock()
    container.command_interpreter.handle = AsyncMock()
    return container


@pytest.fixture
def cog(mock_container):
    return MusicCog(MagicMock(), mock_container)


@pytest.fixture
def interaction():
    member = MagicMock(spec=discord.Member)
    member.voice = MagicMock()
    member.voice.channel.id = 222
    member.__str__.return_value = "tester"

    interaction = MagicMock()
    interaction.guild_id = 111
    interaction.guild.name = "Test Guild"
    interaction.user = member
    return interaction


class TestMusicCog:
    """Tests for command forwarding."""

    def test_registers_every_command(self, cog):
        names = {command.name for command in cog.get_app_commands()}

        assert names == {name.value for name in CommandName}

    async def test_play_forwards_request(self, cog, mock_container, interaction):
        await cog.play.callback(cog, interaction, "never gonna give you up")

        request, responder = mock_container.command_interpreter.handle.await_args.args
        assert request.command_name == "play"
        assert request.guild_id == 111
        assert request.guild_name == "Test Guild"
        assert request.voice_channel_id == 222
        assert request.user_name == "tester"
        assert request.option("query") == "never gonna give you up"
        assert isinstance(responder, DiscordInteractionResponder)

    async def test_volume_forwards_level(self, cog, mock_container, interaction):
        await cog.volume.callback(cog, interaction, 35)

        request = mock_container.command_interpreter.handle.await_args.args[0]
        assert request.command_name == "volume"
        assert request.option("level") == 35

    async def test_repeat_forwards_choice_value(self, cog, mock_container, interaction):
        await cog.repeat.callback(cog, interaction, app_commands.Choice(name="Whole queue", value="queue"))

        request = mock_container.command_interpreter.handle.await_args.args[0]
        assert request.option("mode") == "queue"

    @pytest.mark.parametrize(
        "name", ["pause", "resume", "skip", "previous", "nowplaying", "queue", "stop", "join", "leave", "debug"]
    )
    async def test_no_option_commands(self, cog, mock_container, interaction, name):
        await getattr(cog, name).callback(cog, interaction)

        request = mock_container.command_interpreter.handle.await_args.args[0]
        assert request.command_name == name
        assert request.options == {}

    async def test_dm_interaction_has_no_guild(self, cog, mock_container, interaction):
        interaction.guild_id = None
        interaction.guild = None

        await cog.pause.callback(cog, interaction)

        request = mock_container.command_interpreter.handle.await_args.args[0]
        assert request.guild_id is None
        assert request.voice_channel_id is None


class TestCogSetup:
    """Tests for extension entry points."""

    async def test_music_setup_requires_container(self):
        bot = MagicMock(spec=["add_cog"])

        with pytest.raises(RuntimeError, match="Container not found"):
            await music_cog.setup(bot)

    async def test_music_setup_adds_cog(self, mock_container):
        bot = MagicMock()
        bot.container = mock_container
        bot.add_cog = AsyncMock()

        await music_cog.setup(bot)

        assert isinstance(bot.add_cog.await_args.args[0], MusicCog)

    async def test_event_setup_adds_cog(self):
        bot = MagicMock()
        bot.add_cog = AsyncMock()

        await event_cog.setup(bot)

        assert isinstance(bot.add_cog.await_args.args[0], EventCog)


class TestEventCog:
    """Tests for gateway and guild event logging."""

    async def test_guild_join_logged(self, caplog):
        guild = MagicMock()
        guild.name = "New Server"
        guild.id = 999

        with caplog.at_level(logging.INFO):
            await EventCog(MagicMock()).on_guild_join(guild)

        assert "Bot added to new server: New Server (999)" in caplog.text

    async def test_guild_remove_logged(self, caplog):
        guild = MagicMock()
        guild.name = "Old Server"
        guild.id = 998

        with caplog.at_level(logging.INFO):
            await EventCog(MagicMock()).on_guild_remove(guild)

        assert "Bot removed from server: Old Server (998)" in caplog.text

    async def test_disconnect_logged_as_warning(self, caplog):
        with caplog.at_level(logging.WARNING):
            await EventCog(MagicMock()).on_disconnect()

        assert "WebSocket disconnected" in caplog.text
