"""
Application Commands

Command objects, their handlers, and the slash-command interpreter that
drives them.
"""

from youtube_music_bot.application.commands.interpreter import CommandInterpreter
from youtube_music_bot.application.commands.play_track import (
    PlayTrackCommand,
    PlayTrackHandler,
    PlayTrackResult,
    PlayTrackStatus,
)

__all__ = [
    # Interpreter
    "CommandInterpreter",
    # Play
    "PlayTrackCommand",
    "PlayTrackHandler",
    "PlayTrackResult",
    "PlayTrackStatus",
]
