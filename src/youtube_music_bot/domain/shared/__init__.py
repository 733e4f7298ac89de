"""
Shared Domain Kernel

Contains exceptions and enumerations shared across all layers.
"""

from youtube_music_bot.domain.shared.enums import CommandName, EngineEvent, EngineState, RepeatMode
from youtube_music_bot.domain.shared.exceptions import (
    DomainError,
    EngineNotReadyError,
    ValidationError,
)

__all__ = [
    "CommandName",
    "EngineEvent",
    "EngineState",
    "RepeatMode",
    "DomainError",
    "EngineNotReadyError",
    "ValidationError",
]
