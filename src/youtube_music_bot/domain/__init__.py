"""
Domain Layer

Contains the pure data model of the bot:
- shared/: Exceptions, enums, constants, messages, and validators
- music/: Track, per-guild session, and adapter result value objects
"""

from youtube_music_bot.domain.shared.exceptions import DomainError

__all__ = [
    "DomainError",
]
