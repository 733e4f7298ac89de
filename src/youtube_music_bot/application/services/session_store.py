"""In-memory per-guild session store."""

from __future__ import annotations

import logging

from youtube_music_bot.domain.music.entities import Session
from youtube_music_bot.domain.shared.types import DiscordSnowflake

logger = logging.getLogger(__name__)


class SessionStore:
    """Maps guild IDs to sessions; no eviction and no persistence."""

    def __init__(self) -> None:
        self._sessions: dict[int, Session] = {}

    def get(self, guild_id: DiscordSnowflake) -> Session | None:
        return self._sessions.get(guild_id)

    def get_or_create(self, guild_id: DiscordSnowflake) -> Session:
        session = self._sessions.get(guild_id)
        if session is None:
            session = Session(guild_id=guild_id)
            self._sessions[guild_id] = session
            logger.debug("Created session for guild %s", guild_id)
        return session

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, guild_id: object) -> bool:
        return guild_id in self._sessions
