"""Port interface for turning a query or URL into a Track."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ...domain.music.entities import Track


class TrackResolver(ABC):
    """Interface for resolving free-text queries and URLs to playable tracks."""

    @abstractmethod
    async def resolve(self, query: str) -> Track | None:
        """Resolve a query to a track.

        Implementations never raise: timeouts, empty results, and collaborator
        errors all resolve to ``None``.
        """
        ...
