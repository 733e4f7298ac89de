"""TrackResolver implementation backed by the YouTube Data API v3."""

from __future__ import annotations

import hashlib
import html
import logging
import re
from typing import TYPE_CHECKING, Any, Final

import aiohttp
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from youtube_music_bot.application.interfaces.track_resolver import TrackResolver
from youtube_music_bot.domain.music.entities import UNKNOWN_UPLOADER, Track
from youtube_music_bot.domain.shared.constants import SearchConstants
from youtube_music_bot.domain.shared.messages import LogTemplates
from youtube_music_bot.domain.shared.validators import is_http_url, sanitize_query

if TYPE_CHECKING:
    from youtube_music_bot.config.settings import YouTubeSettings

logger = logging.getLogger(__name__)

YOUTUBE_ID_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"(?:youtube\.com/watch\?(?:.*&)?v=|youtu\.be/|youtube\.com/(?:embed|shorts)/)"
    r"([a-zA-Z0-9_-]{11})",
    re.IGNORECASE,
)


# ── Pydantic models for the search.list payload ────────────────────────


class SearchItemId(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    video_id: str = Field(min_length=1, alias="videoId")


class SearchSnippet(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    title: str = ""
    channel_title: str = Field(default="", alias="channelTitle")


class SearchItem(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    id: SearchItemId
    snippet: SearchSnippet = Field(default_factory=SearchSnippet)


class SearchResponse(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    items: list[SearchItem] = Field(default_factory=list)


def generate_track_id(url: str) -> str:
    match = YOUTUBE_ID_PATTERN.search(url)
    if match:
        return match.group(1)
    return hashlib.sha256(url.encode()).hexdigest()[: SearchConstants.HASH_ID_LENGTH]


class YouTubeDataResolver(TrackResolver):
    """Resolves free text with one ``search.list`` call; URLs pass through untouched."""

    def __init__(self, settings: YouTubeSettings) -> None:
        self._api_key = settings.api_key.get_secret_value()
        self._timeout = aiohttp.ClientTimeout(total=settings.search_timeout)

    async def resolve(self, query: str) -> Track | None:
        query = sanitize_query(query)
        if not query:
            return None

        if is_http_url(query):
            return self._url_track(query)

        try:
            payload = await self._fetch_search(self._search_params(query))
        except TimeoutError:
            logger.warning(LogTemplates.SEARCH_TIMEOUT, query)
            return None
        except aiohttp.ClientResponseError as e:
            logger.warning(LogTemplates.SEARCH_HTTP_ERROR, e.status, query)
            return None
        except Exception:
            logger.exception(LogTemplates.SEARCH_FAILED, query)
            return None

        return self._first_track(payload, query)

    def _search_params(self, query: str) -> dict[str, str | int]:
        return {
            "part": "snippet",
            "q": query,
            "type": "video",
            "maxResults": 1,
            "videoCategoryId": SearchConstants.MUSIC_CATEGORY_ID,
            "order": "relevance",
            "safeSearch": "none",
            "key": self._api_key,
        }

    async def _fetch_search(self, params: dict[str, str | int]) -> Any:
        async with aiohttp.ClientSession(timeout=self._timeout) as session:
            async with session.get(SearchConstants.SEARCH_URL, params=params) as resp:
                resp.raise_for_status()
                return await resp.json()

    @staticmethod
    def _url_track(url: str) -> Track | None:
        scheme, sep, rest = url.partition("://")
        url = f"{scheme.lower()}{sep}{rest}"
        try:
            return Track(id=generate_track_id(url), title=url, source_url=url)
        except ValidationError:
            logger.warning(LogTemplates.SEARCH_BAD_URL, url)
            return None

    @staticmethod
    def _first_track(payload: Any, query: str) -> Track | None:
        try:
            response = SearchResponse.model_validate(payload)
        except ValidationError:
            logger.warning(LogTemplates.SEARCH_FAILED, query)
            return None

        if not response.items:
            logger.info(LogTemplates.SEARCH_NO_RESULTS, query)
            return None

        item = response.items[0]
        video_id = item.id.video_id
        title = html.unescape(item.snippet.title).strip() or video_id
        uploader = html.unescape(item.snippet.channel_title).strip() or UNKNOWN_UPLOADER
        return Track(
            id=video_id,
            title=title,
            uploader_name=uploader,
            source_url=SearchConstants.WATCH_URL.format(video_id=video_id),
        )


__all__ = ["YouTubeDataResolver", "generate_track_id"]
