"""
Tests for yt-dlp stream extraction

Covers StreamInfo parsing, best-format selection, the TTL cache, and
failure translation into StreamExtractionError.
"""

from unittest.mock import MagicMock, patch

import pytest

from youtube_music_bot.infrastructure.audio.models import CACHE_TTL, StreamInfo
from youtube_music_bot.infrastructure.audio.ytdlp_stream import (
    StreamExtractionError,
    YtDlpStreamExtractor,
)

URL = "https://www.youtube.com/watch?v=dQw4w9WgXcQ"


def _mock_youtubedl(mock_cls, *, info=None, error=None):
    ydl = MagicMock()
    if error is not None:
        ydl.extract_info.side_effect = error
    else:
        ydl.extract_info.return_value = info
    mock_cls.return_value.__enter__.return_value = ydl
    return ydl


class TestStreamInfo:
    """Tests for the trimmed yt-dlp result model."""

    def test_direct_url_preferred(self):
        info = StreamInfo.model_validate({"url": "https://direct", "formats": [{"url": "https://f", "abr": 300}]})

        assert info.best_stream_url() == "https://direct"

    def test_highest_bitrate_audio_format(self):
        info = StreamInfo.model_validate(
            {
                "url": "",
                "formats": [
                    {"url": "https://low", "acodec": "opus", "abr": 48},
                    {"url": "https://video-only", "acodec": "none", "abr": 999},
                    {"url": "https://high", "acodec": "opus", "abr": 160},
                ],
            }
        )

        assert info.best_stream_url() == "https://high"

    def test_no_playable_format(self):
        assert StreamInfo.model_validate({"formats": [{"acodec": "none"}]}).best_stream_url() is None

    def test_headers_coerced_to_strings(self):
        info = StreamInfo.model_validate({"http_headers": {"User-Agent": "UA", "X-Num": 3, "X-None": None}})

        assert info.http_headers == {"User-Agent": "UA", "X-Num": "3"}

    def test_non_dict_headers_dropped(self):
        assert StreamInfo.model_validate({"http_headers": "oops"}).http_headers == {}


class TestYtDlpStreamExtractor:
    """Tests for YtDlpStreamExtractor."""

    async def test_extract_returns_stream_info(self):
        extractor = YtDlpStreamExtractor()
        with patch("youtube_music_bot.infrastructure.audio.ytdlp_stream.YoutubeDL") as mock_cls:
            ydl = _mock_youtubedl(mock_cls, info={"url": "https://media", "title": "Song", "id": "x"})

            info = await extractor.extract(URL)

        assert info.url == "https://media"
        assert info.title == "Song"
        ydl.extract_info.assert_called_once_with(URL, download=False)
        params = mock_cls.call_args.kwargs["params"]
        assert params["format"] == "bestaudio/best"
        assert params["noplaylist"] is True

    async def test_custom_format(self):
        extractor = YtDlpStreamExtractor("251/bestaudio")
        with patch("youtube_music_bot.infrastructure.audio.ytdlp_stream.YoutubeDL") as mock_cls:
            _mock_youtubedl(mock_cls, info={"url": "https://media"})

            await extractor.extract(URL)

        assert mock_cls.call_args.kwargs["params"]["format"] == "251/bestaudio"

    async def test_cached_within_ttl(self):
        extractor = YtDlpStreamExtractor()
        with patch("youtube_music_bot.infrastructure.audio.ytdlp_stream.YoutubeDL") as mock_cls:
            ydl = _mock_youtubedl(mock_cls, info={"url": "https://media"})

            first = await extractor.extract(URL)
            second = await extractor.extract(URL)

        assert first is second
        ydl.extract_info.assert_called_once()

    def test_expired_entry_refetched(self):
        extractor = YtDlpStreamExtractor()
        with (
            patch("youtube_music_bot.infrastructure.audio.ytdlp_stream.YoutubeDL") as mock_cls,
            patch("youtube_music_bot.infrastructure.audio.ytdlp_stream.time.monotonic") as mock_time,
        ):
            ydl = _mock_youtubedl(mock_cls, info={"url": "https://media"})
            mock_time.return_value = 1000.0
            extractor._extract_sync(URL)
            mock_time.return_value = 1000.0 + CACHE_TTL + 1

            extractor._extract_sync(URL)

        assert ydl.extract_info.call_count == 2

    async def test_extraction_error_wrapped(self):
        extractor = YtDlpStreamExtractor()
        with patch("youtube_music_bot.infrastructure.audio.ytdlp_stream.YoutubeDL") as mock_cls:
            _mock_youtubedl(mock_cls, error=RuntimeError("Sign in to confirm you're not a bot"))

            with pytest.raises(StreamExtractionError, match="not a bot"):
                await extractor.extract(URL)

    async def test_empty_result(self):
        extractor = YtDlpStreamExtractor()
        with patch("youtube_music_bot.infrastructure.audio.ytdlp_stream.YoutubeDL") as mock_cls:
            _mock_youtubedl(mock_cls, info=None)

            with pytest.raises(StreamExtractionError):
                await extractor.extract(URL)
