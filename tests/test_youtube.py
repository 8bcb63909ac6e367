"""Tests for YouTube URL helpers and Data API lookups (httpx is mocked)."""

from __future__ import annotations

from typing import Any
from unittest.mock import patch

import httpx
import pytest

from video_insights.config import Settings
from video_insights.services.youtube import (
    YouTubeError,
    extract_video_id,
    fetch_captions,
    fetch_video_meta,
    validate_youtube_url,
)

VIDEO_ID = "dQw4w9WgXcQ"


def _settings(**overrides: Any) -> Settings:
    values: dict[str, Any] = {"youtube_api_key": "", "youtube_oauth_token": ""}
    values.update(overrides)
    return Settings(_env_file=None, **values)  # type: ignore[call-arg]


def _response(status: int, payload: dict[str, Any]) -> httpx.Response:
    return httpx.Response(status, json=payload, request=httpx.Request("GET", "https://www.googleapis.com/youtube/v3"))


class TestExtractVideoId:
    @pytest.mark.parametrize(
        "url",
        [
            f"https://www.youtube.com/watch?v={VIDEO_ID}",
            f"https://www.youtube.com/watch?feature=share&v={VIDEO_ID}",
            f"https://youtu.be/{VIDEO_ID}?t=42",
        ],
    )
    def test_known_shapes(self, url: str) -> None:
        assert extract_video_id(url) == VIDEO_ID

    def test_no_id(self) -> None:
        assert extract_video_id("https://www.youtube.com/channel/abc") is None


class TestValidateYouTubeUrl:
    def test_valid(self) -> None:
        result = validate_youtube_url(f"https://youtu.be/{VIDEO_ID}")
        assert result.valid
        assert result.video_id == VIDEO_ID

    def test_not_youtube(self) -> None:
        result = validate_youtube_url(f"https://vimeo.com/watch?v={VIDEO_ID}")
        assert not result.valid
        assert result.error == "Invalid YouTube URL"

    def test_youtube_without_id(self) -> None:
        result = validate_youtube_url("https://www.youtube.com/feed/trending")
        assert not result.valid
        assert result.error == "Could not parse video id"

    def test_wire_shape_is_camel_case(self) -> None:
        dumped = validate_youtube_url(f"https://youtu.be/{VIDEO_ID}").model_dump(by_alias=True)
        assert dumped["videoId"] == VIDEO_ID


class TestFetchVideoMeta:
    def test_requires_api_key(self) -> None:
        with pytest.raises(YouTubeError, match="API key missing"):
            fetch_video_meta(VIDEO_ID, _settings())

    def test_rejects_bad_id(self) -> None:
        with pytest.raises(YouTubeError, match="Invalid video id"):
            fetch_video_meta("short", _settings(youtube_api_key="key"))

    def test_maps_snippet(self) -> None:
        payload = {
            "items": [
                {
                    "snippet": {
                        "title": "Bread 101",
                        "description": "Baking basics",
                        "channelTitle": "Kitchen",
                        "publishedAt": "2024-01-01T00:00:00Z",
                        "thumbnails": {"default": {"url": "https://i.ytimg.com/x.jpg"}},
                    },
                    "statistics": {"viewCount": "10"},
                    "contentDetails": {"duration": "PT4M13S"},
                }
            ]
        }
        with patch("video_insights.services.youtube.httpx.get", return_value=_response(200, payload)) as mock_get:
            meta = fetch_video_meta(VIDEO_ID, _settings(youtube_api_key="key"))

        assert meta.title == "Bread 101"
        assert meta.channel_title == "Kitchen"
        assert meta.duration == "PT4M13S"
        assert meta.statistics == {"viewCount": "10"}
        params = mock_get.call_args.kwargs["params"]
        assert params == {"id": VIDEO_ID, "part": "snippet,contentDetails,statistics", "key": "key"}

    def test_video_not_found(self) -> None:
        with patch("video_insights.services.youtube.httpx.get", return_value=_response(200, {"items": []})):
            with pytest.raises(YouTubeError, match="Video not found"):
                fetch_video_meta(VIDEO_ID, _settings(youtube_api_key="key"))

    def test_http_error(self) -> None:
        with patch("video_insights.services.youtube.httpx.get", return_value=_response(403, {"error": {}})):
            with pytest.raises(YouTubeError, match="403"):
                fetch_video_meta(VIDEO_ID, _settings(youtube_api_key="key"))

    def test_network_error(self) -> None:
        with patch("video_insights.services.youtube.httpx.get", side_effect=httpx.ConnectError("down")):
            with pytest.raises(YouTubeError, match="request failed"):
                fetch_video_meta(VIDEO_ID, _settings(youtube_api_key="key"))


class TestFetchCaptions:
    def test_requires_oauth_token(self) -> None:
        with pytest.raises(YouTubeError, match="OAuth"):
            fetch_captions(VIDEO_ID, _settings(youtube_api_key="key"))

    def test_sends_bearer_token(self) -> None:
        payload = {"items": [{"id": "cap1", "snippet": {"language": "en"}}]}
        with patch("video_insights.services.youtube.httpx.get", return_value=_response(200, payload)) as mock_get:
            result = fetch_captions(VIDEO_ID, _settings(youtube_oauth_token="tok"))

        assert result == payload
        assert mock_get.call_args.kwargs["headers"] == {"Authorization": "Bearer tok"}
        assert "key" not in mock_get.call_args.kwargs["params"]
