"""YouTube helpers: URL validation and YouTube Data API v3 lookups."""

from __future__ import annotations

import logging
import re
from typing import Any

import httpx

from video_insights.config import Settings
from video_insights.providers.models import ResultModel

logger = logging.getLogger(__name__)

YOUTUBE_API_BASE = "https://www.googleapis.com/youtube/v3"
REQUEST_TIMEOUT = 15.0

_WATCH_ID_RE = re.compile(r"[?&]v=([\w-]{11})")
_SHORT_ID_RE = re.compile(r"youtu\.be/([\w-]{11})")
_YOUTUBE_URL_RE = re.compile(r"^(https?://)?(www\.)?(youtube\.com|youtu\.be)/.+")
VIDEO_ID_RE = re.compile(r"^[\w-]{11}$")


class YouTubeError(Exception):
    """A YouTube lookup could not be completed."""


class UrlValidation(ResultModel):
    valid: bool
    video_id: str | None = None
    error: str | None = None


class VideoMeta(ResultModel):
    id: str
    title: str = ""
    description: str = ""
    channel_title: str = ""
    published_at: str | None = None
    thumbnails: dict[str, Any] = {}
    statistics: dict[str, Any] = {}
    duration: str | None = None


def extract_video_id(url: str) -> str | None:
    match = _WATCH_ID_RE.search(url) or _SHORT_ID_RE.search(url)
    return match.group(1) if match else None


def validate_youtube_url(url: str) -> UrlValidation:
    """Check that *url* points at YouTube and carries an 11-character video id."""
    if not _YOUTUBE_URL_RE.match(url.strip()):
        return UrlValidation(valid=False, error="Invalid YouTube URL")
    video_id = extract_video_id(url)
    if not video_id:
        return UrlValidation(valid=False, error="Could not parse video id")
    return UrlValidation(valid=True, video_id=video_id)


def _check_video_id(video_id: str) -> None:
    if not VIDEO_ID_RE.match(video_id):
        raise YouTubeError(f"Invalid video id: {video_id!r}")


def _get(path: str, params: dict[str, str], headers: dict[str, str] | None = None) -> dict[str, Any]:
    try:
        response = httpx.get(
            f"{YOUTUBE_API_BASE}/{path}",
            params=params,
            headers=headers,
            timeout=REQUEST_TIMEOUT,
        )
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise YouTubeError(f"YouTube API returned {exc.response.status_code}") from exc
    except httpx.HTTPError as exc:
        raise YouTubeError(f"YouTube API request failed: {exc}") from exc
    data: dict[str, Any] = response.json()
    return data


def fetch_video_meta(video_id: str, settings: Settings) -> VideoMeta:
    """Look up title, channel, statistics and duration for *video_id*.

    Raises:
        YouTubeError: No API key is configured, the request failed, or the
            video does not exist.
    """
    _check_video_id(video_id)
    if not settings.youtube_api_key:
        raise YouTubeError("YouTube API key missing")

    data = _get(
        "videos",
        {"id": video_id, "part": "snippet,contentDetails,statistics", "key": settings.youtube_api_key},
    )
    items = data.get("items") or []
    if not items:
        raise YouTubeError("Video not found")

    item = items[0]
    snippet = item.get("snippet", {})
    logger.info("Fetched metadata for video %s", video_id)
    return VideoMeta(
        id=video_id,
        title=snippet.get("title", ""),
        description=snippet.get("description", ""),
        channel_title=snippet.get("channelTitle", ""),
        published_at=snippet.get("publishedAt"),
        thumbnails=snippet.get("thumbnails", {}),
        statistics=item.get("statistics", {}),
        duration=item.get("contentDetails", {}).get("duration"),
    )


def fetch_captions(video_id: str, settings: Settings) -> dict[str, Any]:
    """List caption tracks for *video_id*. The captions endpoint needs an OAuth token."""
    _check_video_id(video_id)
    if not settings.youtube_oauth_token:
        raise YouTubeError("Captions download requires OAuth token")

    params = {"videoId": video_id, "part": "snippet"}
    if settings.youtube_api_key:
        params["key"] = settings.youtube_api_key
    return _get(
        "captions",
        params,
        headers={"Authorization": f"Bearer {settings.youtube_oauth_token}"},
    )
