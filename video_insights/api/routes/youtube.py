"""YouTube endpoints: URL validation, video metadata and caption listing."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter

from video_insights.api.dependencies import SettingsDep
from video_insights.api.errors import ApiError
from video_insights.api.models import YouTubeUrlRequest
from video_insights.services.youtube import (
    UrlValidation,
    VideoMeta,
    YouTubeError,
    fetch_captions,
    fetch_video_meta,
    validate_youtube_url,
)

router = APIRouter(prefix="/api/youtube", tags=["youtube"])


@router.post("/validate", response_model=UrlValidation)
async def validate(body: YouTubeUrlRequest) -> UrlValidation:
    return validate_youtube_url(body.url)


@router.get("/meta/{video_id}", response_model=VideoMeta)
def video_meta(video_id: str, settings: SettingsDep) -> VideoMeta:
    try:
        return fetch_video_meta(video_id, settings)
    except YouTubeError as exc:
        raise ApiError(400, "meta_fetch_failed", str(exc)) from exc


@router.get("/captions/{video_id}")
def captions(video_id: str, settings: SettingsDep) -> dict[str, Any]:
    """List caption tracks. Returns 501 unless a YouTube OAuth token is configured."""
    try:
        return fetch_captions(video_id, settings)
    except YouTubeError as exc:
        raise ApiError(501, "captions_unavailable", str(exc)) from exc
