"""HTTP client wrapper for the Video Insights FastAPI backend."""

from __future__ import annotations

import os
from typing import Any

import httpx
import streamlit as st

API_URL = os.getenv("API_URL", "http://localhost:4000")


def _error_message(e: httpx.HTTPError) -> str:
    """Prefer the API's ``message`` field over the raw HTTP error text."""
    if isinstance(e, httpx.HTTPStatusError):
        try:
            return str(e.response.json().get("message", e))
        except ValueError:
            return str(e)
    return str(e)


def _headers(provider: str | None) -> dict[str, str]:
    return {"X-AI-Provider": provider} if provider else {}


def check_health() -> bool:
    """Return True if the API server responds to /health."""
    try:
        r = httpx.get(f"{API_URL}/health", timeout=5.0)
        return r.status_code == 200
    except httpx.ConnectError:
        return False


def validate_url(url: str) -> dict:  # type: ignore[type-arg]
    """Check a YouTube URL and extract its video id."""
    try:
        r = httpx.post(f"{API_URL}/api/youtube/validate", json={"url": url}, timeout=10.0)
        r.raise_for_status()
        return r.json()  # type: ignore[no-any-return]
    except httpx.HTTPError as e:
        return {"valid": False, "error": _error_message(e)}


def get_video_meta(video_id: str) -> dict:  # type: ignore[type-arg]
    """Fetch title/channel metadata; empty when no YouTube API key is configured."""
    try:
        r = httpx.get(f"{API_URL}/api/youtube/meta/{video_id}", timeout=15.0)
        r.raise_for_status()
        return r.json()  # type: ignore[no-any-return]
    except httpx.HTTPError:
        return {}


def upload_transcript(
    video_id: str,
    file_content: bytes | None = None,
    filename: str | None = None,
    transcript: str | None = None,
    language: str = "auto",
) -> dict:  # type: ignore[type-arg]
    """Upload a subtitle file or pasted transcript text."""
    data: dict[str, str] = {"video_id": video_id, "language": language}
    files = None
    if file_content is not None and filename:
        files = {"file": (filename, file_content)}
    elif transcript:
        data["transcript"] = transcript
    try:
        r = httpx.post(f"{API_URL}/api/transcript/upload", data=data, files=files, timeout=60.0)
        r.raise_for_status()
        return r.json()  # type: ignore[no-any-return]
    except httpx.HTTPError as e:
        st.error(f"Upload failed: {_error_message(e)}")
        return {}


def analyze(
    operation: str,
    payload: dict[str, Any],
    provider: str | None = None,
) -> Any:
    """POST *payload* to ``/api/analyze/<operation>`` and return the JSON result."""
    try:
        r = httpx.post(
            f"{API_URL}/api/analyze/{operation}",
            json=payload,
            headers=_headers(provider),
            timeout=120.0,
        )
        r.raise_for_status()
        return r.json()
    except httpx.HTTPError as e:
        st.error(f"{operation.capitalize()} failed: {_error_message(e)}")
        return {}


def download_export(url: str) -> bytes | None:
    """Fetch an export file. The link works only once."""
    try:
        r = httpx.get(f"{API_URL}{url}", timeout=60.0)
        r.raise_for_status()
        return r.content
    except httpx.HTTPError as e:
        st.error(f"Download failed: {_error_message(e)}")
        return None
