"""Transcript store keyed by (video id, language)."""

from __future__ import annotations

from video_insights.ingestion.models import Document
from video_insights.storage.cache import TTLCache

DEFAULT_TRANSCRIPT_TTL = 60 * 60


def _key(video_id: str, language: str) -> str:
    return f"{video_id}:{language}"


class TranscriptStore:
    def __init__(self, ttl_seconds: float = DEFAULT_TRANSCRIPT_TTL, cache: TTLCache[Document] | None = None) -> None:
        self.ttl_seconds = ttl_seconds
        self._cache: TTLCache[Document] = cache if cache is not None else TTLCache()

    def save(self, document: Document) -> None:
        self._cache.set(_key(document.video_id, document.language), document, self.ttl_seconds)

    def get(self, video_id: str, language: str) -> Document | None:
        return self._cache.get(_key(video_id, language))

    def delete(self, video_id: str, language: str) -> None:
        self._cache.delete(_key(video_id, language))
