"""Short-lived store for rendered export files, read at most once."""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime

from video_insights.storage.cache import TTLCache

DEFAULT_EXPORT_TTL = 60 * 10


@dataclass(frozen=True)
class ExportEntry:
    content: bytes
    mime_type: str
    filename: str
    expires_at: datetime


class ExportStore:
    def __init__(self, ttl_seconds: float = DEFAULT_EXPORT_TTL, cache: TTLCache[ExportEntry] | None = None) -> None:
        self.ttl_seconds = ttl_seconds
        self._cache: TTLCache[ExportEntry] = cache if cache is not None else TTLCache()

    def put(self, entry: ExportEntry) -> str:
        """Store *entry* under a fresh random token and return the token."""
        token = str(uuid.uuid4())
        self._cache.set(token, entry, self.ttl_seconds)
        return token

    def consume(self, token: str) -> ExportEntry | None:
        """Return the entry for *token* and forget it; None if missing or expired."""
        return self._cache.pop(token)
