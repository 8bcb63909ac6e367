"""Data models for transcript ingestion."""

from __future__ import annotations

from dataclasses import dataclass, field

from video_insights.pipeline_config import TranscriptSource


@dataclass(frozen=True)
class Segment:
    """A timed span of transcript text.

    ``end >= start`` is expected but not enforced; upstream parsers pass
    timings through untouched.
    """

    id: str
    text: str
    start: float = 0.0
    end: float = 0.0
    speaker: str | None = None


@dataclass(frozen=True)
class Chunk:
    """A size-bounded run of consecutive segments.

    ``segment_ids`` lists the contributing segments in source order.
    """

    text: str
    start: float
    end: float
    segment_ids: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class Document:
    """A normalized transcript owned by the transcript store."""

    video_id: str
    language: str
    segments: tuple[Segment, ...]
    source: TranscriptSource = TranscriptSource.UPLOADED
