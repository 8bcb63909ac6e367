"""Chunking of normalized transcript segments."""

from __future__ import annotations

from collections.abc import Sequence

from video_insights.ingestion.models import Chunk, Document, Segment
from video_insights.pipeline_config import CHUNKING


def chunk_transcript(
    segments: Sequence[Segment],
    chunk_size: int = CHUNKING.default_size,
) -> list[Chunk]:
    """Group consecutive segments into chunks of at most *chunk_size* characters.

    Segments are joined with single spaces. When adding a segment would push
    a non-empty chunk over budget, the chunk is closed and a new one is
    seeded with that segment. A closed chunk ends where the previously
    absorbed segment ended. A single segment longer than the budget is
    never split; it becomes a chunk of its own.

    Args:
        segments: Segments in transcript order (see ``normalize_segments``).
        chunk_size: Character budget per chunk.

    Returns:
        Chunks in transcript order, each carrying its contributing segment ids.

    Raises:
        ValueError: If *chunk_size* is not positive.
    """
    if chunk_size <= 0:
        msg = f"chunk_size must be positive, got {chunk_size}"
        raise ValueError(msg)

    chunks: list[Chunk] = []
    buffer = ""
    start = segments[0].start if segments else 0.0
    segment_ids: list[str] = []

    for index, segment in enumerate(segments):
        candidate = f"{buffer} {segment.text}" if buffer else segment.text

        if len(candidate) > chunk_size and buffer:
            end = segments[index - 1].end if index > 0 else segment.end
            chunks.append(Chunk(text=buffer.strip(), start=start, end=end, segment_ids=tuple(segment_ids)))
            buffer = segment.text
            start = segment.start
            segment_ids = [segment.id]
        else:
            buffer = candidate
            if not segment_ids:
                start = segment.start
            segment_ids.append(segment.id)

    if buffer.strip():
        chunks.append(
            Chunk(
                text=buffer.strip(),
                start=start,
                end=segments[-1].end,
                segment_ids=tuple(segment_ids),
            )
        )

    return chunks


def _format_timestamp(seconds: float) -> str:
    """Render seconds as ``HH:MM:SS`` (wrapping at 24 hours)."""
    total = int(seconds) % 86400
    hours, remainder = divmod(total, 3600)
    minutes, secs = divmod(remainder, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"


def transcript_to_text(source: Document | Sequence[Segment]) -> str:
    """Render segments as ``[HH:MM:SS] Speaker: text`` lines for prompts."""
    segments = source.segments if isinstance(source, Document) else source
    lines: list[str] = []
    for segment in segments:
        speaker = f"{segment.speaker}: " if segment.speaker else ""
        lines.append(f"[{_format_timestamp(segment.start)}] {speaker}{segment.text}")
    return "\n".join(lines)
