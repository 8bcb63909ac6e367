"""Ingestion pipeline: parse -> normalize -> detect language -> Document."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from video_insights.ingestion.language import LanguageDetection, detect_language
from video_insights.ingestion.models import Document, Segment
from video_insights.ingestion.normalization import normalize_segments
from video_insights.ingestion.parsers import parse_transcript
from video_insights.pipeline_config import TranscriptFormat, TranscriptSource

logger = logging.getLogger(__name__)

AUTO_LANGUAGE = "auto"


def resolve_language(
    requested: str | None,
    segments: Sequence[Segment],
) -> tuple[str, LanguageDetection]:
    """Pick the document language.

    Detection always runs so callers can report it. An explicit language
    wins; ``None``, ``""`` and ``"auto"`` defer to the detected language.
    """
    detection = detect_language(segments)
    if requested and requested != AUTO_LANGUAGE:
        return requested, detection
    return detection.language, detection


def build_document(
    video_id: str,
    segments: Sequence[Segment],
    language: str | None = None,
    source: TranscriptSource = TranscriptSource.UPLOADED,
) -> tuple[Document, LanguageDetection]:
    """Normalize *segments* and wrap them in a Document with a resolved language."""
    normalized = normalize_segments(segments)
    resolved, detection = resolve_language(language, normalized)
    document = Document(
        video_id=video_id,
        language=resolved,
        segments=tuple(normalized),
        source=source,
    )
    logger.info(
        "Built document %s: %d segments, language=%s (detected %s, %s)",
        video_id,
        len(normalized),
        resolved,
        detection.language,
        detection.reliability.value,
        extra={"video_id": video_id, "language": resolved},
    )
    return document, detection


def ingest_transcript(
    video_id: str,
    content: str,
    format: str | TranscriptFormat = TranscriptFormat.TEXT,
    language: str | None = None,
) -> tuple[Document, LanguageDetection]:
    """Full intake pipeline: parse -> normalize -> detect.

    Args:
        video_id: Identifier the document is stored under.
        content: Raw transcript text.
        format: ``"srt"``, ``"vtt"`` or ``"text"`` (string or enum).
        language: Explicit language code, or ``None``/``"auto"`` to detect.

    Returns:
        The new document and the language detection computed for it.
    """
    if isinstance(format, TranscriptFormat):
        format = format.value
    segments = parse_transcript(content, format)
    return build_document(video_id, segments, language=language)
