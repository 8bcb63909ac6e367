"""Transcript language detection with a confidence/reliability contract."""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from langdetect import DetectorFactory, LangDetectException, detect_langs

from video_insights.ingestion.language_codes import to_iso639_1
from video_insights.ingestion.models import Segment

logger = logging.getLogger(__name__)

# langdetect samples randomly; a fixed seed keeps detection reproducible.
DetectorFactory.seed = 0

DEFAULT_LANGUAGE = "en"
MIN_DETECTABLE_LENGTH = 20
UNDETERMINED = "und"

HIGH_CONFIDENCE = 0.85
MEDIUM_CONFIDENCE = 0.60

_WHITESPACE_RE = re.compile(r"\s+")


class Reliability(str, Enum):
    """Coarse confidence band of a detection."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


@dataclass(frozen=True)
class LanguageDetection:
    """Detected language (ISO 639-1) with confidence in ``[0, 1]``."""

    language: str = DEFAULT_LANGUAGE
    confidence: float = 0.0
    reliability: Reliability = Reliability.LOW


def reliability_for(confidence: float) -> Reliability:
    """Map a confidence score to its reliability band."""
    if confidence >= HIGH_CONFIDENCE:
        return Reliability.HIGH
    if confidence >= MEDIUM_CONFIDENCE:
        return Reliability.MEDIUM
    return Reliability.LOW


def _sanitize(text: str) -> str:
    return _WHITESPACE_RE.sub(" ", text).strip()


def rank_candidates(text: str) -> list[tuple[str, float]]:
    """Run the trigram classifier and return ``(code, distance)`` pairs, closest first.

    Distance is ``1 - probability``. Text without usable features yields
    no candidates.
    """
    try:
        ranked = detect_langs(text)
    except LangDetectException:
        logger.info("Unable to determine language for text of length %d", len(text))
        return []
    return [(candidate.lang, 1.0 - candidate.prob) for candidate in ranked]


def _to_detection(code: str, distance: float) -> LanguageDetection:
    # Linear inversion of the distance; an approximation, not a calibrated probability.
    confidence = max(0.0, 1.0 - distance)
    return LanguageDetection(
        language=to_iso639_1(code) or DEFAULT_LANGUAGE,
        confidence=confidence,
        reliability=reliability_for(confidence),
    )


def detect_language(source: str | Sequence[Segment]) -> LanguageDetection:
    """Detect the language of raw text or of a segment sequence.

    Segment texts are joined with spaces. Inputs shorter than 20 characters
    after whitespace collapsing, or with no candidate language, get the
    default English/low detection. Never raises.
    """
    raw = source if isinstance(source, str) else " ".join(segment.text for segment in source)
    text = _sanitize(raw)

    if len(text) < MIN_DETECTABLE_LENGTH:
        return LanguageDetection()

    candidates = [(code, distance) for code, distance in rank_candidates(text) if code != UNDETERMINED]
    if not candidates:
        return LanguageDetection()

    code, distance = candidates[0]
    detection = _to_detection(code, distance)
    logger.debug(
        "Detected language %s (confidence %.2f, %s)",
        detection.language,
        detection.confidence,
        detection.reliability.value,
    )
    return detection
