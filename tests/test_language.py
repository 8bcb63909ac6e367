"""Tests for language detection and the language code table."""

from __future__ import annotations

from unittest.mock import patch

import pytest

from video_insights.ingestion.language import (
    LanguageDetection,
    Reliability,
    detect_language,
    rank_candidates,
    reliability_for,
)
from video_insights.ingestion.language_codes import to_iso639_1
from video_insights.ingestion.models import Segment

ENGLISH = (
    "The committee reviewed the quarterly budget and agreed that the new library "
    "should open before the end of the summer, with extended hours on weekends."
)
FRENCH = (
    "Le comité a examiné le budget trimestriel et a convenu que la nouvelle "
    "bibliothèque devrait ouvrir avant la fin de l'été, avec des horaires prolongés."
)


class TestReliability:
    @pytest.mark.parametrize(
        ("confidence", "expected"),
        [
            (0.95, Reliability.HIGH),
            (0.85, Reliability.HIGH),
            (0.7, Reliability.MEDIUM),
            (0.6, Reliability.MEDIUM),
            (0.59, Reliability.LOW),
            (0.0, Reliability.LOW),
        ],
    )
    def test_bands(self, confidence: float, expected: Reliability) -> None:
        assert reliability_for(confidence) is expected


class TestDetectLanguage:
    def test_short_input_defaults_to_english_low(self) -> None:
        assert detect_language("Hi") == LanguageDetection(language="en", confidence=0.0, reliability=Reliability.LOW)

    def test_whitespace_does_not_count_towards_length(self) -> None:
        assert detect_language("a  \n\n  b \t\t c          d") == LanguageDetection()

    def test_confident_english(self) -> None:
        detection = detect_language(ENGLISH)
        assert detection.language == "en"
        assert detection.confidence > 0.4

    def test_french(self) -> None:
        assert detect_language(FRENCH).language == "fr"

    def test_segments_are_joined(self) -> None:
        words = ENGLISH.split()
        segments = [Segment(id=str(i), text=word) for i, word in enumerate(words)]
        assert detect_language(segments).language == "en"

    def test_undetermined_candidates_are_skipped(self) -> None:
        with patch(
            "video_insights.ingestion.language.rank_candidates",
            return_value=[("und", 0.0), ("de", 0.2)],
        ):
            detection = detect_language(ENGLISH)
        assert detection.language == "de"
        assert detection.confidence == pytest.approx(0.8)
        assert detection.reliability is Reliability.MEDIUM

    def test_no_candidates_defaults(self) -> None:
        with patch("video_insights.ingestion.language.rank_candidates", return_value=[]):
            assert detect_language(ENGLISH) == LanguageDetection()

    def test_unknown_code_maps_to_english(self) -> None:
        with patch("video_insights.ingestion.language.rank_candidates", return_value=[("xx", 0.1)]):
            detection = detect_language(ENGLISH)
        assert detection.language == "en"
        assert detection.reliability is Reliability.HIGH

    def test_confidence_is_clamped(self) -> None:
        with patch("video_insights.ingestion.language.rank_candidates", return_value=[("fra", 1.7)]):
            detection = detect_language(ENGLISH)
        assert detection.language == "fr"
        assert detection.confidence == 0.0

    def test_rank_candidates_without_features(self) -> None:
        assert rank_candidates("1234567890 1234567890 !!!") == []


class TestLanguageCodes:
    @pytest.mark.parametrize(
        ("code", "expected"),
        [("eng", "en"), ("en", "en"), ("FRA", "fr"), ("cmn", "zh"), ("zh-cn", "zh"), ("pes", "fa")],
    )
    def test_known_codes(self, code: str, expected: str) -> None:
        assert to_iso639_1(code) == expected

    def test_unknown_code(self) -> None:
        assert to_iso639_1("qqq") is None
