"""Tests for the ingestion pipeline: parsers, language resolution and documents."""

from __future__ import annotations

import logging

import pytest

from video_insights.ingestion.chunking import chunk_transcript
from video_insights.ingestion.models import Segment
from video_insights.ingestion.normalization import normalize_segments
from video_insights.ingestion.parsers import (
    parse_plain_text,
    parse_srt,
    parse_timestamp,
    parse_transcript,
    parse_vtt,
)
from video_insights.ingestion.pipeline import build_document, ingest_transcript, resolve_language
from video_insights.pipeline_config import TranscriptFormat, TranscriptSource
from video_insights.retrieval.relevance import select_relevant_chunks

ENGLISH_LINES = """Welcome back to the kitchen, today we are baking a simple loaf of bread.
First, mix the flour with warm water and a spoon of yeast.
Let the dough rest for an hour until it doubles in size."""


class TestTimestamps:
    @pytest.mark.parametrize(
        ("ts", "expected"),
        [
            ("00:00:01,500", 1.5),
            ("01:02:03.250", 3723.25),
            ("02:03.5", 123.5),
            ("garbage", 0.0),
        ],
    )
    def test_parse_timestamp(self, ts: str, expected: float) -> None:
        assert parse_timestamp(ts) == pytest.approx(expected)


class TestSRTParser:
    def test_basic_srt(self) -> None:
        srt = """1
00:00:01,000 --> 00:00:04,000
Hello and welcome.

2
00:00:04,500 --> 00:00:08,250
Host: Today we cover two topics.
"""
        segments = parse_srt(srt)
        assert len(segments) == 2
        assert segments[0] == Segment(id="0", text="Hello and welcome.", start=1.0, end=4.0)
        assert segments[1].speaker is None
        assert segments[1].text == "Host: Today we cover two topics."
        assert segments[1].end == 8.25

    def test_multiline_cue(self) -> None:
        srt = "1\n00:00:01,000 --> 00:00:02,000\nline one\nline two\n"
        assert parse_srt(srt)[0].text == "line one line two"

    def test_missing_timing_gets_synthetic_times(self) -> None:
        srt = "1\nNo timing here\n\n2\n00:00:10,000 --> 00:00:12,000\nTimed\n\n3\nAlso untimed"
        segments = parse_srt(srt)
        assert (segments[0].start, segments[0].end) == (0.0, 3.0)
        assert segments[0].text == "No timing here"
        assert (segments[1].start, segments[1].end) == (10.0, 12.0)
        assert (segments[2].start, segments[2].end) == (8.0, 11.0)

    def test_windows_line_endings(self) -> None:
        srt = "1\r\n00:00:01,000 --> 00:00:02,000\r\nHi\r\n\r\n2\r\n00:00:03,000 --> 00:00:04,000\r\nThere\r\n"
        assert [s.text for s in parse_srt(srt)] == ["Hi", "There"]

    def test_empty(self) -> None:
        assert parse_srt("") == []


class TestVTTParser:
    def test_basic_vtt(self) -> None:
        vtt = """WEBVTT

00:00:01.000 --> 00:00:05.000
Speaker 1: Hello everyone, welcome to the channel.

00:00:05.500 --> 00:00:10.000
Speaker 2: Thanks for having us.
"""
        segments = parse_vtt(vtt)
        assert len(segments) == 2
        assert segments[0].speaker is None
        assert segments[0].start == 1.0
        assert segments[0].text == "Speaker 1: Hello everyone, welcome to the channel."

    def test_header_notes_and_cue_ids(self) -> None:
        vtt = """\ufeffWEBVTT - recipe video

NOTE this is a comment

intro
00:00:01.000 --> 00:00:02.000
First cue

00:03.000 --> 00:04.500
Second cue
"""
        segments = parse_vtt(vtt)
        assert [s.text for s in segments] == ["First cue", "Second cue"]
        assert segments[1].start == 3.0
        assert segments[1].end == 4.5

    def test_voice_tags(self) -> None:
        vtt = "WEBVTT\n\n00:00:01.000 --> 00:00:02.000\n<v Chef Ana>Preheat the oven.</v>\n"
        segment = parse_vtt(vtt)[0]
        assert segment.speaker == "Chef Ana"
        assert segment.text == "Preheat the oven."


class TestPlainTextParser:
    def test_one_segment_per_line(self) -> None:
        segments = parse_plain_text("first line\nsecond line\nthird line")
        assert [s.text for s in segments] == ["first line", "second line", "third line"]
        assert [(s.start, s.end) for s in segments] == [(0.0, 4.0), (5.0, 9.0), (10.0, 14.0)]
        assert [s.id for s in segments] == ["0", "1", "2"]

    def test_blank_lines_collapse(self) -> None:
        segments = parse_plain_text("alpha\n\n\nbeta")
        assert [(s.id, s.text) for s in segments] == [("0", "alpha"), ("1", "beta")]

    def test_whitespace_only_lines_are_dropped(self) -> None:
        segments = parse_plain_text("alpha\n   \nbeta")
        assert [s.id for s in segments] == ["0", "2"]
        assert segments[1].start == 10.0

    def test_colon_lines_are_kept_whole(self) -> None:
        segments = parse_plain_text("Ingredients: flour\nNote that the ratio is 3: 1 cup flour to water")
        assert [s.text for s in segments] == [
            "Ingredients: flour",
            "Note that the ratio is 3: 1 cup flour to water",
        ]
        assert all(s.speaker is None for s in segments)

    def test_colon_text_stays_searchable(self) -> None:
        segments = normalize_segments(parse_plain_text("Note that the ratio is 3: 1 cup flour to water"))
        selected = select_relevant_chunks(chunk_transcript(segments), "ratio")
        assert len(selected) == 1
        assert "ratio" in selected[0].text

    def test_empty(self) -> None:
        assert parse_plain_text("") == []


class TestParseTranscript:
    def test_dispatch(self) -> None:
        assert len(parse_transcript("a\nb", "text")) == 2
        assert len(parse_transcript("a\nb", "TXT")) == 2
        assert len(parse_transcript("1\n00:00:01,000 --> 00:00:02,000\nHi", "srt")) == 1

    def test_unknown_format(self) -> None:
        with pytest.raises(ValueError, match="Unknown transcript format"):
            parse_transcript("content", "docx")


class TestPipeline:
    def test_auto_resolves_to_detected_language(self) -> None:
        segments = parse_plain_text(ENGLISH_LINES)
        language, detection = resolve_language("auto", segments)
        assert language == detection.language == "en"

    def test_explicit_language_wins(self) -> None:
        segments = parse_plain_text(ENGLISH_LINES)
        language, detection = resolve_language("es", segments)
        assert language == "es"
        assert detection.language == "en"

    def test_missing_language_is_detected(self) -> None:
        language, _ = resolve_language(None, parse_plain_text(ENGLISH_LINES))
        assert language == "en"

    def test_build_document_normalizes(self) -> None:
        segments = [
            Segment(id="", text="second", start=5.0, end=6.0),
            Segment(id="", text="first", start=1.0, end=2.0),
        ]
        document, _ = build_document("vid12345678", segments, language="en")
        assert [s.text for s in document.segments] == ["first", "second"]
        assert [s.id for s in document.segments] == ["0", "1"]
        assert document.source is TranscriptSource.UPLOADED
        assert isinstance(document.segments, tuple)

    def test_build_document_logs_video_id(self, caplog: pytest.LogCaptureFixture) -> None:
        segments = [Segment(id="", text="hello", start=0.0, end=1.0)]
        with caplog.at_level(logging.INFO, logger="video_insights.ingestion.pipeline"):
            build_document("vid12345678", segments, language="en")
        record = next(r for r in caplog.records if r.name == "video_insights.ingestion.pipeline")
        assert record.video_id == "vid12345678"  # type: ignore[attr-defined]
        assert record.language == "en"  # type: ignore[attr-defined]

    def test_ingest_transcript(self) -> None:
        document, detection = ingest_transcript("vid12345678", ENGLISH_LINES, TranscriptFormat.TEXT)
        assert document.video_id == "vid12345678"
        assert document.language == "en"
        assert len(document.segments) == 3
        assert detection.confidence > 0.4

    def test_ingest_accepts_format_strings(self) -> None:
        srt = "1\n00:00:01,000 --> 00:00:02,000\nHello"
        document, _ = ingest_transcript("vid", srt, "srt", language="en")
        assert document.segments[0].start == 1.0
