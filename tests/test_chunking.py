"""Tests for segment normalization, chunking and relevance selection."""

from __future__ import annotations

import pytest

from video_insights.ingestion.chunking import chunk_transcript, transcript_to_text
from video_insights.ingestion.models import Chunk, Document, Segment
from video_insights.ingestion.normalization import normalize_segments
from video_insights.retrieval.relevance import extract_keywords, score_chunk, select_relevant_chunks


def _topic_segments(count: int = 10) -> list[Segment]:
    return [
        Segment(id=str(i), text=f"Segment {i} about topic {i % 3}", start=i * 5.0, end=i * 5.0 + 4)
        for i in range(count)
    ]


class TestNormalizeSegments:
    def test_sorts_by_start(self) -> None:
        segments = [
            Segment(id="b", text="second", start=5.0, end=6.0),
            Segment(id="a", text="first", start=1.0, end=2.0),
        ]
        result = normalize_segments(segments)
        assert [s.id for s in result] == ["a", "b"]

    def test_ties_keep_input_order(self) -> None:
        segments = [
            Segment(id="x", text="one", start=3.0),
            Segment(id="y", text="two", start=3.0),
            Segment(id="z", text="zero", start=0.0),
        ]
        result = normalize_segments(segments)
        assert [s.id for s in result] == ["z", "x", "y"]

    def test_fills_empty_ids_with_sorted_position(self) -> None:
        segments = [
            Segment(id="", text="late", start=10.0),
            Segment(id="keep", text="early", start=0.0),
            Segment(id="", text="middle", start=5.0),
        ]
        result = normalize_segments(segments)
        assert [s.id for s in result] == ["keep", "1", "2"]

    def test_idempotent(self) -> None:
        segments = [
            Segment(id="", text="c", start=2.0),
            Segment(id="", text="a", start=0.0),
            Segment(id="q", text="b", start=1.0),
        ]
        once = normalize_segments(segments)
        assert normalize_segments(once) == once

    def test_does_not_modify_input(self) -> None:
        segments = [Segment(id="", text="a", start=1.0), Segment(id="", text="b", start=0.0)]
        normalize_segments(segments)
        assert [s.id for s in segments] == ["", ""]

    def test_empty(self) -> None:
        assert normalize_segments([]) == []


class TestChunkTranscript:
    def test_example_produces_multiple_bounded_chunks(self) -> None:
        chunks = chunk_transcript(_topic_segments(), chunk_size=60)
        assert len(chunks) > 1
        assert all(len(chunk.text) <= 120 for chunk in chunks)

    def test_coverage_preserves_every_segment_once(self) -> None:
        segments = _topic_segments()
        chunks = chunk_transcript(segments, chunk_size=60)
        flattened = [sid for chunk in chunks for sid in chunk.segment_ids]
        assert flattened == [s.id for s in segments]

    def test_size_discipline(self) -> None:
        chunks = chunk_transcript(_topic_segments(), chunk_size=60)
        for chunk in chunks:
            assert len(chunk.text) <= 60 or len(chunk.segment_ids) == 1

    def test_oversized_segment_is_not_split(self) -> None:
        segments = [
            Segment(id="0", text="short", start=0.0, end=1.0),
            Segment(id="1", text="x" * 50, start=1.0, end=2.0),
            Segment(id="2", text="tail", start=2.0, end=3.0),
        ]
        chunks = chunk_transcript(segments, chunk_size=20)
        assert [c.segment_ids for c in chunks] == [("0",), ("1",), ("2",)]
        assert chunks[1].text == "x" * 50

    def test_closed_chunk_ends_at_previous_segment(self) -> None:
        segments = [
            Segment(id="0", text="aaaa", start=0.0, end=1.0),
            Segment(id="1", text="bbbb", start=2.0, end=3.0),
            Segment(id="2", text="cccc", start=4.0, end=5.0),
        ]
        chunks = chunk_transcript(segments, chunk_size=9)
        assert chunks[0] == Chunk(text="aaaa bbbb", start=0.0, end=3.0, segment_ids=("0", "1"))
        assert chunks[1] == Chunk(text="cccc", start=4.0, end=5.0, segment_ids=("2",))

    def test_single_chunk_when_budget_is_large(self) -> None:
        segments = _topic_segments()
        chunks = chunk_transcript(segments)
        assert len(chunks) == 1
        assert chunks[0].start == 0.0
        assert chunks[0].end == segments[-1].end

    def test_empty_input(self) -> None:
        assert chunk_transcript([], chunk_size=100) == []

    def test_invalid_chunk_size(self) -> None:
        with pytest.raises(ValueError):
            chunk_transcript(_topic_segments(), chunk_size=0)


class TestTranscriptToText:
    def test_formats_timestamps_and_speakers(self) -> None:
        segments = [
            Segment(id="0", text="Hello", start=3725.0, speaker="Ana"),
            Segment(id="1", text="Hi", start=4.0),
        ]
        assert transcript_to_text(segments) == "[01:02:05] Ana: Hello\n[00:00:04] Hi"

    def test_accepts_document(self) -> None:
        document = Document(video_id="v", language="en", segments=(Segment(id="0", text="One"),))
        assert transcript_to_text(document) == "[00:00:00] One"


class TestRelevance:
    def test_extract_keywords(self) -> None:
        assert extract_keywords("What's the Topic, again?") == ["what", "s", "the", "topic", "again"]

    def test_long_keywords_count_double(self) -> None:
        chunk = Chunk(text="Topics and topic notes", start=0.0, end=1.0)
        # "topic" (5 chars) hits twice at weight 2, "and" once at weight 1
        assert score_chunk(chunk, ["topic", "and"]) == 5

    def test_filters_non_matching_and_respects_limit(self) -> None:
        chunks = chunk_transcript(_topic_segments(), chunk_size=60)
        selected = select_relevant_chunks(chunks, "topic 1", limit=2)
        assert len(selected) <= 2
        keywords = extract_keywords("topic 1")
        assert all(score_chunk(chunk, keywords) > 0 for chunk in selected)

    def test_no_matches(self) -> None:
        chunks = chunk_transcript(_topic_segments(), chunk_size=60)
        assert select_relevant_chunks(chunks, "zebra") == []

    def test_deterministic(self) -> None:
        chunks = chunk_transcript(_topic_segments(), chunk_size=60)
        first = select_relevant_chunks(chunks, "segment topic", limit=3)
        second = select_relevant_chunks(chunks, "segment topic", limit=3)
        assert first == second

    def test_ties_keep_transcript_order(self) -> None:
        chunks = [
            Chunk(text="alpha beta", start=0.0, end=1.0),
            Chunk(text="beta alpha", start=1.0, end=2.0),
        ]
        assert select_relevant_chunks(chunks, "alpha") == chunks

    def test_invalid_limit(self) -> None:
        with pytest.raises(ValueError):
            select_relevant_chunks([], "anything", limit=0)


class TestEndToEnd:
    def test_chunk_then_select(self) -> None:
        segments = normalize_segments(_topic_segments())
        chunks = chunk_transcript(segments, 800)
        selected = select_relevant_chunks(chunks, "topic 1", 4)

        assert 0 < len(selected) <= 4
        assert all("topic 1" in chunk.text.lower() for chunk in selected)
        keywords = extract_keywords("topic 1")
        scores = [score_chunk(chunk, keywords) for chunk in selected]
        assert scores == sorted(scores, reverse=True)
