"""Heuristic provider that runs entirely in-process (no API keys needed)."""

from __future__ import annotations

import re
from collections import Counter
from collections.abc import Sequence

from video_insights.ingestion.chunking import chunk_transcript
from video_insights.ingestion.models import Segment
from video_insights.pipeline_config import CHUNKING
from video_insights.providers.base import (
    AnalysisProvider,
    AnalyzeInput,
    Operation,
    sources_for,
)
from video_insights.providers.models import (
    Chapter,
    HeatmapPoint,
    KeywordEntry,
    KeywordResponse,
    MindMapNode,
    QAResult,
    SegmentModel,
    SentimentPoint,
    SentimentTimeline,
    SummaryLength,
    SummaryResponse,
    TemplateKind,
    TemplateOutput,
    Tone,
)
from video_insights.providers.parsing import ROOT_NODE_LABEL, slugify
from video_insights.retrieval.relevance import score_chunk, select_relevant_chunks

POSITIVE_WORDS = frozenset({"good", "great", "excellent", "positive", "benefit", "improve"})
NEGATIVE_WORDS = frozenset({"bad", "poor", "negative", "risk", "issue", "problem"})

NO_ANSWER = "No answer found in transcript."

_SENTENCES_PER_LENGTH = {
    SummaryLength.SHORT: 3,
    SummaryLength.MEDIUM: 6,
    SummaryLength.DETAILED: 10,
}
_CHAPTER_COUNT = 4
_TITLE_WORDS = 6
_DESCRIPTION_CHARS = 180
_MIN_KEYWORD_LENGTH = 4
_TOP_KEYWORDS = 12
_SEO_TAGS = 6
_TEMPLATE_ITEMS = 5

_SENTENCE_SPLIT_RE = re.compile(r"[.!?]")
_NON_ALNUM_RE = re.compile(r"[^a-z0-9\s]")
_WORD_RE = re.compile(r"\b[a-z]+\b", re.IGNORECASE)


def to_sentiment(text: str) -> Tone:
    """Lexicon vote: each positive word present adds one, each negative word subtracts one."""
    normalized = text.lower()
    score = sum(1 for word in POSITIVE_WORDS if word in normalized)
    score -= sum(1 for word in NEGATIVE_WORDS if word in normalized)
    if score > 0:
        return Tone.POSITIVE
    if score < 0:
        return Tone.NEGATIVE
    return Tone.NEUTRAL


def _joined(segments: Sequence[Segment]) -> str:
    return " ".join(segment.text for segment in segments)


def _sentences(text: str) -> list[str]:
    return [s.strip() for s in _SENTENCE_SPLIT_RE.split(text) if s.strip()]


def _title(text: str) -> str:
    return " ".join(text.split()[:_TITLE_WORDS])


def build_summary(segments: Sequence[Segment], length: SummaryLength) -> str:
    sentences = _sentences(_joined(segments))[: _SENTENCES_PER_LENGTH[length]]
    return "\n".join(f"• {sentence}" for sentence in sentences)


def build_chapters(segments: Sequence[Segment]) -> list[Chapter]:
    """Cut the transcript into roughly four equal runs of segments."""
    slice_size = max(1, len(segments) // _CHAPTER_COUNT)
    chapters: list[Chapter] = []
    for i in range(0, len(segments), slice_size):
        part = segments[i : i + slice_size]
        text = _joined(part)
        chapters.append(
            Chapter(
                title=_title(text) or f"Chapter {len(chapters) + 1}",
                start=part[0].start,
                end=part[-1].end,
                description=text[:_DESCRIPTION_CHARS],
            )
        )
    return chapters


def compute_keywords(segments: Sequence[Segment]) -> KeywordResponse:
    text = " ".join(segment.text.lower() for segment in segments)
    tokens = [t for t in _NON_ALNUM_RE.sub(" ", text).split() if len(t) >= _MIN_KEYWORD_LENGTH]
    # most_common() keeps first-seen order among equal counts
    ranked = Counter(tokens).most_common(_TOP_KEYWORDS)
    topics = [KeywordEntry(term=term, weight=count, sentiment=to_sentiment(term)) for term, count in ranked]
    return KeywordResponse(
        topics=topics,
        seo_tags=[topic.term for topic in topics[:_SEO_TAGS]],
        overall_tone=to_sentiment(text),
    )


def build_mind_map(segments: Sequence[Segment]) -> MindMapNode:
    chunks = chunk_transcript(segments, CHUNKING.mind_map_size)
    children = [
        MindMapNode(
            id=f"chunk-{index}",
            label=_title(chunk.text) or f"Section {index + 1}",
            start=chunk.start,
            end=chunk.end,
        )
        for index, chunk in enumerate(chunks)
    ]
    return MindMapNode(id=slugify(ROOT_NODE_LABEL), label=ROOT_NODE_LABEL, children=children)


def answer_from_chunks(segments: Sequence[Segment], question: str) -> QAResult:
    """Answer with the text of the best-matching chunks, citing their segments."""
    chunks = chunk_transcript(segments, CHUNKING.local_qa_size)
    relevant = select_relevant_chunks(chunks, question, CHUNKING.local_qa_limit)
    answer = "\n".join(chunk.text for chunk in relevant)
    return QAResult(
        question=question,
        answer=answer or NO_ANSWER,
        sources=[SegmentModel.from_segment(s) for s in sources_for(relevant, segments)],
    )


def build_template(segments: Sequence[Segment], kind: TemplateKind) -> TemplateOutput:
    text = _joined(segments)

    if kind is TemplateKind.RECIPE:
        words = list(dict.fromkeys(_WORD_RE.findall(text)))
        return TemplateOutput(
            kind=kind,
            summary="Auto-generated cooking summary",
            content={"ingredients": words[:10], "steps": _sentences(text)[:6]},
        )

    if kind is TemplateKind.EDUCATION:
        head = segments[:_TEMPLATE_ITEMS]
        return TemplateOutput(
            kind=kind,
            summary="Education recap",
            content={
                "flashcards": [
                    {"question": f"Explain: {segment.text[:50]}", "answer": segment.text} for segment in head
                ],
                "quiz": [
                    {"question": f"What is the key idea in part {index + 1}?", "answer": segment.text}
                    for index, segment in enumerate(head)
                ],
            },
        )

    return TemplateOutput(
        kind=TemplateKind.MEETING,
        summary="Meeting highlights",
        content={
            "decisions": [segment.text for segment in segments[:_TEMPLATE_ITEMS]],
            "actions": [segment.text for segment in segments[_TEMPLATE_ITEMS : _TEMPLATE_ITEMS * 2]],
        },
    )


_TONE_SCORE = {Tone.POSITIVE: 1, Tone.NEUTRAL: 0, Tone.NEGATIVE: -1}


def build_sentiment_timeline(segments: Sequence[Segment]) -> SentimentTimeline:
    points: list[SentimentPoint] = []
    for chunk in chunk_transcript(segments, CHUNKING.sentiment_size):
        tone = to_sentiment(chunk.text)
        points.append(SentimentPoint(time=chunk.start, score=_TONE_SCORE[tone], label=tone))
    average = sum(point.score for point in points) / (len(points) or 1)
    return SentimentTimeline(average_score=average, points=points)


def build_heatmap(segments: Sequence[Segment]) -> list[HeatmapPoint]:
    """Score each sentiment-sized chunk by how often the transcript's top keywords occur in it."""
    top_terms = compute_keywords(segments).seo_tags
    points: list[HeatmapPoint] = []
    for chunk in chunk_transcript(segments, CHUNKING.sentiment_size):
        text = chunk.text.lower()
        hits = [term for term in top_terms if term in text]
        points.append(
            HeatmapPoint(
                time=chunk.start,
                intensity=score_chunk(chunk, top_terms),
                label=hits[0] if hits else None,
            )
        )
    return points


class LocalProvider(AnalysisProvider):
    """Keyword and lexicon heuristics; implements every operation."""

    name = "local"
    optional_operations = frozenset(Operation)

    def summarize(self, payload: AnalyzeInput, length: SummaryLength) -> SummaryResponse:
        # All three lengths are cheap to build, so every length is always filled
        segments = payload.segments
        return SummaryResponse(
            short=build_summary(segments, SummaryLength.SHORT),
            medium=build_summary(segments, SummaryLength.MEDIUM),
            detailed=build_summary(segments, SummaryLength.DETAILED),
            chapters=build_chapters(segments),
        )

    def extract_mind_map(self, payload: AnalyzeInput) -> MindMapNode:
        return build_mind_map(payload.segments)

    def extract_keywords(self, payload: AnalyzeInput) -> KeywordResponse:
        return compute_keywords(payload.segments)

    def qa(self, payload: AnalyzeInput, question: str) -> QAResult:
        return answer_from_chunks(payload.segments, question)

    def sentiment_timeline(self, payload: AnalyzeInput) -> SentimentTimeline:
        return build_sentiment_timeline(payload.segments)

    def heatmap(self, payload: AnalyzeInput) -> list[HeatmapPoint]:
        return build_heatmap(payload.segments)

    def templates(self, payload: AnalyzeInput, kind: TemplateKind) -> TemplateOutput:
        return build_template(payload.segments, kind)
