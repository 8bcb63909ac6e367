"""Typed analysis results returned by providers."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from video_insights.ingestion.models import Segment


class SummaryLength(str, Enum):
    SHORT = "short"
    MEDIUM = "medium"
    DETAILED = "detailed"


class TemplateKind(str, Enum):
    RECIPE = "recipe"
    EDUCATION = "education"
    MEETING = "meeting"


class Tone(str, Enum):
    POSITIVE = "positive"
    NEUTRAL = "neutral"
    NEGATIVE = "negative"


class ResultModel(BaseModel):
    """Base model: snake_case attributes, camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SegmentModel(ResultModel):
    id: str
    text: str
    start: float
    end: float
    speaker: str | None = None

    @classmethod
    def from_segment(cls, segment: Segment) -> SegmentModel:
        return cls(
            id=segment.id,
            text=segment.text,
            start=segment.start,
            end=segment.end,
            speaker=segment.speaker,
        )


class Chapter(ResultModel):
    title: str
    start: float = 0.0
    end: float = 0.0
    description: str | None = None


class SummaryResponse(ResultModel):
    short: str = ""
    medium: str = ""
    detailed: str = ""
    chapters: list[Chapter] = Field(default_factory=list)


class MindMapNode(ResultModel):
    id: str
    label: str
    start: float | None = None
    end: float | None = None
    children: list[MindMapNode] = Field(default_factory=list)


MindMapNode.model_rebuild()


class KeywordEntry(ResultModel):
    term: str
    weight: float = 0.0
    sentiment: Tone | None = None
    tags: list[str] | None = None


class KeywordResponse(ResultModel):
    topics: list[KeywordEntry] = Field(default_factory=list)
    seo_tags: list[str] = Field(default_factory=list)
    overall_tone: Tone = Tone.NEUTRAL


class QAResult(ResultModel):
    question: str
    answer: str
    sources: list[SegmentModel] = Field(default_factory=list)


class SentimentPoint(ResultModel):
    time: float
    score: float
    label: Tone


class SentimentTimeline(ResultModel):
    average_score: float = 0.0
    points: list[SentimentPoint] = Field(default_factory=list)


class HeatmapPoint(ResultModel):
    time: float
    intensity: float
    label: str | None = None


class TemplateOutput(ResultModel):
    kind: TemplateKind
    summary: str = ""
    content: dict[str, Any] = Field(default_factory=dict)
