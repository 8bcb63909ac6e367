"""Analysis provider capability interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from video_insights.ingestion.chunking import transcript_to_text
from video_insights.ingestion.models import Chunk, Document, Segment
from video_insights.ingestion.normalization import normalize_segments
from video_insights.providers.models import (
    HeatmapPoint,
    KeywordResponse,
    MindMapNode,
    QAResult,
    SentimentTimeline,
    SummaryLength,
    SummaryResponse,
    TemplateKind,
    TemplateOutput,
)


class Operation(str, Enum):
    """Optional provider operations; callers check ``supports`` first."""

    SENTIMENT_TIMELINE = "sentiment_timeline"
    HEATMAP = "heatmap"
    TEMPLATES = "templates"


class UnsupportedOperationError(Exception):
    """Raised when a provider is asked for an optional operation it lacks."""

    def __init__(self, operation: Operation, provider: str) -> None:
        self.operation = operation
        self.provider = provider
        super().__init__(f"{operation.value} is not implemented by the {provider} provider")


@dataclass(frozen=True)
class AnalyzeInput:
    """Everything a provider needs about one transcript."""

    video_id: str
    language: str
    document: Document
    segments: tuple[Segment, ...]
    transcript: str


def build_input(document: Document) -> AnalyzeInput:
    segments = tuple(normalize_segments(document.segments))
    return AnalyzeInput(
        video_id=document.video_id,
        language=document.language,
        document=document,
        segments=segments,
        transcript=transcript_to_text(segments),
    )


def sources_for(chunks: Sequence[Chunk], segments: Sequence[Segment]) -> list[Segment]:
    """Expand selected chunks back into their contributing segments, chunk by chunk."""
    sources: list[Segment] = []
    for chunk in chunks:
        wanted = set(chunk.segment_ids)
        sources.extend(segment for segment in segments if segment.id in wanted)
    return sources


class AnalysisProvider(ABC):
    """Backend that turns a transcript into analysis results.

    ``summarize``, ``extract_mind_map``, ``extract_keywords`` and ``qa`` are
    required. ``sentiment_timeline``, ``heatmap`` and ``templates`` are
    optional: a provider lists what it implements in ``optional_operations``
    and the defaults here raise :class:`UnsupportedOperationError`.
    """

    name: str = "base"
    optional_operations: frozenset[Operation] = frozenset()

    def supports(self, operation: Operation) -> bool:
        return operation in self.optional_operations

    @abstractmethod
    def summarize(self, payload: AnalyzeInput, length: SummaryLength) -> SummaryResponse: ...

    @abstractmethod
    def extract_mind_map(self, payload: AnalyzeInput) -> MindMapNode: ...

    @abstractmethod
    def extract_keywords(self, payload: AnalyzeInput) -> KeywordResponse: ...

    @abstractmethod
    def qa(self, payload: AnalyzeInput, question: str) -> QAResult: ...

    def sentiment_timeline(self, payload: AnalyzeInput) -> SentimentTimeline:
        raise UnsupportedOperationError(Operation.SENTIMENT_TIMELINE, self.name)

    def heatmap(self, payload: AnalyzeInput) -> list[HeatmapPoint]:
        raise UnsupportedOperationError(Operation.HEATMAP, self.name)

    def templates(self, payload: AnalyzeInput, kind: TemplateKind) -> TemplateOutput:
        raise UnsupportedOperationError(Operation.TEMPLATES, self.name)
