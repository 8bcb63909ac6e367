"""Pydantic request/response schemas for the Video Insights API."""

from __future__ import annotations

from pydantic import Field

from video_insights.ingestion.language import LanguageDetection, Reliability
from video_insights.ingestion.models import Document
from video_insights.ingestion.pipeline import AUTO_LANGUAGE
from video_insights.pipeline_config import ExportFormat, TranscriptSource
from video_insights.providers.models import ResultModel, SegmentModel, SummaryLength, TemplateKind


class YouTubeUrlRequest(ResultModel):
    url: str


class TranscriptRequest(ResultModel):
    """Body of every analysis request: which video, which language, and the text."""

    video_id: str = Field(min_length=1)
    language: str = Field(default=AUTO_LANGUAGE, min_length=2, max_length=8)
    transcript: str | None = Field(default=None, min_length=10)


class NormalizeRequest(ResultModel):
    video_id: str = Field(min_length=1)
    language: str = Field(min_length=2, max_length=8)
    transcript: str = Field(min_length=10)


class DetectRequest(ResultModel):
    transcript: str = Field(min_length=1)


class SummaryRequest(TranscriptRequest):
    length: SummaryLength = SummaryLength.MEDIUM


class QARequest(TranscriptRequest):
    question: str = Field(min_length=3)


class TemplateRequest(TranscriptRequest):
    kind: TemplateKind


class ExportFileRequest(TranscriptRequest):
    format: ExportFormat


class DocumentModel(ResultModel):
    video_id: str
    language: str
    segments: list[SegmentModel]
    source: TranscriptSource

    @classmethod
    def from_document(cls, document: Document) -> DocumentModel:
        return cls(
            video_id=document.video_id,
            language=document.language,
            segments=[SegmentModel.from_segment(s) for s in document.segments],
            source=document.source,
        )


class DetectionModel(ResultModel):
    language: str
    confidence: float
    reliability: Reliability

    @classmethod
    def from_detection(cls, detection: LanguageDetection) -> DetectionModel:
        return cls(
            language=detection.language,
            confidence=detection.confidence,
            reliability=detection.reliability,
        )


class TranscriptResponse(ResultModel):
    """Response of the upload and normalize endpoints."""

    success: bool = True
    document: DocumentModel
    detection: DetectionModel


class ExportInfo(ResultModel):
    format: ExportFormat
    url: str
    expires_at: str
