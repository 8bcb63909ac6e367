"""Analysis endpoints: summary, mind map, keywords, Q&A, sentiment, heatmap, templates, export.

Provider calls block on remote SDKs, so these handlers are plain ``def``
and run in FastAPI's thread pool.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Response

from video_insights.api.dependencies import AnalysisDep, ExportStoreDep, RuntimeDep, TranscriptStoreDep
from video_insights.api.errors import ApiError
from video_insights.api.models import (
    ExportFileRequest,
    ExportInfo,
    QARequest,
    SummaryRequest,
    TemplateRequest,
    TranscriptRequest,
)
from video_insights.ingestion.models import Document
from video_insights.ingestion.pipeline import AUTO_LANGUAGE, ingest_transcript
from video_insights.pipeline_config import TranscriptFormat
from video_insights.providers.base import UnsupportedOperationError
from video_insights.providers.models import (
    HeatmapPoint,
    KeywordResponse,
    MindMapNode,
    QAResult,
    SentimentTimeline,
    SummaryLength,
    SummaryResponse,
    TemplateOutput,
)
from video_insights.services.export import ExportRequest, consume_export, create_export_package
from video_insights.storage.transcripts import TranscriptStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/analyze", tags=["analyze"])


def resolve_document(body: TranscriptRequest, store: TranscriptStore) -> Document:
    """Find or build the document a request refers to.

    An explicit language first looks for a stored transcript. Otherwise the
    request's ``transcript`` text is parsed, normalized and language-detected;
    the result is stored only when the language was left to detection.
    """
    explicit = bool(body.language) and body.language != AUTO_LANGUAGE
    if explicit:
        stored = store.get(body.video_id, body.language)
        if stored is not None:
            return stored

    if not body.transcript:
        raise ApiError(400, "invalid_request", "Transcript required")

    document, _ = ingest_transcript(
        body.video_id,
        body.transcript,
        TranscriptFormat.TEXT,
        language=body.language if explicit else None,
    )
    if not explicit:
        store.save(document)
    return document


@router.post("/summary", response_model=SummaryResponse)
def summary(
    body: SummaryRequest, store: TranscriptStoreDep, analysis: AnalysisDep, runtime: RuntimeDep
) -> SummaryResponse:
    return analysis.get_summary(resolve_document(body, store), body.length, runtime)


@router.post("/mindmap", response_model=MindMapNode)
def mind_map(
    body: TranscriptRequest, store: TranscriptStoreDep, analysis: AnalysisDep, runtime: RuntimeDep
) -> MindMapNode:
    return analysis.get_mind_map(resolve_document(body, store), runtime)


@router.post("/keywords", response_model=KeywordResponse)
def keywords(
    body: TranscriptRequest, store: TranscriptStoreDep, analysis: AnalysisDep, runtime: RuntimeDep
) -> KeywordResponse:
    return analysis.get_keywords(resolve_document(body, store), runtime)


@router.post("/qa", response_model=QAResult)
def qa(body: QARequest, store: TranscriptStoreDep, analysis: AnalysisDep, runtime: RuntimeDep) -> QAResult:
    return analysis.get_qa(resolve_document(body, store), body.question, runtime)


@router.post("/sentiment", response_model=SentimentTimeline)
def sentiment(
    body: TranscriptRequest, store: TranscriptStoreDep, analysis: AnalysisDep, runtime: RuntimeDep
) -> SentimentTimeline:
    return analysis.get_sentiment(resolve_document(body, store), runtime)


@router.post("/heatmap", response_model=list[HeatmapPoint])
def heatmap(
    body: TranscriptRequest, store: TranscriptStoreDep, analysis: AnalysisDep, runtime: RuntimeDep
) -> list[HeatmapPoint]:
    return analysis.get_heatmap(resolve_document(body, store), runtime)


@router.post("/templates", response_model=TemplateOutput)
def templates(
    body: TemplateRequest, store: TranscriptStoreDep, analysis: AnalysisDep, runtime: RuntimeDep
) -> TemplateOutput:
    return analysis.get_template(resolve_document(body, store), body.kind, runtime)


@router.post("/export", response_model=ExportInfo)
def export(
    body: ExportFileRequest,
    store: TranscriptStoreDep,
    exports: ExportStoreDep,
    analysis: AnalysisDep,
    runtime: RuntimeDep,
) -> ExportInfo:
    """Render a downloadable package and return its single-use URL.

    The sentiment section is left out when the provider has no sentiment timeline.
    """
    document = resolve_document(body, store)
    summary_result = analysis.get_summary(document, SummaryLength.DETAILED, runtime)
    keyword_result = analysis.get_keywords(document, runtime)
    try:
        sentiment_result: SentimentTimeline | None = analysis.get_sentiment(document, runtime)
    except UnsupportedOperationError as exc:
        logger.info("Exporting %s without sentiment: %s", document.video_id, exc)
        sentiment_result = None

    package = create_export_package(
        ExportRequest(
            document=document,
            format=body.format,
            summary=summary_result,
            keywords=keyword_result,
            sentiment=sentiment_result,
        ),
        exports,
    )
    return ExportInfo(format=package.format, url=package.url, expires_at=package.expires_at)


@router.get("/export/{token}")
def download_export(token: str, exports: ExportStoreDep) -> Response:
    entry = consume_export(token, exports)
    if entry is None:
        raise ApiError(404, "export_not_found", "Export expired or missing")
    return Response(
        content=entry.content,
        media_type=entry.mime_type,
        headers={"Content-Disposition": f'attachment; filename="{entry.filename}"'},
    )
