"""Transcript endpoints: upload, normalize, detect language, and fetch stored documents."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, File, Form, UploadFile

from video_insights.api.dependencies import SettingsDep, TranscriptStoreDep
from video_insights.api.errors import ApiError
from video_insights.api.models import (
    DetectionModel,
    DetectRequest,
    DocumentModel,
    NormalizeRequest,
    TranscriptResponse,
)
from video_insights.ingestion.language import LanguageDetection, detect_language
from video_insights.ingestion.models import Document
from video_insights.ingestion.pipeline import ingest_transcript
from video_insights.pipeline_config import TranscriptFormat

router = APIRouter(prefix="/api/transcript", tags=["transcript"])

# Subtitle file extensions accepted by the upload endpoint
SUBTITLE_FORMATS = {"srt": TranscriptFormat.SRT, "vtt": TranscriptFormat.VTT}


def _response(document: Document, detection: LanguageDetection) -> TranscriptResponse:
    return TranscriptResponse(
        document=DocumentModel.from_document(document),
        detection=DetectionModel.from_detection(detection),
    )


@router.post("/upload", response_model=TranscriptResponse)
async def upload(
    settings: SettingsDep,
    store: TranscriptStoreDep,
    video_id: Annotated[str, Form()],
    language: Annotated[str | None, Form()] = None,
    file: Annotated[UploadFile | None, File()] = None,
    transcript: Annotated[str | None, Form()] = None,
) -> TranscriptResponse:
    """Ingest an ``.srt``/``.vtt`` file or a plain-text transcript and store it.

    A file takes precedence over the ``transcript`` form field. Without an
    explicit ``language`` (or with ``auto``) the detected language is used.
    """
    if not video_id.strip():
        raise ApiError(400, "invalid_request", "Missing video_id")

    if file is not None:
        raw = await file.read()
        if len(raw) > settings.max_upload_bytes:
            raise ApiError(
                413,
                "file_too_large",
                f"File too large. Maximum size is {settings.max_upload_bytes // (1024 * 1024)} MB.",
            )
        filename = file.filename or ""
        ext = filename.rsplit(".", 1)[-1].lower() if "." in filename else ""
        if ext not in SUBTITLE_FORMATS:
            raise ApiError(400, "unsupported_format", "Only SRT or VTT supported")
        try:
            content = raw.decode("utf-8-sig")
        except UnicodeDecodeError as exc:
            raise ApiError(400, "unsupported_format", "Transcript file must be UTF-8 text") from exc
        transcript_format = SUBTITLE_FORMATS[ext]
    elif transcript:
        content = transcript
        transcript_format = TranscriptFormat.TEXT
    else:
        raise ApiError(400, "invalid_request", "No transcript provided")

    document, detection = ingest_transcript(video_id, content, transcript_format, language=language)
    store.save(document)
    return _response(document, detection)


@router.post("/normalize", response_model=TranscriptResponse)
async def normalize(body: NormalizeRequest, store: TranscriptStoreDep) -> TranscriptResponse:
    document, detection = ingest_transcript(
        body.video_id, body.transcript, TranscriptFormat.TEXT, language=body.language
    )
    store.save(document)
    return _response(document, detection)


@router.post("/detect", response_model=DetectionModel)
async def detect(body: DetectRequest) -> DetectionModel:
    return DetectionModel.from_detection(detect_language(body.transcript))


@router.get("/{video_id}/{language}", response_model=DocumentModel)
async def get_transcript(video_id: str, language: str, store: TranscriptStoreDep) -> DocumentModel:
    document = store.get(video_id, language)
    if document is None:
        raise ApiError(404, "not_found", "Transcript not found")
    return DocumentModel.from_document(document)
