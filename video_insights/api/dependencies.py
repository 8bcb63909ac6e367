"""FastAPI dependencies resolving the per-app services stored on ``app.state``."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Header, Request

from video_insights.config import Settings
from video_insights.services.analysis import AnalysisService
from video_insights.storage.exports import ExportStore
from video_insights.storage.transcripts import TranscriptStore


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings  # type: ignore[no-any-return]


def get_transcript_store(request: Request) -> TranscriptStore:
    return request.app.state.transcripts  # type: ignore[no-any-return]


def get_export_store(request: Request) -> ExportStore:
    return request.app.state.exports  # type: ignore[no-any-return]


def get_analysis_service(request: Request) -> AnalysisService:
    return request.app.state.analysis  # type: ignore[no-any-return]


def get_runtime(x_ai_provider: Annotated[str | None, Header()] = None) -> str | None:
    """Runtime override from the ``X-AI-Provider`` header, lower-cased."""
    if x_ai_provider is None or not x_ai_provider.strip():
        return None
    return x_ai_provider.strip().lower()


SettingsDep = Annotated[Settings, Depends(get_app_settings)]
TranscriptStoreDep = Annotated[TranscriptStore, Depends(get_transcript_store)]
ExportStoreDep = Annotated[ExportStore, Depends(get_export_store)]
AnalysisDep = Annotated[AnalysisService, Depends(get_analysis_service)]
RuntimeDep = Annotated[str | None, Depends(get_runtime)]
