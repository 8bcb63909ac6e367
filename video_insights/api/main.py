from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from video_insights.api.errors import register_exception_handlers
from video_insights.api.routes.analyze import router as analyze_router
from video_insights.api.routes.transcript import router as transcript_router
from video_insights.api.routes.youtube import router as youtube_router
from video_insights.config import Settings, get_settings
from video_insights.logging_config import configure_logging
from video_insights.providers.registry import ProviderRegistry
from video_insights.services.analysis import AnalysisService
from video_insights.storage.exports import ExportStore
from video_insights.storage.transcripts import TranscriptStore


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the API with its own stores, provider registry and analysis cache."""
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Video Insights API",
        description="Transcript analysis for online videos: summaries, mind maps, keywords and Q&A",
        version="0.1.0",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.settings = settings
    app.state.transcripts = TranscriptStore(ttl_seconds=settings.transcript_ttl_seconds)
    app.state.exports = ExportStore(ttl_seconds=settings.export_ttl_seconds)
    app.state.registry = ProviderRegistry(settings)
    app.state.analysis = AnalysisService(
        app.state.registry, ttl_seconds=settings.analysis_cache_ttl_seconds
    )

    register_exception_handlers(app)
    app.include_router(youtube_router)
    app.include_router(transcript_router)
    app.include_router(analyze_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "healthy"}

    return app


app = create_app()
