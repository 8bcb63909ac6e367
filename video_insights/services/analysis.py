"""Cached analysis operations on top of the provider registry."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, TypeVar

from video_insights.ingestion.models import Document
from video_insights.providers.base import AnalysisProvider, AnalyzeInput, build_input
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
from video_insights.providers.registry import ProviderRegistry
from video_insights.storage.cache import CacheKey, TTLCache

logger = logging.getLogger(__name__)

R = TypeVar("R")

DEFAULT_ANALYSIS_TTL = 60 * 10


def build_cache_key(document: Document, operation: str, runtime: str | None = None) -> CacheKey:
    """Key results by document, operation and (when overridden) provider runtime."""
    return CacheKey(
        video_id=document.video_id,
        language=document.language,
        operation=f"{operation}:{runtime}" if runtime else operation,
    )


class AnalysisService:
    """Runs provider operations for a document, caching each result for a while."""

    def __init__(
        self,
        registry: ProviderRegistry,
        cache: TTLCache[Any] | None = None,
        ttl_seconds: float = DEFAULT_ANALYSIS_TTL,
    ) -> None:
        self.registry = registry
        self.cache: TTLCache[Any] = cache if cache is not None else TTLCache()
        self.ttl_seconds = ttl_seconds

    def _cached(
        self,
        document: Document,
        operation: str,
        runtime: str | None,
        run: Callable[[AnalysisProvider, AnalyzeInput], R],
    ) -> R:
        key = build_cache_key(document, operation, runtime).serialize()
        cached = self.cache.get(key)
        if cached is not None:
            logger.debug("Cache hit for %s", key)
            return cached  # type: ignore[no-any-return]

        provider = self.registry.resolve(runtime)
        result = run(provider, build_input(document))
        self.cache.set(key, result, self.ttl_seconds)
        return result

    def get_summary(self, document: Document, length: SummaryLength, runtime: str | None = None) -> SummaryResponse:
        return self._cached(
            document, f"summary:{length.value}", runtime, lambda p, payload: p.summarize(payload, length)
        )

    def get_mind_map(self, document: Document, runtime: str | None = None) -> MindMapNode:
        return self._cached(document, "mindmap", runtime, lambda p, payload: p.extract_mind_map(payload))

    def get_keywords(self, document: Document, runtime: str | None = None) -> KeywordResponse:
        return self._cached(document, "keywords", runtime, lambda p, payload: p.extract_keywords(payload))

    def get_qa(self, document: Document, question: str, runtime: str | None = None) -> QAResult:
        return self._cached(document, f"qa:{question}", runtime, lambda p, payload: p.qa(payload, question))

    def get_sentiment(self, document: Document, runtime: str | None = None) -> SentimentTimeline:
        return self._cached(document, "sentiment", runtime, lambda p, payload: p.sentiment_timeline(payload))

    def get_heatmap(self, document: Document, runtime: str | None = None) -> list[HeatmapPoint]:
        return self._cached(document, "heatmap", runtime, lambda p, payload: p.heatmap(payload))

    def get_template(self, document: Document, kind: TemplateKind, runtime: str | None = None) -> TemplateOutput:
        return self._cached(
            document, f"template:{kind.value}", runtime, lambda p, payload: p.templates(payload, kind)
        )
