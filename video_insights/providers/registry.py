"""Provider registry: resolves a runtime name to a cached provider instance."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable

from video_insights.config import Settings
from video_insights.pipeline_config import ProviderRuntime
from video_insights.providers.base import AnalysisProvider
from video_insights.providers.local import LocalProvider

logger = logging.getLogger(__name__)


def _openai(settings: Settings) -> AnalysisProvider:
    from video_insights.providers.openai_provider import OpenAIProvider

    return OpenAIProvider(api_key=settings.openai_api_key, model=settings.openai_model)


def _anthropic(settings: Settings) -> AnalysisProvider:
    from video_insights.providers.anthropic_provider import AnthropicProvider

    return AnthropicProvider(api_key=settings.anthropic_api_key, model=settings.anthropic_model)


def _gemini(settings: Settings) -> AnalysisProvider:
    from video_insights.providers.gemini_provider import GeminiProvider

    return GeminiProvider(api_key=settings.gemini_api_key, model=settings.gemini_model)


# Remote runtime -> (settings attribute holding its key, factory)
_REMOTE_FACTORIES: dict[ProviderRuntime, tuple[str, Callable[[Settings], AnalysisProvider]]] = {
    ProviderRuntime.OPENAI: ("openai_api_key", _openai),
    ProviderRuntime.ANTHROPIC: ("anthropic_api_key", _anthropic),
    ProviderRuntime.GEMINI: ("gemini_api_key", _gemini),
}

_KNOWN_RUNTIMES = frozenset(runtime.value for runtime in ProviderRuntime)


class ProviderRegistry:
    """Creates providers on first use and reuses them per runtime name.

    One registry is built per application and handed to whoever needs a
    provider. A remote runtime without a configured API key, or an
    unknown runtime name, resolves to the local provider.
    """

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self._providers: dict[str, AnalysisProvider] = {}
        self._lock = threading.Lock()

    def _build(self, runtime: str) -> AnalysisProvider:
        if runtime == ProviderRuntime.LOCAL.value:
            return LocalProvider()
        key_attr, factory = _REMOTE_FACTORIES[ProviderRuntime(runtime)]
        if not getattr(self.settings, key_attr):
            logger.warning("No API key configured for %s; using local provider", runtime)
            return LocalProvider()
        return factory(self.settings)

    def resolve(self, runtime: str | None = None) -> AnalysisProvider:
        """Return the provider for *runtime* (default: ``settings.ai_runtime_provider``)."""
        name = (runtime or self.settings.ai_runtime_provider).strip().lower()
        if name not in _KNOWN_RUNTIMES:
            logger.warning("Unknown provider runtime %r; using local provider", name)
            name = ProviderRuntime.LOCAL.value
        with self._lock:
            provider = self._providers.get(name)
            if provider is None:
                provider = self._build(name)
                self._providers[name] = provider
                logger.info("Provider runtime %s resolved to %s", name, provider.name)
        return provider

    def clear(self) -> None:
        with self._lock:
            self._providers.clear()
