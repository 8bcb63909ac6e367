"""Pipeline configuration: analysis enums and the ChunkingConfig dataclass."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class TranscriptSource(str, Enum):
    """Where a transcript document came from."""

    UPLOADED = "uploaded"
    YOUTUBE = "youtube"


class TranscriptFormat(str, Enum):
    """Transcript file formats accepted at intake."""

    SRT = "srt"
    VTT = "vtt"
    TEXT = "text"


class ProviderRuntime(str, Enum):
    """Names of the analysis provider runtimes."""

    LOCAL = "local"
    OPENAI = "openai"
    ANTHROPIC = "anthropic"
    GEMINI = "gemini"


class ExportFormat(str, Enum):
    """Downloadable export document formats."""

    MARKDOWN = "markdown"
    PDF = "pdf"
    CSV = "csv"


@dataclass(frozen=True)
class ChunkingConfig:
    """Immutable chunk budgets (in characters) and relevance limits.

    Each analysis path chunks the transcript with its own budget; Q&A
    paths also cap how many relevant chunks reach the provider.
    """

    default_size: int = 1200
    mind_map_size: int = 800
    sentiment_size: int = 600
    local_qa_size: int = 1000
    remote_qa_size: int = 1200
    local_qa_limit: int = 3
    remote_qa_limit: int = 4


CHUNKING = ChunkingConfig()
