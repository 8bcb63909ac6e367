"""Prompt-driven provider shared by the hosted LLM backends."""

from __future__ import annotations

import logging
from abc import abstractmethod
from typing import Any

from video_insights.ingestion.chunking import chunk_transcript
from video_insights.pipeline_config import CHUNKING
from video_insights.providers.base import AnalysisProvider, AnalyzeInput, Operation, sources_for
from video_insights.providers.models import (
    KeywordResponse,
    MindMapNode,
    QAResult,
    SegmentModel,
    SummaryLength,
    SummaryResponse,
    TemplateKind,
    TemplateOutput,
)
from video_insights.providers.parsing import (
    combine_chunks,
    safe_json_parse,
    to_answer,
    to_keyword_response,
    to_mind_map,
    to_summary_response,
    to_template_output,
)
from video_insights.providers.prompts import (
    build_keyword_prompt,
    build_mind_map_prompt,
    build_qa_prompt,
    build_summary_prompt,
    build_template_prompt,
)
from video_insights.retrieval.relevance import select_relevant_chunks

logger = logging.getLogger(__name__)


class RemoteProvider(AnalysisProvider):
    """Builds prompts, sends them through :meth:`_complete`, and parses JSON with defaults.

    Subclasses only implement :meth:`_complete`. Sentiment timelines and
    heatmaps are not offered by hosted backends.
    """

    optional_operations = frozenset({Operation.TEMPLATES})

    def __init__(self, model: str) -> None:
        self.model = model

    @abstractmethod
    def _complete(self, prompt: str) -> str:
        """Send *prompt* and return the raw text of the model's JSON reply."""

    def _run_prompt(self, prompt: str) -> dict[str, Any]:
        logger.debug("Sending %d-char prompt to %s (%s)", len(prompt), self.name, self.model)
        return safe_json_parse(self._complete(prompt))

    def summarize(self, payload: AnalyzeInput, length: SummaryLength) -> SummaryResponse:
        prompt = build_summary_prompt(combine_chunks(payload.transcript), length, payload.language)
        return to_summary_response(self._run_prompt(prompt))

    def extract_mind_map(self, payload: AnalyzeInput) -> MindMapNode:
        prompt = build_mind_map_prompt(combine_chunks(payload.transcript), payload.language)
        return to_mind_map(self._run_prompt(prompt))

    def extract_keywords(self, payload: AnalyzeInput) -> KeywordResponse:
        prompt = build_keyword_prompt(combine_chunks(payload.transcript), payload.language)
        return to_keyword_response(self._run_prompt(prompt))

    def qa(self, payload: AnalyzeInput, question: str) -> QAResult:
        """Send only the chunks most relevant to *question* as context."""
        chunks = chunk_transcript(payload.segments, CHUNKING.remote_qa_size)
        relevant = select_relevant_chunks(chunks, question, CHUNKING.remote_qa_limit)
        prompt = build_qa_prompt(
            "\n".join(chunk.text for chunk in relevant),
            payload.language,
            question,
        )
        return QAResult(
            question=question,
            answer=to_answer(self._run_prompt(prompt)),
            sources=[SegmentModel.from_segment(s) for s in sources_for(relevant, payload.segments)],
        )

    def templates(self, payload: AnalyzeInput, kind: TemplateKind) -> TemplateOutput:
        prompt = build_template_prompt(combine_chunks(payload.transcript), payload.language, kind)
        return to_template_output(self._run_prompt(prompt), kind)
