"""Coerce loosely-typed provider JSON into typed result models.

Remote models return JSON whose shape is only suggested by the prompt.
Every payload passes through one of the ``to_*`` functions here, which fill
defaults and drop malformed entries, so nothing untyped leaks past the
provider boundary.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any

from pydantic import ValidationError

from video_insights.providers.models import (
    Chapter,
    KeywordEntry,
    KeywordResponse,
    MindMapNode,
    SummaryResponse,
    TemplateKind,
    TemplateOutput,
    Tone,
)

logger = logging.getLogger(__name__)

DEFAULT_PROMPT_CHARS = 6000
ROOT_NODE_ID = "root"
ROOT_NODE_LABEL = "Video Overview"

_FENCE_RE = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL)
_SLUG_RE = re.compile(r"[^a-z0-9]+")


def safe_json_parse(text: str) -> dict[str, Any]:
    """Parse a JSON object, tolerating Markdown code fences; ``{}`` on failure."""
    stripped = text.strip()
    fenced = _FENCE_RE.match(stripped)
    if fenced:
        stripped = fenced.group(1)
    try:
        data = json.loads(stripped)
    except json.JSONDecodeError:
        logger.warning("Provider returned non-JSON output (%d chars)", len(text))
        return {}
    return data if isinstance(data, dict) else {}


def combine_chunks(transcript: str, max_chars: int = DEFAULT_PROMPT_CHARS) -> str:
    """Keep whole transcript lines from the top until *max_chars* is reached."""
    if len(transcript) <= max_chars:
        return transcript
    kept: list[str] = []
    total = 0
    for line in re.split(r"\n+", transcript):
        if total + len(line) > max_chars:
            break
        kept.append(line)
        total += len(line)
    return "\n".join(kept)


def _text(value: Any, default: str = "") -> str:
    return value if isinstance(value, str) else default


def _number(value: Any, default: float = 0.0) -> float:
    if isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        return float(value)
    return default


def slugify(label: str) -> str:
    return _SLUG_RE.sub("-", label.lower()).strip("-") or "node"


def to_summary_response(payload: dict[str, Any]) -> SummaryResponse:
    """Fill missing summary lengths from the next shorter one."""
    short = _text(payload.get("short"))
    medium = _text(payload.get("medium")) or short
    detailed = _text(payload.get("detailed")) or medium

    chapters: list[Chapter] = []
    raw_chapters = payload.get("chapters")
    for raw in raw_chapters if isinstance(raw_chapters, list) else []:
        if not isinstance(raw, dict) or not _text(raw.get("title")):
            continue
        chapters.append(
            Chapter(
                title=raw["title"],
                start=_number(raw.get("start")),
                end=_number(raw.get("end")),
                description=_text(raw.get("description")) or None,
            )
        )

    return SummaryResponse(short=short, medium=medium, detailed=detailed, chapters=chapters)


def _to_node(raw: dict[str, Any], fallback_label: str) -> MindMapNode:
    label = _text(raw.get("label")) or fallback_label
    children_raw = raw.get("children")
    children = [
        _to_node(child, f"{label} {index + 1}")
        for index, child in enumerate(children_raw if isinstance(children_raw, list) else [])
        if isinstance(child, dict)
    ]
    start = raw.get("start")
    end = raw.get("end")
    return MindMapNode(
        id=_text(raw.get("id")) or slugify(label),
        label=label,
        start=_number(start) if start is not None else None,
        end=_number(end) if end is not None else None,
        children=children,
    )


def to_mind_map(payload: dict[str, Any]) -> MindMapNode:
    """Build a mind map tree; an empty payload yields a bare root node."""
    if not payload:
        return MindMapNode(id=ROOT_NODE_ID, label=ROOT_NODE_LABEL)
    return _to_node(payload, ROOT_NODE_LABEL)


def _to_tone(value: Any) -> Tone | None:
    try:
        return Tone(value)
    except ValueError:
        return None


def to_keyword_response(payload: dict[str, Any]) -> KeywordResponse:
    topics: list[KeywordEntry] = []
    raw_topics = payload.get("topics")
    for raw in raw_topics if isinstance(raw_topics, list) else []:
        if not isinstance(raw, dict) or not _text(raw.get("term")):
            continue
        tags = raw.get("tags")
        topics.append(
            KeywordEntry(
                term=raw["term"],
                weight=_number(raw.get("weight")),
                sentiment=_to_tone(raw.get("sentiment")),
                tags=[t for t in tags if isinstance(t, str)] if isinstance(tags, list) else None,
            )
        )

    seo_raw = payload.get("seoTags", payload.get("seo_tags"))
    seo_tags = [t for t in seo_raw if isinstance(t, str)] if isinstance(seo_raw, list) else []
    tone = _to_tone(payload.get("overallTone", payload.get("overall_tone"))) or Tone.NEUTRAL

    return KeywordResponse(topics=topics, seo_tags=seo_tags, overall_tone=tone)


def to_answer(payload: dict[str, Any]) -> str:
    return _text(payload.get("answer"))


def to_template_output(payload: dict[str, Any], kind: TemplateKind) -> TemplateOutput:
    """The requested *kind* always wins over whatever kind the model echoed back."""
    content = payload.get("content")
    try:
        return TemplateOutput(
            kind=kind,
            summary=_text(payload.get("summary")),
            content=content if isinstance(content, dict) else {},
        )
    except ValidationError:
        logger.warning("Discarding unserializable %s template content", kind.value)
        return TemplateOutput(kind=kind, summary=_text(payload.get("summary")))
