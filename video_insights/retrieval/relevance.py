"""Keyword-overlap relevance ranking of transcript chunks against a question."""

from __future__ import annotations

import re
from collections.abc import Sequence

from video_insights.ingestion.models import Chunk
from video_insights.pipeline_config import CHUNKING

_NON_ALNUM_RE = re.compile(r"[^a-z0-9\s]")

# Keywords longer than this count double
_LONG_KEYWORD_LENGTH = 4


def extract_keywords(query: str) -> list[str]:
    """Lower-case *query*, blank out punctuation and split on whitespace.

    Duplicates are kept, so a word repeated in the question weighs more.
    """
    return _NON_ALNUM_RE.sub(" ", query.lower()).split()


def score_chunk(chunk: Chunk, keywords: Sequence[str]) -> int:
    """Sum weighted substring hits of every keyword in the chunk text.

    Matching is by substring rather than by word, so ``"topic"`` also hits
    ``"topics"``. Occurrences are counted without overlap.
    """
    text = chunk.text.lower()
    score = 0
    for keyword in keywords:
        if not keyword:
            continue
        weight = 2 if len(keyword) > _LONG_KEYWORD_LENGTH else 1
        score += text.count(keyword) * weight
    return score


def select_relevant_chunks(
    chunks: Sequence[Chunk],
    query: str,
    limit: int = CHUNKING.remote_qa_limit,
) -> list[Chunk]:
    """Return up to *limit* chunks matching *query*, best first.

    Chunks scoring zero are dropped. Ties keep their original order.

    Raises:
        ValueError: If *limit* is not positive.
    """
    if limit <= 0:
        msg = f"limit must be positive, got {limit}"
        raise ValueError(msg)

    keywords = extract_keywords(query)
    scored = [(score_chunk(chunk, keywords), chunk) for chunk in chunks]
    matching = [pair for pair in scored if pair[0] > 0]
    # sorted() is stable: equal scores stay in transcript order
    matching = sorted(matching, key=lambda pair: pair[0], reverse=True)
    return [chunk for _, chunk in matching[:limit]]
