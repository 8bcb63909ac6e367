"""Transcript parsers for SRT, VTT, and plain text formats."""

from __future__ import annotations

import re
from collections.abc import Callable

from video_insights.ingestion.models import Segment

_BLOCK_SPLIT_RE = re.compile(r"\n\s*\n")
_NEWLINES_RE = re.compile(r"\n+")
_TIMING_RE = re.compile(
    r"(\d{1,2}:\d{2}:\d{2}(?:[.,]\d{1,3})?|\d{1,2}:\d{2}[.,]\d{1,3})\s*-->\s*"
    r"(\d{1,2}:\d{2}:\d{2}(?:[.,]\d{1,3})?|\d{1,2}:\d{2}[.,]\d{1,3})"
)
# WebVTT voice tag; the closing </v> is optional in WebVTT.
_VOICE_RE = re.compile(r"^<v(?:\.[\w.-]+)?\s+([^>]+)>(.*?)(?:</v>)?$", re.DOTALL)
_VTT_HEADER_RE = re.compile(r"^\ufeff?WEBVTT[^\n]*", re.IGNORECASE)

# Synthetic timings for cues without a timing line, and for plain text lines
_SRT_STEP_SECONDS = 4
_SRT_SPAN_SECONDS = 3
_TEXT_STEP_SECONDS = 5
_TEXT_SPAN_SECONDS = 4


def parse_timestamp(ts: str) -> float:
    """Convert ``HH:MM:SS,mmm`` / ``HH:MM:SS.mmm`` / ``MM:SS.mmm`` to seconds."""
    parts = ts.strip().replace(",", ".").split(":")
    if len(parts) == 3:
        hours, minutes, seconds = parts
    elif len(parts) == 2:
        hours = "0"
        minutes, seconds = parts
    else:
        return 0.0
    return int(hours) * 3600 + int(minutes) * 60 + float(seconds)


def _split_speaker(text: str) -> tuple[str | None, str]:
    """Pull a ``<v Name>`` voice tag off a cue. Other text is kept whole."""
    voice_match = _VOICE_RE.match(text)
    if voice_match:
        return voice_match.group(1).strip(), voice_match.group(2).strip()
    return None, text


def parse_srt(content: str) -> list[Segment]:
    """Parse SubRip cues into segments.

    Each block is ``index``, ``start --> end`` and one or more text lines.
    A block whose timing line is missing gets synthetic timings derived from
    its position. Ids are the block positions.
    """
    segments: list[Segment] = []
    blocks = [b for b in _BLOCK_SPLIT_RE.split(content.replace("\r\n", "\n").strip()) if b.strip()]

    for index, block in enumerate(blocks):
        lines = [line.strip() for line in block.split("\n")]
        timing = next(
            ((i, match) for i, line in enumerate(lines) if (match := _TIMING_RE.search(line))),
            None,
        )

        if timing is None:
            start = float(index * _SRT_STEP_SECONDS)
            end = float(index * _SRT_STEP_SECONDS + _SRT_SPAN_SECONDS)
            text_lines = lines[1:] if len(lines) > 1 and lines[0].isdigit() else lines
        else:
            timing_at, match = timing
            start = parse_timestamp(match.group(1))
            end = parse_timestamp(match.group(2))
            text_lines = lines[timing_at + 1 :]

        speaker, text = _split_speaker(" ".join(line for line in text_lines if line).strip())
        segments.append(Segment(id=str(index), text=text, start=start, end=end, speaker=speaker))

    return segments


def parse_vtt(content: str) -> list[Segment]:
    """Parse a WebVTT file into segments.

    The ``WEBVTT`` header and ``NOTE``/``STYLE`` blocks are dropped, cue
    identifiers are optional, and speaker labels are read from
    ``<v Speaker>`` voice tags.
    """
    body = _VTT_HEADER_RE.sub("", content.replace("\r\n", "\n").strip(), count=1)
    blocks = [
        b
        for b in _BLOCK_SPLIT_RE.split(body.strip())
        if b.strip() and not b.lstrip().startswith(("NOTE", "STYLE", "REGION"))
    ]
    return parse_srt("\n\n".join(blocks))


def parse_plain_text(content: str) -> list[Segment]:
    """Parse pasted text into one segment per non-empty line.

    Runs of newlines count as one break. Line positions drive ids and
    synthetic five-second timings. Lines are kept verbatim, so a
    ``Name: text`` line stays one piece of text with no speaker.
    """
    segments: list[Segment] = []
    for index, line in enumerate(_NEWLINES_RE.split(content)):
        text = line.strip()
        if not text:
            continue
        segments.append(
            Segment(
                id=str(index),
                text=text,
                start=float(index * _TEXT_STEP_SECONDS),
                end=float(index * _TEXT_STEP_SECONDS + _TEXT_SPAN_SECONDS),
            )
        )
    return segments


def parse_transcript(content: str, format: str) -> list[Segment]:
    """Dispatch to the correct parser based on *format*.

    Args:
        content: Raw transcript text.
        format: One of ``"srt"``, ``"vtt"``, or ``"text"`` / ``"plain_text"`` / ``"txt"``.

    Returns:
        Parsed transcript segments.

    Raises:
        ValueError: If *format* is not recognized.
    """
    dispatch: dict[str, Callable[[str], list[Segment]]] = {
        "srt": parse_srt,
        "vtt": parse_vtt,
        "text": parse_plain_text,
        "plain_text": parse_plain_text,
        "txt": parse_plain_text,
    }

    parser = dispatch.get(format.lower())
    if parser is None:
        msg = f"Unknown transcript format: {format!r}. Supported: {list(dispatch.keys())}"
        raise ValueError(msg)

    return parser(content)
