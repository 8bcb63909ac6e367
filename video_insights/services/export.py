"""Export packaging: render analysis results to markdown, CSV or PDF."""

from __future__ import annotations

import csv
import io
import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

import markdown

from video_insights.ingestion.models import Document, Segment
from video_insights.pipeline_config import ExportFormat
from video_insights.providers.models import KeywordResponse, SentimentTimeline, SummaryResponse
from video_insights.storage.exports import ExportEntry, ExportStore

logger = logging.getLogger(__name__)

SEGMENT_LIMIT = 500
PDF_SEGMENT_LIMIT = 40
EXPORT_TITLE = "Video Insights Export"
EXPORT_URL_PREFIX = "/api/analyze/export/"

HTML_TEMPLATE = """<!doctype html>
<html>
<head>
  <meta charset="utf-8" />
  <title>__TITLE__</title>
  <style>
    @page { margin: 17mm; }
    body { font-family: Arial, Helvetica, sans-serif; font-size: 12px; line-height: 1.45; color: #111; }
    h1 { font-size: 20px; text-align: center; margin: 0 0 12px; }
    h2 { font-size: 16px; margin: 18px 0 8px; }
    h3 { font-size: 13px; margin: 12px 0 6px; }
    li { margin: 3px 0; }
    .pagebreak { page-break-before: always; }
  </style>
</head>
<body>
__CONTENT__
</body>
</html>
"""

_PAGEBREAK = '<div class="pagebreak"></div>'


@dataclass(frozen=True)
class ExportRequest:
    document: Document
    format: ExportFormat
    summary: SummaryResponse
    keywords: KeywordResponse
    sentiment: SentimentTimeline | None = None


@dataclass(frozen=True)
class ExportResponse:
    format: ExportFormat
    url: str
    expires_at: str


def format_time(seconds: float) -> str:
    """Render seconds as ``MM:SS`` (minutes are not wrapped at the hour)."""
    minutes, secs = divmod(int(seconds), 60)
    return f"{minutes:02d}:{secs:02d}"


def _keyword_line(term: str, weight: float, sentiment: str | None) -> str:
    tone = f", {sentiment}" if sentiment else ""
    return f"- {term} (weight: {weight:g}{tone})"


def _summary_lines(request: ExportRequest) -> list[str]:
    summary = request.summary
    lines = [
        "## Summary",
        "### Short",
        summary.short,
        "",
        "### Medium",
        summary.medium,
        "",
        "### Detailed",
        summary.detailed,
        "",
        "## Chapters",
    ]
    for index, chapter in enumerate(summary.chapters, 1):
        lines.append(f"- [{index}] {chapter.title} ({format_time(chapter.start)} - {format_time(chapter.end)})")
        if chapter.description:
            lines.append(f"  - {chapter.description}")
    return lines


def _analysis_lines(request: ExportRequest) -> list[str]:
    lines = ["## Keywords"]
    for topic in request.keywords.topics:
        lines.append(_keyword_line(topic.term, topic.weight, topic.sentiment.value if topic.sentiment else None))

    if request.sentiment is not None:
        lines += ["", "## Sentiment Overview", f"Average score: {request.sentiment.average_score:.2f}", ""]
        for point in request.sentiment.points:
            lines.append(f"- {format_time(point.time)} → {point.label.value} ({point.score:g})")
    return lines


def _header_lines(document: Document) -> list[str]:
    return [f"# {EXPORT_TITLE}", f"- Video ID: {document.video_id}", f"- Language: {document.language}", ""]


def render_markdown(request: ExportRequest) -> bytes:
    document = request.document
    lines = [*_header_lines(document), *_summary_lines(request), "", *_analysis_lines(request)]

    lines += ["", "## Transcript Highlights", "| Start | End | Text |", "| --- | --- | --- |"]
    for segment in document.segments[:SEGMENT_LIMIT]:
        text = segment.text.replace("|", "\\|")
        lines.append(f"| {format_time(segment.start)} | {format_time(segment.end)} | {text} |")

    if len(document.segments) > SEGMENT_LIMIT:
        lines += ["", f"> Transcript truncated to first {SEGMENT_LIMIT} segments."]

    return "\n".join(lines).encode("utf-8")


def render_csv(request: ExportRequest) -> bytes:
    segments = request.document.segments
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
    writer.writerow(["start", "end", "text"])
    for segment in segments[:SEGMENT_LIMIT]:
        writer.writerow([f"{segment.start:.2f}", f"{segment.end:.2f}", segment.text])
    if len(segments) > SEGMENT_LIMIT:
        buffer.write(f"# truncated to {SEGMENT_LIMIT} segments\n")
    return buffer.getvalue().encode("utf-8")


def _pdf_transcript_lines(segments: tuple[Segment, ...]) -> list[str]:
    lines = ["## Transcript Highlights", ""]
    for index, segment in enumerate(segments[:PDF_SEGMENT_LIMIT], 1):
        lines.append(f"{index}. [{format_time(segment.start)} - {format_time(segment.end)}] {segment.text}")
    if len(segments) > PDF_SEGMENT_LIMIT:
        lines += ["", f"*Transcript truncated to first {PDF_SEGMENT_LIMIT} segments.*"]
    return lines


def build_pdf_html(request: ExportRequest) -> str:
    """Lay the export out as HTML pages: summary, analysis, then transcript."""
    sections = [
        [*_header_lines(request.document), *_summary_lines(request)],
        _analysis_lines(request),
        _pdf_transcript_lines(request.document.segments),
    ]
    body = f"\n{_PAGEBREAK}\n".join(
        markdown.markdown("\n".join(section), extensions=["extra"]) for section in sections
    )
    return HTML_TEMPLATE.replace("__TITLE__", EXPORT_TITLE).replace("__CONTENT__", body)


def render_pdf(request: ExportRequest) -> bytes:
    """Print the export HTML to an A4 PDF with headless Chromium."""
    from playwright.sync_api import sync_playwright

    html = build_pdf_html(request)
    with sync_playwright() as p:
        browser = p.chromium.launch()
        try:
            page = browser.new_page()
            page.set_content(html, wait_until="load")
            page.emulate_media(media="screen")
            return page.pdf(format="A4", print_background=True)
        finally:
            browser.close()


# format -> (renderer, mime type, file extension)
RENDERERS: dict[ExportFormat, tuple[Callable[[ExportRequest], bytes], str, str]] = {
    ExportFormat.MARKDOWN: (render_markdown, "text/markdown", "md"),
    ExportFormat.CSV: (render_csv, "text/csv", "csv"),
    ExportFormat.PDF: (render_pdf, "application/pdf", "pdf"),
}


def build_export(request: ExportRequest, ttl_seconds: float) -> ExportEntry:
    renderer, mime_type, extension = RENDERERS[request.format]
    return ExportEntry(
        content=renderer(request),
        mime_type=mime_type,
        filename=f"insights-{request.document.video_id}.{extension}",
        expires_at=datetime.now(UTC) + timedelta(seconds=ttl_seconds),
    )


def create_export_package(request: ExportRequest, store: ExportStore) -> ExportResponse:
    """Render *request*, park the file in *store* and return its download info."""
    entry = build_export(request, store.ttl_seconds)
    token = store.put(entry)
    logger.info(
        "Created %s export for %s (%d bytes)",
        request.format.value,
        request.document.video_id,
        len(entry.content),
        extra={"video_id": request.document.video_id, "export_format": request.format.value},
    )
    return ExportResponse(
        format=request.format,
        url=f"{EXPORT_URL_PREFIX}{token}",
        expires_at=entry.expires_at.isoformat().replace("+00:00", "Z"),
    )


def consume_export(token: str, store: ExportStore) -> ExportEntry | None:
    return store.consume(token)
