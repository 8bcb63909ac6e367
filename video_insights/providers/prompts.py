"""Prompt builders shared by the remote providers."""

from __future__ import annotations

from video_insights.providers.models import SummaryLength, TemplateKind

SYSTEM_PROMPT = (
    "You are an expert video analyst generating structured insights strictly "
    "from transcript text. Always respond with a single JSON object and nothing else."
)

_TRANSCRIPT_BLOCK = '\nTranscript:\n"""\n{transcript}\n"""\n'


def build_summary_prompt(transcript: str, length: SummaryLength, language: str) -> str:
    return (
        f"Provide a {length.value} summary in {language} with concise bullet points and "
        "craft auto chapters.\n"
        "Respond as JSON with keys short, medium, detailed, chapters "
        "(array of {title,start,end,description}) with times in seconds."
        + _TRANSCRIPT_BLOCK.format(transcript=transcript)
    )


def build_mind_map_prompt(transcript: str, language: str) -> str:
    return (
        f"Analyse the transcript and build a hierarchical mind map in {language}.\n"
        "Return JSON { id, label, children: [{ id, label, start, end, children }] } "
        "with timestamps in seconds.\n"
        "Focus on actionable structure."
        + _TRANSCRIPT_BLOCK.format(transcript=transcript)
    )


def build_keyword_prompt(transcript: str, language: str) -> str:
    return (
        f"Extract critical keywords from the transcript in {language}. Provide JSON with keys "
        "topics (array of {term,weight,sentiment,tags}), seoTags (array of strings), "
        "overallTone ('positive'|'neutral'|'negative')."
        + _TRANSCRIPT_BLOCK.format(transcript=transcript)
    )


def build_qa_prompt(transcript: str, language: str, question: str) -> str:
    return (
        f"Answer the question strictly using the transcript below in {language}. "
        "Provide JSON {answer, citations:[{text,start,end}]}. If the transcript does not "
        "contain the answer, say so in the answer field.\n"
        f"Question: {question}"
        + _TRANSCRIPT_BLOCK.format(transcript=transcript)
    )


def build_template_prompt(transcript: str, language: str, kind: TemplateKind) -> str:
    return (
        f"Generate a {kind.value} template in {language} from the transcript.\n"
        "Return JSON {kind, summary, content} where content is a structured object "
        f"appropriate for {kind.value}."
        + _TRANSCRIPT_BLOCK.format(transcript=transcript)
    )
