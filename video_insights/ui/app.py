"""Video Insights -- Streamlit UI.

Load a transcript for a YouTube video, then browse summaries, mind maps,
keywords, sentiment, ask questions and download export packages.
"""

from __future__ import annotations

from typing import Any

import streamlit as st

from video_insights.pipeline_config import ExportFormat, ProviderRuntime
from video_insights.providers.models import SummaryLength, TemplateKind
from video_insights.ui.api_client import (
    analyze,
    check_health,
    download_export,
    get_video_meta,
    upload_transcript,
    validate_url,
)

# ---------------------------------------------------------------------------
# Page config (must be first Streamlit call)
# ---------------------------------------------------------------------------
st.set_page_config(page_title="Video Insights", layout="wide")


def _payload(**extra: Any) -> dict[str, Any]:
    """Request body for the current video; the stored transcript is found by language."""
    return {
        "videoId": st.session_state.get("video_id", ""),
        "language": st.session_state.get("language", "auto"),
        "transcript": st.session_state.get("transcript") or None,
        **extra,
    }


def _render_mind_map(node: dict[str, Any], depth: int = 0) -> None:
    st.markdown(f"{'  ' * depth}- **{node.get('label', '')}**")
    for child in node.get("children", []):
        _render_mind_map(child, depth + 1)


# ---------------------------------------------------------------------------
# Sidebar -- navigation + provider selector + API status
# ---------------------------------------------------------------------------
with st.sidebar:
    st.title("Video Insights")
    st.markdown("---")

    page = st.radio(
        "Navigate",
        ["Load Transcript", "Insights", "Ask Questions", "Export"],
        label_visibility="collapsed",
    )

    st.markdown("---")
    provider: str = st.selectbox(
        "AI provider",
        options=[r.value for r in ProviderRuntime],
        format_func=lambda x: x.capitalize(),
        key="sidebar_provider",
    )

    if st.session_state.get("video_id"):
        st.markdown("---")
        st.write(f"**Video:** {st.session_state['video_id']}")
        st.write(f"**Language:** {st.session_state.get('language', 'auto')}")

    st.markdown("---")
    api_healthy = check_health()
    if api_healthy:
        st.markdown(":green_circle: API connected")
    else:
        st.markdown(":red_circle: API unreachable")

# ---------------------------------------------------------------------------
# Page: Load Transcript
# ---------------------------------------------------------------------------
if page == "Load Transcript":
    st.header("Load Transcript")
    st.write("Paste a YouTube link, then upload subtitles or paste the transcript text.")

    url = st.text_input("YouTube URL", placeholder="https://www.youtube.com/watch?v=...")
    uploaded_file = st.file_uploader("Subtitle file", type=["srt", "vtt"])
    pasted = st.text_area("...or paste the transcript", height=200)
    language = st.text_input("Language (ISO 639-1, or 'auto')", value="auto")

    if st.button("Load", disabled=not url or (uploaded_file is None and not pasted)):
        if not api_healthy:
            st.error("Cannot upload: the API server is not reachable.")
        else:
            check = validate_url(url)
            if not check.get("valid"):
                st.error(check.get("error", "Invalid YouTube URL"))
            else:
                video_id = check["videoId"]
                with st.spinner("Parsing transcript..."):
                    result = upload_transcript(
                        video_id,
                        file_content=uploaded_file.getvalue() if uploaded_file else None,
                        filename=uploaded_file.name if uploaded_file else None,
                        transcript=pasted or None,
                        language=language or "auto",
                    )
                if result:
                    document = result["document"]
                    detection = result["detection"]
                    st.session_state["video_id"] = video_id
                    st.session_state["language"] = document["language"]
                    st.session_state["transcript"] = pasted
                    st.success(f"Loaded {len(document['segments'])} segments.")
                    st.write(
                        f"**Detected language:** {detection['language']} "
                        f"({detection['reliability']}, {detection['confidence']:.2f})"
                    )
                    meta = get_video_meta(video_id)
                    if meta:
                        st.subheader(meta.get("title", ""))
                        st.caption(meta.get("channelTitle", ""))

# ---------------------------------------------------------------------------
# Page: Insights
# ---------------------------------------------------------------------------
elif page == "Insights":
    st.header("Insights")
    if not st.session_state.get("video_id"):
        st.info("Load a transcript first.")
    else:
        tab_summary, tab_map, tab_keywords, tab_sentiment, tab_templates = st.tabs(
            ["Summary", "Mind Map", "Keywords", "Sentiment", "Templates"]
        )

        with tab_summary:
            length = st.selectbox("Length", [s.value for s in SummaryLength], index=1)
            if st.button("Summarize"):
                with st.spinner("Summarizing..."):
                    result = analyze("summary", _payload(length=length), provider)
                if result:
                    st.markdown(result.get(length, ""))
                    for chapter in result.get("chapters", []):
                        st.write(f"- **{chapter['title']}** ({chapter['start']:.0f}s - {chapter['end']:.0f}s)")

        with tab_map:
            if st.button("Build mind map"):
                with st.spinner("Mapping topics..."):
                    result = analyze("mindmap", _payload(), provider)
                if result:
                    _render_mind_map(result)

        with tab_keywords:
            if st.button("Extract keywords"):
                with st.spinner("Extracting keywords..."):
                    result = analyze("keywords", _payload(), provider)
                if result:
                    st.write(", ".join(topic["term"] for topic in result.get("topics", [])))
                    st.write(f"**SEO tags:** {', '.join(result.get('seoTags', []))}")
                    st.write(f"**Overall tone:** {result.get('overallTone', 'neutral')}")

        with tab_sentiment:
            if st.button("Sentiment timeline"):
                with st.spinner("Scoring sentiment..."):
                    result = analyze("sentiment", _payload(), provider)
                if result:
                    st.metric("Average score", f"{result.get('averageScore', 0.0):.2f}")
                    st.line_chart({"score": [p["score"] for p in result.get("points", [])]})

        with tab_templates:
            kind = st.selectbox("Template", [k.value for k in TemplateKind])
            if st.button("Fill template"):
                with st.spinner("Filling template..."):
                    result = analyze("templates", _payload(kind=kind), provider)
                if result:
                    st.markdown(result.get("summary", ""))
                    st.json(result.get("content", {}))

# ---------------------------------------------------------------------------
# Page: Ask Questions
# ---------------------------------------------------------------------------
elif page == "Ask Questions":
    st.header("Ask Questions")
    if not st.session_state.get("video_id"):
        st.info("Load a transcript first.")
    else:
        question = st.text_input("Your question", placeholder="What ingredients are needed?")
        if st.button("Ask", disabled=len(question) < 3):
            with st.spinner("Searching the transcript..."):
                result = analyze("qa", _payload(question=question), provider)
            if result:
                st.subheader("Answer")
                st.markdown(result.get("answer", "No answer returned."))
                sources = result.get("sources", [])
                if sources:
                    st.subheader("Sources")
                    for i, src in enumerate(sources, 1):
                        with st.expander(f"Source {i} -- {src.get('start', 0):.0f}s"):
                            if src.get("speaker"):
                                st.write(f"**Speaker:** {src['speaker']}")
                            st.write(src.get("text", ""))

# ---------------------------------------------------------------------------
# Page: Export
# ---------------------------------------------------------------------------
elif page == "Export":
    st.header("Export")
    if not st.session_state.get("video_id"):
        st.info("Load a transcript first.")
    else:
        export_format = st.selectbox("Format", [f.value for f in ExportFormat])
        if st.button("Prepare export"):
            with st.spinner("Rendering export..."):
                info = analyze("export", _payload(format=export_format), provider)
            if info:
                content = download_export(info["url"])
                if content is not None:
                    extension = {"markdown": "md", "csv": "csv", "pdf": "pdf"}[export_format]
                    st.download_button(
                        "Download",
                        data=content,
                        file_name=f"insights-{st.session_state['video_id']}.{extension}",
                    )
