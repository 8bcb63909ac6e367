"""Gemini-backed provider."""

from __future__ import annotations

from typing import Any

from video_insights.providers.prompts import SYSTEM_PROMPT
from video_insights.providers.remote import RemoteProvider


class GeminiProvider(RemoteProvider):
    name = "gemini"

    def __init__(self, api_key: str, model: str = "gemini-1.5-flash-latest") -> None:
        super().__init__(model)
        import google.generativeai as genai

        genai.configure(api_key=api_key)  # type: ignore[attr-defined]
        self.client: Any = genai.GenerativeModel(  # type: ignore[attr-defined]
            model,
            system_instruction=SYSTEM_PROMPT,
            generation_config={"response_mime_type": "application/json"},
        )

    def _complete(self, prompt: str) -> str:
        response = self.client.generate_content(prompt)
        return response.text or ""
