"""OpenAI-backed provider using JSON-mode chat completions."""

from __future__ import annotations

from openai import OpenAI

from video_insights.providers.prompts import SYSTEM_PROMPT
from video_insights.providers.remote import RemoteProvider


class OpenAIProvider(RemoteProvider):
    name = "openai"

    def __init__(self, api_key: str, model: str = "gpt-4o-mini") -> None:
        super().__init__(model)
        self.client = OpenAI(api_key=api_key)

    def _complete(self, prompt: str) -> str:
        response = self.client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            response_format={"type": "json_object"},
        )
        return response.choices[0].message.content or ""
