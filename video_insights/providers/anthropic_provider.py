"""Claude-backed provider."""

from __future__ import annotations

from anthropic import Anthropic
from anthropic.types import TextBlock

from video_insights.providers.prompts import SYSTEM_PROMPT
from video_insights.providers.remote import RemoteProvider


class AnthropicProvider(RemoteProvider):
    name = "anthropic"

    def __init__(self, api_key: str, model: str = "claude-sonnet-4-20250514", max_tokens: int = 4096) -> None:
        super().__init__(model)
        self.client = Anthropic(api_key=api_key)
        self.max_tokens = max_tokens

    def _complete(self, prompt: str) -> str:
        response = self.client.messages.create(
            model=self.model,
            max_tokens=self.max_tokens,
            system=SYSTEM_PROMPT,
            messages=[{"role": "user", "content": prompt}],
        )
        # Only plain text is requested, so every block should be a TextBlock
        return "".join(block.text for block in response.content if isinstance(block, TextBlock))
