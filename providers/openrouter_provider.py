"""
OpenRouter vision provider — hundreds of models through one OpenAI-compatible API.

OpenRouter model IDs look like "openai/gpt-4o-mini",
"anthropic/claude-3-haiku", "google/gemini-flash-1.5", etc. Useful as a last
fallback: one key reaches several upstream vendors.
"""
from __future__ import annotations

from typing import Optional

from providers.openai_provider import OpenAIProvider

_OR_BASE_URL = "https://openrouter.ai/api/v1"


class OpenRouterProvider(OpenAIProvider):
    """Vision provider that uses any OpenRouter-hosted multimodal model."""

    name = "openrouter"
    base_url = _OR_BASE_URL
    default_headers = {
        "HTTP-Referer": "https://spicylister.app",
        "X-Title":      "SpicyLister",
    }

    def __init__(self, api_key: Optional[str], model: str = "openai/gpt-4o-mini", timeout: float = 60.0):
        super().__init__(api_key, model, timeout)

    @property
    def full_name(self) -> str:
        # "openai/gpt-4o-mini" → "openrouter/gpt-4o-mini"
        return f"openrouter/{self.model_id.split('/')[-1]}"
