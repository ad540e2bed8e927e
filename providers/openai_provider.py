"""
OpenAI vision provider — gpt-4o family via Chat Completions.

Also the base for any OpenAI-compatible gateway (see openrouter_provider.py):
subclasses only change the base URL and default headers.
"""
from __future__ import annotations

import logging
from typing import Optional, Sequence

import openai

import config
from listing import ImageInput
from providers.base import (
    ErrorKind, ProviderError, VisionProvider, error_for_status,
)

logger = logging.getLogger(__name__)


class OpenAIProvider(VisionProvider):

    name = "openai"
    base_url: Optional[str] = None
    default_headers: Optional[dict[str, str]] = None

    def __init__(self, api_key: Optional[str], model: str = "gpt-4o-mini", timeout: float = 60.0):
        super().__init__(api_key, model, timeout)
        self._client: Optional[openai.AsyncOpenAI] = None

    def _get_client(self) -> openai.AsyncOpenAI:
        if self._client is None:
            self._client = openai.AsyncOpenAI(
                api_key=self.api_key,
                base_url=self.base_url,
                default_headers=self.default_headers,
                timeout=self.timeout,
                max_retries=0,
            )
        return self._client

    async def _request(self, images: Sequence[ImageInput], instruction: str) -> str:
        content = [
            {
                "type": "image_url",
                "image_url": {
                    "url":    f"data:{img.mime_type};base64,{img.data}",
                    "detail": "high",
                },
            }
            for img in images
        ]
        content.append({"type": "text", "text": instruction})

        response = await self._get_client().chat.completions.create(
            model=self.model_id,
            max_tokens=config.MAX_OUTPUT_TOKENS,
            temperature=0,
            messages=[{"role": "user", "content": content}],
        )

        if not response.choices:
            raise ProviderError(ErrorKind.MALFORMED_BODY, "Response has no choices", self.full_name)
        choice = response.choices[0]
        raw = choice.message.content if choice.message else None
        if not raw:
            raise ProviderError(
                ErrorKind.MALFORMED_BODY,
                f"Empty message content (finish_reason={choice.finish_reason})",
                self.full_name,
            )
        return raw

    def _translate_error(self, exc: Exception) -> Optional[ProviderError]:
        if isinstance(exc, openai.APIStatusError):
            return error_for_status(exc.status_code, exc.message, self.full_name)
        if isinstance(exc, openai.APIConnectionError):
            # includes APITimeoutError
            return ProviderError(ErrorKind.NETWORK, str(exc) or type(exc).__name__, self.full_name)
        return None
