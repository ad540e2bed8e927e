"""
Anthropic vision provider — Claude models via the Messages API.

Images are sent as base64 "image" blocks followed by the instruction as a
single text block. The reply's text blocks are joined and returned as-is.
"""
from __future__ import annotations

import logging
from typing import Optional, Sequence

import anthropic

import config
from listing import ImageInput
from providers.base import (
    ErrorKind, ProviderError, VisionProvider, error_for_status,
)

logger = logging.getLogger(__name__)


class AnthropicProvider(VisionProvider):

    name = "anthropic"

    def __init__(self, api_key: Optional[str], model: str = "claude-3-5-sonnet-20241022",
                 timeout: float = 60.0):
        super().__init__(api_key, model, timeout)
        self._client: Optional[anthropic.AsyncAnthropic] = None

    def _get_client(self) -> anthropic.AsyncAnthropic:
        if self._client is None:
            self._client = anthropic.AsyncAnthropic(
                api_key=self.api_key,
                timeout=self.timeout,
                max_retries=0,      # fallback to the next provider instead
            )
        return self._client

    async def _request(self, images: Sequence[ImageInput], instruction: str) -> str:
        content = [
            {
                "type": "image",
                "source": {
                    "type": "base64",
                    "media_type": img.mime_type,
                    "data": img.data,
                },
            }
            for img in images
        ]
        content.append({"type": "text", "text": instruction})

        message = await self._get_client().messages.create(
            model=self.model_id,
            max_tokens=config.MAX_OUTPUT_TOKENS,
            messages=[{"role": "user", "content": content}],
        )

        texts = [
            block.text for block in (message.content or [])
            if getattr(block, "type", None) == "text"
        ]
        if not texts:
            raise ProviderError(
                ErrorKind.MALFORMED_BODY,
                f"No text content in response (stop_reason={message.stop_reason})",
                self.full_name,
            )
        return "".join(texts)

    def _translate_error(self, exc: Exception) -> Optional[ProviderError]:
        if isinstance(exc, anthropic.APIStatusError):
            return error_for_status(exc.status_code, exc.message, self.full_name)
        if isinstance(exc, anthropic.APIConnectionError):
            # includes APITimeoutError
            return ProviderError(ErrorKind.NETWORK, str(exc) or type(exc).__name__, self.full_name)
        return None
